"""
SwiftFix booking entry point.

Usage:
    Console funnel:   python main.py console
    Scripted demo:    python main.py demo [booking|blocked]
    AI diagnosis:     python main.py diagnose "my screen flickers after a drop"
"""

import asyncio
import logging
import sys

from swiftfix.config import settings

logger = logging.getLogger(__name__)


def _run_console_mode() -> None:
    from console_demo import ConsoleSession

    ConsoleSession().run()


def _run_demo_mode(scenario: str) -> None:
    from console_demo import ConsoleSession

    ConsoleSession().run_scenario(scenario)


def _run_diagnosis(description: str) -> None:
    """Ask the diagnosis collaborator and show which service it maps to."""
    from swiftfix.app import AppState

    state = AppState()
    assistant = state.new_diagnosis()
    result = asyncio.run(assistant.analyze(description))
    if result is None:
        print("Please describe the problem first.")
        return
    print(result)
    suggested = assistant.suggested_issue()
    if suggested is not None:
        print(f"Suggested service: {suggested.name} ({suggested.price_range})")


if __name__ == "__main__":
    logger.debug("Starting %s", settings.shop.name)
    command = sys.argv[1] if len(sys.argv) > 1 else "console"
    if command == "demo":
        _run_demo_mode(sys.argv[2] if len(sys.argv) > 2 else "booking")
    elif command == "diagnose":
        _run_diagnosis(" ".join(sys.argv[2:]))
    else:
        _run_console_mode()
