"""
Offline console demo: runs the booking funnel and admin dashboard in the terminal.

Uses the real catalog, ledger, funnel state machine and reporting engine.
No network calls; the AI diagnosis step falls back to its offline message
unless OPENAI_API_KEY is set.

Usage:
    python console_demo.py
    python console_demo.py --scenario booking
    python console_demo.py --scenario blocked
"""

import argparse
import asyncio
from datetime import date, timedelta
from typing import Optional

from swiftfix.app import AppState
from swiftfix.config import settings
from swiftfix.funnel.booking_funnel import BookingFunnel
from swiftfix.funnel.state_machine import FunnelStep
from swiftfix.schemas.booking_schema import BookingStatus

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


def _next_weekday(offset_days: int = 1) -> str:
    day = date.today() + timedelta(days=offset_days)
    while day.weekday() == 6:
        day += timedelta(days=1)
    return day.isoformat()


class ConsoleSession:
    """Walks one customer through the funnel, then opens the dashboard."""

    def __init__(self, state: Optional[AppState] = None) -> None:
        self.state = state or AppState()
        self.funnel: BookingFunnel = self.state.new_funnel()

    def shop_say(self, text: str) -> None:
        print(f"{GREEN}{BOLD}[{settings.shop.name}]{RESET} {GREEN}{text}{RESET}")

    def customer_does(self, text: str) -> None:
        print(f"\n{BLUE}[Customer] {RESET}{text}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {title}{RESET}")
        print(f"{BOLD}  Shop: {settings.shop.name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    # ------------------------------------------------------------------ #
    # Scripted scenarios
    # ------------------------------------------------------------------ #

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        handlers = {
            "booking": self._scenario_booking,
            "blocked": self._scenario_blocked,
        }
        handler = handlers.get(scenario)
        if handler is None:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self._banner(f"BOOKING FUNNEL - Scenario: {scenario}")
        handler()
        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Scenario '{scenario}' complete.{RESET}")
        print(f"{DIM}  Step trace: {' -> '.join(self.funnel.state_machine.get_step_trace())}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        self._show_dashboard()

    def _scenario_booking(self) -> None:
        f = self.funnel
        self.customer_does("Picks Apple")
        f.select_brand("Apple")
        self.customer_does("Picks iPhone 15")
        f.select_model("ip15")
        self.customer_does("Picks Battery Replacement")
        f.select_issue("battery")
        self.system_log(f"Step: {f.step.value}")

        appointment = _next_weekday(3)
        self.customer_does(f"Chooses {appointment} at 10:00 AM")
        f.choose_date(appointment)
        f.choose_time("10:00 AM")
        f.set_contact(name="Jane Doe", phone="555-1234", email="jane@example.com")
        self.system_log(f"Continue enabled: {f.can_continue()}")
        f.confirm_schedule()
        self.shop_say(f"Please confirm: {f.confirmation_summary()}")
        self._submit()

    def _scenario_blocked(self) -> None:
        closed = _next_weekday(2)
        self.state.catalog.block_date(closed)
        self.system_log(f"Admin blocked {closed}")

        f = self.funnel
        f.select_brand("Samsung")
        f.skip_model()
        f.select_issue("screen")
        self.customer_does(f"Chooses {closed}")
        if not f.choose_date(closed):
            self.shop_say(f.date_error or "")
        self.system_log(f"Continue enabled: {f.can_continue()}")

        reopened = _next_weekday(5)
        self.customer_does(f"Chooses {reopened} at 02:00 PM instead")
        f.choose_date(reopened)
        f.choose_time("02:00 PM")
        f.set_contact(name="Carlos Reyes", phone="0917 555 0101")
        f.confirm_schedule()
        self._submit()

    def _submit(self) -> None:
        self.system_log("Submitting...")
        booking = asyncio.run(self.funnel.submit())
        if booking is None:
            print(f"{RED}Submission did not complete{RESET}")
            return
        first_name = booking.customer_name.split(" ")[0]
        self.shop_say(
            f"Booking Confirmed! Thanks {first_name}. Reference {booking.id}. "
            f"See you on {booking.appointment_date} at {booking.appointment_time}."
        )

    # ------------------------------------------------------------------ #
    # Interactive mode
    # ------------------------------------------------------------------ #

    def _ask(self, prompt: str) -> str:
        return input(f"{BLUE}[Customer] {prompt}{RESET} ").strip()

    def _pick(self, prompt: str, options: list[str]) -> Optional[int]:
        for index, option in enumerate(options, start=1):
            print(f"  {index}. {option}")
        raw = self._ask(f"{prompt} (number, 'b' back, 'q' quit):")
        if raw.lower() == "q":
            self.funnel.cancel()
            return None
        if raw.lower() == "b":
            self.funnel.back()
            return None
        if raw.isdigit() and 1 <= int(raw) <= len(options):
            return int(raw) - 1
        print(f"{YELLOW}Please enter a number from the list.{RESET}")
        return None

    def run(self) -> None:
        self._banner("BOOKING FUNNEL - Console Demo")
        f = self.funnel
        while f.is_open and not f.state_machine.is_terminal():
            self.system_log(f"Step: {f.step.value}")
            if f.step == FunnelStep.BRAND:
                brands = f.brand_choices()
                choice = self._pick("Brand", [b.value for b in brands])
                if choice is not None:
                    f.select_brand(brands[choice])
            elif f.step == FunnelStep.MODEL:
                models = f.model_choices()
                choice = self._pick("Model", [m.name for m in models] + ["Skip"])
                if choice is not None:
                    if choice == len(models):
                        f.skip_model()
                    else:
                        f.select_model(models[choice])
            elif f.step == FunnelStep.ISSUE:
                issues = f.issue_choices()
                choice = self._pick("Issue", [f"{i.name} ({i.price_range})" for i in issues])
                if choice is not None:
                    f.select_issue(issues[choice])
            elif f.step == FunnelStep.SCHEDULE:
                self._interactive_schedule()
            elif f.step == FunnelStep.CONFIRM:
                self.shop_say(str(f.confirmation_summary()))
                answer = self._ask("Confirm booking? (y / b back / q quit):").lower()
                if answer == "y":
                    self._submit()
                elif answer == "b":
                    f.back()
                elif answer == "q":
                    f.cancel()
        if not f.is_open and f.booking is None:
            print(f"\n{DIM}Booking cancelled.{RESET}")
            return
        self._show_dashboard()

    def _interactive_schedule(self) -> None:
        f = self.funnel
        raw_date = self._ask("Appointment date (YYYY-MM-DD, 'b' back):")
        if raw_date.lower() == "b":
            f.back()
            return
        if not f.choose_date(raw_date):
            print(f"{RED}{f.date_error}{RESET}")
            return
        slots = f.time_choices()
        if not slots:
            print(f"{YELLOW}No available times for this day.{RESET}")
            return
        choice = self._pick("Time", [s.time for s in slots])
        if choice is None:
            return
        f.choose_time(slots[choice].time)
        f.set_contact(
            name=self._ask("Full name:"),
            phone=self._ask("Phone:"),
            email=self._ask("Email (optional):"),
        )
        if not f.confirm_schedule():
            print(f"{YELLOW}Name, phone, date and time are all required.{RESET}")

    # ------------------------------------------------------------------ #
    # Dashboard
    # ------------------------------------------------------------------ #

    def _show_dashboard(self) -> None:
        dashboard = self.state.new_dashboard()
        if not dashboard.login(settings.shop.admin_password):
            print(f"{RED}Admin login failed{RESET}")
            return
        page = dashboard.bookings_page()
        for booking in page.items:
            self.system_log(f"{booking.id}  {booking.customer_name}  {booking.status.value}")
            actions = dashboard.status_actions(booking)
            if BookingStatus.IN_PROGRESS in actions:
                dashboard.update_status(booking.id, BookingStatus.IN_PROGRESS)
                self.system_log(f"{booking.id} -> {BookingStatus.IN_PROGRESS.value}")
        print()
        print(dashboard.report_text())


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline console demo")
    parser.add_argument(
        "--scenario",
        choices=["booking", "blocked"],
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    args = parser.parse_args()

    session = ConsoleSession()
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
