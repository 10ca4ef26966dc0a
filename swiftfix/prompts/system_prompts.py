"""
System prompts for the AI diagnosis collaborator.

The shop name comes from configuration and the service list from the live
catalog, so edits made in the dashboard are reflected in what the model
is allowed to recommend.
"""

from typing import Iterable

from swiftfix.config import settings
from swiftfix.schemas.catalog_schema import RepairIssue

DIAGNOSIS_RESPONSE_RULES = """
Response requirements:
1. Be empathetic but professional and concise (max 2 sentences).
2. Clearly state the likely issue.
3. Recommend exactly one of the services listed above, using its exact name.
"""


def build_diagnosis_prompt(services: Iterable[RepairIssue], shop_name: str = "") -> str:
    """Build the technician persona prompt listing the services to choose from."""
    lines = [
        f'You are an expert mobile repair technician at "{shop_name or settings.shop.name}".',
        "Your goal is to analyze the customer's problem description and suggest the most",
        "likely repair service needed from this list:",
    ]
    for service in services:
        detail = f" ({service.description})" if service.description else ""
        lines.append(f"- {service.name}{detail}")
    return "\n".join(lines) + "\n" + DIAGNOSIS_RESPONSE_RULES
