"""
AI diagnosis collaborator.

Turns a customer's free-text problem description into a short repair
suggestion via the OpenAI chat API. The call never raises to its caller:
a missing credential, a provider error or an empty answer all degrade
to a fixed apologetic message.
"""

import logging
from typing import Any, Awaitable, Callable, Iterable, Optional

from openai import AsyncOpenAI

from swiftfix.config import settings
from swiftfix.prompts.system_prompts import build_diagnosis_prompt
from swiftfix.schemas.catalog_schema import RepairIssue
from swiftfix.tools.catalog import GENERAL_DIAGNOSIS_ID, CatalogStore

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = (
    "AI diagnosis is currently unavailable. Please select 'General Diagnosis' or contact us."
)
EMPTY_RESPONSE_MESSAGE = "Could not generate a diagnosis. Please try again."
CONNECTION_ERROR_MESSAGE = (
    "I'm having trouble connecting to the diagnostic server. Please select a service manually."
)

DiagnoseFn = Callable[[str, list[RepairIssue]], Awaitable[str]]


def _build_client() -> Optional[AsyncOpenAI]:
    if not settings.model.api_key:
        logger.warning("No OPENAI_API_KEY configured; AI diagnosis disabled")
        return None
    return AsyncOpenAI(api_key=settings.model.api_key)


async def diagnose_issue(
    description: str,
    services: Iterable[RepairIssue] = (),
    client: Optional[Any] = None,
) -> str:
    """Ask the model which repair the description most likely needs.

    ``client`` is anything exposing ``chat.completions.create`` as a
    coroutine; when omitted one is built from configuration.
    """
    client = client if client is not None else _build_client()
    if client is None:
        return UNAVAILABLE_MESSAGE

    try:
        response = await client.chat.completions.create(
            model=settings.model.llm_model,
            temperature=settings.model.llm_temperature,
            max_tokens=settings.model.max_output_tokens,
            messages=[
                {"role": "system", "content": build_diagnosis_prompt(services)},
                {"role": "user", "content": description},
            ],
        )
        text = response.choices[0].message.content if response.choices else None
    except Exception:
        logger.exception("Diagnosis request failed")
        return CONNECTION_ERROR_MESSAGE

    if not text or not text.strip():
        return EMPTY_RESPONSE_MESSAGE
    return text.strip()


def match_issue(diagnosis: str, services: list[RepairIssue]) -> Optional[RepairIssue]:
    """Pick the service a diagnosis recommends.

    The service named last in the text wins, so "not a Screen Replacement,
    you need a Battery Replacement" picks the battery. With no name in the
    text it falls back to General Diagnosis, then to the first service.
    """
    lowered = diagnosis.lower()
    best: Optional[RepairIssue] = None
    best_at = -1
    for service in services:
        at = lowered.rfind(service.name.lower())
        if at > best_at:
            best, best_at = service, at
    if best is not None:
        return best
    for service in services:
        if service.id == GENERAL_DIAGNOSIS_ID:
            return service
    return services[0] if services else None


class DiagnosisAssistant:
    """
    Single-flight wrapper around the diagnosis call.

    While a request is outstanding ``busy`` is True and further calls are
    refused. The flag clears when the request finishes, whatever its outcome.
    """

    def __init__(self, catalog: CatalogStore, diagnose: Optional[DiagnoseFn] = None) -> None:
        self._catalog = catalog
        self._diagnose: DiagnoseFn = diagnose or diagnose_issue
        self._busy = False
        self.result: Optional[str] = None

    @property
    def busy(self) -> bool:
        return self._busy

    async def analyze(self, description: str) -> Optional[str]:
        """Run one diagnosis. Returns None when busy or given a blank description."""
        if self._busy or not description.strip():
            return None
        self._busy = True
        try:
            self.result = await self._diagnose(description, self._catalog.services)
        finally:
            self._busy = False
        return self.result

    def suggested_issue(self) -> Optional[RepairIssue]:
        if self.result is None:
            return None
        return match_issue(self.result, self._catalog.services)
