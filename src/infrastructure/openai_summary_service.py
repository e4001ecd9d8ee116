"""Monthly summary generation through the OpenAI Responses API."""

import json
from collections.abc import Mapping
from typing import Any

from openai import OpenAI, OpenAIError

from src.application.ports.summary_service import SummaryServicePort
from src.domain.errors import SummaryServiceError
from src.domain.models import SummaryEntry, SummaryRequest, SummaryResult
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import to_storage_string

SUMMARY_RESPONSE_FORMAT: dict[str, Any] = {
    "type": "json_schema",
    "name": "monthly_loan_summary",
    "schema": {
        "type": "object",
        "properties": {
            "summary": {"type": "string"},
            "suggestions": {
                "type": "array",
                "items": {"type": "string"},
            },
        },
        "required": ["summary", "suggestions"],
        "additionalProperties": False,
    },
    "strict": True,
}

INSTRUCTIONS_TEMPLATE = (
    "You are a financial advisor specialized in managing a cooperative "
    "loan fund. Write a concise monthly summary of the fund's lending "
    "activity and, only when the data clearly calls for it, actionable "
    "suggestions to improve cash flow. Always answer in {language}."
)


def build_user_input(request: SummaryRequest) -> str:
    """Render the month's data as the prompt body.

    Args:
        request: Structured month data.

    Returns:
        str: Plain-text listing of income, expenses, month totals and
            capital.
    """
    status = "closed" if request.is_closed else "open"
    lines = [f"Month: {request.period.key} ({status})", "", "Income:"]
    lines.extend(_entry_lines(request.income))
    lines.extend(["", "Expenses:"])
    lines.extend(_entry_lines(request.expenses))
    lines.extend(
        [
            "",
            f"Opening balance: {to_storage_string(request.initial_balance)}",
            f"Total income: {to_storage_string(request.total_income)}",
            f"Total expenses: {to_storage_string(request.total_expenses)}",
        ]
    )
    if request.is_closed:
        lines.append(
            "The month is closed: these totals are the frozen closing "
            "figures and take precedence over the entries listed above."
        )
    lines.extend(["", f"Current capital: {to_storage_string(request.capital)}"])
    if request.benchmarks:
        lines.extend(
            ["", f"Consider these financial benchmarks: {request.benchmarks}"]
        )
    return "\n".join(lines)


def _entry_lines(entries: list[SummaryEntry]) -> list[str]:
    if not entries:
        return ["  - (none)"]
    return [
        f"  - Date: {entry.date.isoformat()}, "
        f"Amount: {to_storage_string(entry.amount)}, "
        f"Description: {entry.description}"
        for entry in entries
    ]


def _extract_response_json(resp: Any) -> Mapping[str, Any]:
    text: str | None = getattr(resp, "output_text", None)
    if not text or not isinstance(text, str):
        raise SummaryServiceError("The summary service returned no text")
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SummaryServiceError(
            "The summary service did not return valid JSON"
        ) from exc
    if not isinstance(decoded, Mapping):
        raise SummaryServiceError("The summary service returned a non-object")
    return decoded


class OpenAISummaryService(SummaryServicePort):
    """Summary service backed by the OpenAI Responses API."""

    def __init__(
        self,
        client: OpenAI | None = None,
        model: str = "gpt-4o-mini",
        language: str = "Spanish",
        logger=None,
    ) -> None:
        """Initialize the service.

        Args:
            client: Optional preconfigured client; created lazily otherwise.
            model: Model name sent with every request.
            language: Language the summary must be written in.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._client = client
        self._model = model
        self._language = language
        self._logger = logger or get_app_logger()

    def generate(self, request: SummaryRequest) -> SummaryResult:
        """Request a summary for one month.

        Raises:
            SummaryServiceError: If the API call fails or its output does
                not match the expected shape.
        """
        self._logger.info(
            f"Requesting summary for {request.period.key} "
            f"({len(request.income)} income, {len(request.expenses)} expenses)"
        )
        try:
            client = self._client or OpenAI()
            resp = client.responses.create(
                model=self._model,
                instructions=INSTRUCTIONS_TEMPLATE.format(
                    language=self._language
                ),
                input=build_user_input(request),
                text={"format": SUMMARY_RESPONSE_FORMAT},
            )
        except OpenAIError as exc:
            raise SummaryServiceError(
                f"Summary request failed: {exc}"
            ) from exc

        decoded = _extract_response_json(resp)
        summary = decoded.get("summary")
        suggestions = decoded.get("suggestions", [])
        if not isinstance(summary, str) or not isinstance(suggestions, list):
            raise SummaryServiceError(
                "The summary service returned an unexpected shape"
            )
        return SummaryResult(
            summary=summary.strip(),
            suggestions=[str(item).strip() for item in suggestions if item],
        )


__all__ = [
    "OpenAISummaryService",
    "SUMMARY_RESPONSE_FORMAT",
    "build_user_input",
]
