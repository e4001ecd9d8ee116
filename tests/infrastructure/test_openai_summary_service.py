"""Tests for the OpenAI-backed summary service."""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest

from src.domain.errors import SummaryServiceError
from src.domain.models import Period, SummaryEntry, SummaryRequest
from src.infrastructure.openai_summary_service import (
    SUMMARY_RESPONSE_FORMAT,
    OpenAISummaryService,
    build_user_input,
)


def _request(benchmarks=None) -> SummaryRequest:
    return SummaryRequest(
        period=Period(2024, 2),
        income=[SummaryEntry(date(2024, 2, 5), Decimal("75.50"), "Interest")],
        expenses=[],
        capital=Decimal("1050.50"),
        benchmarks=benchmarks,
    )


def _client(output_text):
    client = MagicMock()
    client.responses.create.return_value = SimpleNamespace(
        output_text=output_text
    )
    return client


def test_build_user_input_lists_entries_and_capital():
    prompt = build_user_input(_request(benchmarks="CDT 11%"))

    assert "Month: 2024-02" in prompt
    assert "Amount: 75.50, Description: Interest" in prompt
    assert "(none)" in prompt
    assert "Current capital: 1050.50" in prompt
    assert "CDT 11%" in prompt
    assert "(open)" in prompt


def test_build_user_input_flags_closed_month_totals():
    request = SummaryRequest(
        period=Period(2024, 2),
        income=[],
        expenses=[SummaryEntry(date(2024, 2, 21), Decimal("50"), "Late fee")],
        capital=Decimal("1300"),
        initial_balance=Decimal("1000"),
        total_income=Decimal("500"),
        total_expenses=Decimal("200"),
        is_closed=True,
    )

    prompt = build_user_input(request)

    assert "Month: 2024-02 (closed)" in prompt
    assert "Opening balance: 1000" in prompt
    assert "Total income: 500" in prompt
    assert "Total expenses: 200" in prompt
    assert "frozen closing figures" in prompt


def test_generate_parses_structured_output():
    client = _client('{"summary": " Solid month. ", "suggestions": ["Lend"]}')
    service = OpenAISummaryService(
        client=client,
        model="gpt-test",
        language="English",
        logger=MagicMock(),
    )

    result = service.generate(_request())

    assert result.summary == "Solid month."
    assert result.suggestions == ["Lend"]
    kwargs = client.responses.create.call_args.kwargs
    assert kwargs["model"] == "gpt-test"
    assert "English" in kwargs["instructions"]
    assert kwargs["text"] == {"format": SUMMARY_RESPONSE_FORMAT}


@pytest.mark.parametrize(
    "output_text",
    [None, "", "not json", "[]", '{"summary": 3, "suggestions": []}'],
)
def test_malformed_output_raises_summary_error(output_text):
    service = OpenAISummaryService(
        client=_client(output_text),
        logger=MagicMock(),
    )

    with pytest.raises(SummaryServiceError):
        service.generate(_request())


def test_api_errors_are_wrapped():
    client = MagicMock()
    client.responses.create.side_effect = openai.APIConnectionError(
        request=httpx.Request("POST", "https://api.openai.com/v1/responses")
    )
    service = OpenAISummaryService(client=client, logger=MagicMock())

    with pytest.raises(SummaryServiceError):
        service.generate(_request())
