"""Tests for search filters, log scrubbing and domain date rules."""

from datetime import date

import pytest

from hr_api.models.domain.contract import ContractStatus, compute_contract_status
from hr_api.models.domain.leave import is_within_contract
from hr_api.utils.secure_logging import MAX_MESSAGE_LENGTH, sanitize_exception_message
from hr_api.utils.validation import escape_like_wildcards, normalize_search


class TestSearchFilters:
    """Free-text search normalization."""

    def test_like_wildcard_escaping(self) -> None:
        assert escape_like_wildcards("test%value") == r"test\%value"
        assert escape_like_wildcards("test_value") == r"test\_value"
        assert escape_like_wildcards("test\\value") == r"test\\value"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty_search_is_none(self, raw) -> None:
        assert normalize_search(raw) is None

    def test_search_is_trimmed_and_truncated(self) -> None:
        assert normalize_search("  ada  ") == "ada"
        assert len(normalize_search("A" * 1000)) == 100


class TestLogScrubbing:
    """Exception messages are scrubbed before they reach production logs."""

    def test_connection_string_removed(self) -> None:
        error = ConnectionError("could not connect to postgresql://hr:secret@db:5432/hr")

        message = sanitize_exception_message(error)

        assert "secret" not in message
        assert "[URL]" in message

    def test_email_removed(self) -> None:
        error = ValueError("duplicate key value jane.doe@example.com")

        assert "jane.doe@example.com" not in sanitize_exception_message(error)

    def test_long_message_truncated(self) -> None:
        message = sanitize_exception_message(RuntimeError("word " * 200))

        assert len(message) == MAX_MESSAGE_LENGTH
        assert message.endswith("...")


class TestDateRules:
    """Contract status on creation and leave containment."""

    def test_contract_ended_before_today_is_ended(self) -> None:
        today = date(2024, 3, 1)

        assert compute_contract_status(date(2024, 2, 29), today) == ContractStatus.ENDED
        assert compute_contract_status(today, today) == ContractStatus.ACTIVE
        assert compute_contract_status(None, today) == ContractStatus.ACTIVE

    @pytest.mark.parametrize(
        ("start", "end", "expected"),
        [
            (date(2024, 1, 1), date(2024, 12, 31), True),
            (date(2023, 12, 31), date(2024, 1, 5), False),
            (date(2024, 12, 30), date(2025, 1, 2), False),
        ],
    )
    def test_leave_within_bounded_contract(self, start, end, expected) -> None:
        assert is_within_contract(start, end, date(2024, 1, 1), date(2024, 12, 31)) is expected

    def test_open_ended_contract_has_no_upper_bound(self) -> None:
        assert is_within_contract(date(2090, 1, 1), date(2090, 2, 1), date(2024, 1, 1), None)
