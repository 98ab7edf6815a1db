"""Tests for QA response shape handling."""

import pytest

from domain import extract_answer
from domain.answer_extractor import NO_DATA_ANSWER, UNRECOGNIZED_LABEL


class TestExtractAnswer:
    @pytest.mark.parametrize(
        "payload",
        [
            "Refunds within 30 days.",
            {"text": "Refunds within 30 days."},
            {"answer": "Refunds within 30 days."},
            {"result": "Refunds within 30 days."},
            [{"text": "Refunds within 30 days."}, {"text": "ignored"}],
            [{"answer": "Refunds within 30 days."}],
            {"data": {"text": "Refunds within 30 days."}},
            {"data": {"answer": "Refunds within 30 days."}},
        ],
    )
    def test_known_shapes(self, payload):
        assert extract_answer(payload) == "Refunds within 30 days."

    def test_text_wins_over_answer(self):
        assert extract_answer({"answer": "second", "text": "first"}) == "first"

    @pytest.mark.parametrize("payload", [None, ""])
    def test_empty_payload(self, payload):
        assert extract_answer(payload) == NO_DATA_ANSWER

    def test_unrecognized_payload_is_labeled(self):
        answer = extract_answer({"chatId": "c-1", "sourceDocuments": []})

        assert answer.startswith(UNRECOGNIZED_LABEL)
        assert '"chatId": "c-1"' in answer
        assert answer.endswith("```")

    def test_unrecognized_list_is_labeled(self):
        assert extract_answer([{"id": 1}]).startswith(UNRECOGNIZED_LABEL)

    @pytest.mark.parametrize("payload", [{}, []])
    def test_empty_containers_are_labeled(self, payload):
        assert extract_answer(payload).startswith(UNRECOGNIZED_LABEL)
