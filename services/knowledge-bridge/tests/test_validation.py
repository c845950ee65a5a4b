"""Tests for admissibility rules and projection."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from models import ExtractedFields, KnowledgeRow
from validation import (
    ProjectionStats,
    RejectReason,
    categories_contiguous,
    check_admissible,
    empty_values_envelope,
    project,
    to_objects,
    to_values_envelope,
)


def fields(
    ordinal: int = 1,
    category: list[str] | None = None,
    question: str = "질문",
    answer: str = "답변",
    landing_url: str = "",
    landing_button_label: str = "",
    image_url: str = "",
) -> ExtractedFields:
    return ExtractedFields(
        ordinal=ordinal,
        category=category if category is not None else ["A", "", "", "", ""],
        question=question,
        answer=answer,
        landing_url=landing_url,
        landing_button_label=landing_button_label,
        image_url=image_url,
    )


class TestCategoriesContiguous:
    @pytest.mark.parametrize("categories", [
        ["", "", "", "", ""],
        ["A", "", "", "", ""],
        ["A", "B", "", "", ""],
        ["A", "B", "C", "D", "E"],
    ])
    def test_prefix_is_valid(self, categories):
        assert categories_contiguous(categories)

    @pytest.mark.parametrize("categories", [
        ["A", "", "C", "", ""],
        ["", "B", "", "", ""],
        ["A", "", "", "B", ""],
        ["A", "B", "", "D", ""],
        ["", "", "", "", "E"],
    ])
    def test_gap_is_invalid(self, categories):
        assert not categories_contiguous(categories)

    def test_whitespace_counts_as_empty(self):
        assert not categories_contiguous(["A", "  ", "B", "", ""])
        assert categories_contiguous(["A", " ", "", "", ""])


class TestCheckAdmissible:
    def test_valid(self):
        assert check_admissible(fields()) is None

    def test_missing_question(self):
        assert check_admissible(fields(question="")) is RejectReason.MISSING_QUESTION_OR_ANSWER

    def test_missing_answer(self):
        assert check_admissible(fields(answer="")) is RejectReason.MISSING_QUESTION_OR_ANSWER

    def test_question_length_boundary(self):
        assert check_admissible(fields(question="q" * 50)) is None
        assert check_admissible(fields(question="q" * 51)) is RejectReason.QUESTION_TOO_LONG

    def test_question_length_counts_characters(self):
        assert check_admissible(fields(question="가" * 50)) is None

    def test_answer_limit_with_landing_url(self):
        url = "https://example.com"
        assert check_admissible(fields(answer="a" * 400, landing_url=url)) is None
        assert check_admissible(fields(answer="a" * 401, landing_url=url)) is RejectReason.ANSWER_TOO_LONG

    def test_answer_limit_without_landing_url(self):
        assert check_admissible(fields(answer="a" * 401)) is None
        assert check_admissible(fields(answer="a" * 1000)) is None
        assert check_admissible(fields(answer="a" * 1001)) is RejectReason.ANSWER_TOO_LONG

    def test_blank_landing_url_uses_long_limit(self):
        assert check_admissible(fields(answer="a" * 401, landing_url="   ")) is None

    def test_category_gap(self):
        record = fields(category=["A", "", "C", "", ""])
        assert check_admissible(record) is RejectReason.CATEGORY_GAP

    def test_short_circuit_order(self):
        record = fields(question="q" * 51, answer="a" * 2000, category=["", "B", "", "", ""])
        assert check_admissible(record) is RejectReason.QUESTION_TOO_LONG


class TestProject:
    def test_end_to_end_batch(self):
        batch = [
            fields(ordinal=1, answer="a" * 30, landing_url="https://example.com"),
            fields(ordinal=2, question=""),
            fields(ordinal=3, category=["X", "", "Y", "", ""]),
        ]
        rows = project(batch)
        assert len(rows) == 1
        assert rows[0].faq_no == "1"

    def test_ordinals_not_renumbered(self):
        rows = project([fields(ordinal=1, question=""), fields(ordinal=2)])
        assert [row.faq_no for row in rows] == ["2"]

    def test_order_preserved(self):
        batch = [fields(ordinal=i + 1, question=f"q{i}") for i in range(5)]
        batch[2] = fields(ordinal=3, question="")
        rows = project(batch)
        assert [row.question for row in rows] == ["q0", "q1", "q3", "q4"]

    def test_idempotent(self):
        batch = [
            fields(ordinal=1, landing_button_label="Go", image_url="https://img"),
            fields(ordinal=2, answer=""),
            fields(ordinal=3, category=["A", "B", "C", "", ""]),
        ]
        first = project(batch)
        second = project([row.to_fields() for row in first])
        assert second == first

    def test_empty_input(self):
        assert project([]) == []

    def test_observer_receives_index_and_reason(self):
        seen = []
        project(
            [fields(), fields(question=""), fields(category=["", "B", "", "", ""])],
            on_reject=lambda index, reason: seen.append((index, reason)),
        )
        assert seen == [
            (1, RejectReason.MISSING_QUESTION_OR_ANSWER),
            (2, RejectReason.CATEGORY_GAP),
        ]

    def test_projection_stats(self):
        stats = ProjectionStats()
        project(
            [fields(question=""), fields(answer=""), fields(question="q" * 60), fields()],
            on_reject=stats,
        )
        assert stats.total_rejected == 3
        assert stats.rejected[RejectReason.MISSING_QUESTION_OR_ANSWER] == 2
        assert stats.rejected[RejectReason.QUESTION_TOO_LONG] == 1
        assert stats.rejected_indices == [0, 1, 2]

    def test_failing_observer_does_not_abort(self):
        def boom(index, reason):
            raise RuntimeError("observer broke")

        rows = project([fields(question=""), fields(ordinal=2)], on_reject=boom)
        assert [row.faq_no for row in rows] == ["2"]

    def test_rejection_logged(self, caplog):
        with caplog.at_level("WARNING"):
            project([fields(question="q" * 51)])
        assert "question too long" in caplog.text

    def test_projection_is_pure_renaming(self):
        record = fields(
            ordinal=7,
            category=["A", "B", "", "", ""],
            question="Q",
            answer="ans",
            landing_url="https://l",
            landing_button_label="Go",
            image_url="https://i",
        )
        (row,) = project([record])
        assert row == KnowledgeRow.from_fields(record)
        assert row.to_fields() == record


class TestEncoding:
    def _row(self) -> KnowledgeRow:
        return KnowledgeRow.from_fields(fields(
            ordinal=1,
            category=["온보딩", "카페", "", "", ""],
            question="카페 가입 도와줘",
            answer="승인됩니다.",
            landing_url="https://cafe.naver.com/linkus16",
            landing_button_label="바로가기",
            image_url="",
        ))

    def test_values_envelope(self):
        envelope = to_values_envelope([self._row()])
        assert envelope.schema_type == "1.0"
        assert envelope.values == [[
            "1", "온보딩", "카페", "", "", "",
            "카페 가입 도와줘", "승인됩니다.", "https://cafe.naver.com/linkus16", "",
        ]]
        assert len(envelope.values[0]) == 10

    def test_objects_keys_in_order(self):
        (obj,) = to_objects([self._row()])
        assert list(obj) == [
            "FAQ_No", "Category1", "Category2", "Category3", "Category4", "Category5",
            "Question", "Answer", "Landing URL", "Landing URL Button Name", "Image Info (URL)",
        ]
        assert obj["Landing URL Button Name"] == "바로가기"
        assert obj["Category5"] == ""

    def test_encodings_agree(self):
        row = self._row()
        (obj,) = to_objects([row])
        (values,) = to_values_envelope([row]).values
        assert values == [
            obj["FAQ_No"], obj["Category1"], obj["Category2"], obj["Category3"],
            obj["Category4"], obj["Category5"], obj["Question"], obj["Answer"],
            obj["Landing URL"], obj["Image Info (URL)"],
        ]

    def test_empty_envelopes(self):
        assert empty_values_envelope().model_dump() == {"values": [], "schema_type": "1.0"}
        assert to_values_envelope([]).model_dump() == {"values": [], "schema_type": "1.0"}
        assert to_objects([]) == []
