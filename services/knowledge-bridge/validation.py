"""Admissibility rules and projection onto the Kakao knowledge schema.

The Kakao knowledge upload rejects a whole file on a single bad row, so rows
that break a rule are dropped here instead of being corrected:

1. Question and Answer are both required.
2. Question is at most 50 characters.
3. Answer is at most 1000 characters, or 400 when a Landing URL is set.
4. Categories are filled from Category1 onward with no gaps
   ("A", "B", "", "", "" is fine; "A", "", "B", "", "" is not).

Projection never raises. Rejections are logged and reported to an optional
``on_reject(index, reason)`` observer.
"""

import logging
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from enum import Enum

from models import ExtractedFields, KnowledgeRow, KnowledgeValuesResponse

logger = logging.getLogger(__name__)

QUESTION_MAX_LENGTH = 50
ANSWER_MAX_LENGTH = 1000
ANSWER_MAX_LENGTH_WITH_LANDING_URL = 400


class RejectReason(str, Enum):
    MISSING_QUESTION_OR_ANSWER = "missing_question_or_answer"
    QUESTION_TOO_LONG = "question_too_long"
    ANSWER_TOO_LONG = "answer_too_long"
    CATEGORY_GAP = "category_gap"


RejectObserver = Callable[[int, RejectReason], None]


class ProjectionStats:
    """Rejection observer that tallies rejected records per reason."""

    def __init__(self):
        self.rejected: Counter[RejectReason] = Counter()
        self.rejected_indices: list[int] = []

    def __call__(self, index: int, reason: RejectReason) -> None:
        self.rejected[reason] += 1
        self.rejected_indices.append(index)

    @property
    def total_rejected(self) -> int:
        return sum(self.rejected.values())


def categories_contiguous(categories: Sequence[str]) -> bool:
    """True when the filled category slots are exactly the first k slots.

    Whitespace-only values count as empty.
    """
    filled = [i for i, value in enumerate(categories) if value and value.strip()]
    return filled == list(range(len(filled)))


def answer_limit(landing_url: str) -> int:
    if landing_url and landing_url.strip():
        return ANSWER_MAX_LENGTH_WITH_LANDING_URL
    return ANSWER_MAX_LENGTH


def check_admissible(fields: ExtractedFields) -> RejectReason | None:
    """Return the first rule the record breaks, or None if it is admissible."""
    if not fields.question or not fields.answer:
        return RejectReason.MISSING_QUESTION_OR_ANSWER
    if len(fields.question) > QUESTION_MAX_LENGTH:
        return RejectReason.QUESTION_TOO_LONG
    if len(fields.answer) > answer_limit(fields.landing_url):
        return RejectReason.ANSWER_TOO_LONG
    if not categories_contiguous(fields.category):
        return RejectReason.CATEGORY_GAP
    return None


def project(
    fields: Iterable[ExtractedFields],
    on_reject: RejectObserver | None = None,
) -> list[KnowledgeRow]:
    """Keep admissible records, in input order, as KnowledgeRows.

    Ordinals are carried over unchanged; surviving rows are not re-numbered.
    """
    rows: list[KnowledgeRow] = []
    rejected = 0

    for index, item in enumerate(fields):
        reason = check_admissible(item)
        if reason is None:
            rows.append(KnowledgeRow.from_fields(item))
            continue

        rejected += 1
        _log_rejection(index, item, reason)
        if on_reject is not None:
            try:
                on_reject(index, reason)
            except Exception:
                logger.exception("Rejection observer failed for record %d", index)

    logger.info("Projection complete: %d kept, %d rejected", len(rows), rejected)
    if not rows and rejected:
        logger.warning("All %d records were filtered out; check the validation rules", rejected)

    return rows


def to_values_envelope(rows: Iterable[KnowledgeRow]) -> KnowledgeValuesResponse:
    return KnowledgeValuesResponse(values=[row.to_values() for row in rows])


def empty_values_envelope() -> KnowledgeValuesResponse:
    return KnowledgeValuesResponse(values=[])


def to_objects(rows: Iterable[KnowledgeRow]) -> list[dict[str, str]]:
    """Keyed-object encoding, using the Kakao column names as keys."""
    return [row.model_dump(by_alias=True) for row in rows]


def _log_rejection(index: int, fields: ExtractedFields, reason: RejectReason) -> None:
    if reason is RejectReason.MISSING_QUESTION_OR_ANSWER:
        logger.warning("Record %d skipped: missing question or answer", index)
    elif reason is RejectReason.QUESTION_TOO_LONG:
        logger.warning(
            "Record %d skipped: question too long (%d chars): %s...",
            index, len(fields.question), fields.question[:30],
        )
    elif reason is RejectReason.ANSWER_TOO_LONG:
        logger.warning(
            "Record %d skipped: answer too long (%d chars, max: %d)",
            index, len(fields.answer), answer_limit(fields.landing_url),
        )
    else:
        logger.warning(
            "Record %d skipped: invalid category structure: %s",
            index, ", ".join(fields.category),
        )
