"""Knowledge orchestrator: fetch pages, extract, validate, encode.

Upstream failures never reach the engine: when Notion is not configured or
the query fails, the static fallback batch is converted instead.
"""

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any

from extraction import extract_pages
from models import KnowledgeRow, KnowledgeValuesResponse
from notion_client import NotionClient, NotionServiceError, NotionServiceUnavailable
from samples import fallback_pages
from validation import RejectObserver, empty_values_envelope, project, to_objects, to_values_envelope

logger = logging.getLogger(__name__)

KnowledgePayload = KnowledgeValuesResponse | list[dict[str, str]]


class OutputFormat(str, Enum):
    VALUES = "values"
    OBJECTS = "objects"


def convert_pages(
    pages: Iterable[Any],
    on_reject: RejectObserver | None = None,
) -> list[KnowledgeRow]:
    """Run one batch of Notion pages through extraction and validation."""
    return project(extract_pages(pages), on_reject=on_reject)


def encode(rows: list[KnowledgeRow], fmt: OutputFormat) -> KnowledgePayload:
    if fmt is OutputFormat.OBJECTS:
        return to_objects(rows)
    return to_values_envelope(rows)


def empty_result(fmt: OutputFormat) -> KnowledgePayload:
    """Well-formed empty result in the requested encoding."""
    if fmt is OutputFormat.OBJECTS:
        return []
    return empty_values_envelope()


def load_pages(client: NotionClient | None) -> list[dict]:
    """Fetch the current batch from Notion, or the fallback batch."""
    if client is None:
        logger.info("Notion not configured, serving fallback batch")
        return fallback_pages()

    try:
        return client.query_database()
    except NotionServiceUnavailable as e:
        logger.error("Notion unavailable, serving fallback batch: %s", e)
    except NotionServiceError as e:
        logger.error("Notion query failed, serving fallback batch: %s", e)
    return fallback_pages()


def build_knowledge(
    client: NotionClient | None,
    fmt: OutputFormat = OutputFormat.VALUES,
    on_reject: RejectObserver | None = None,
) -> KnowledgePayload:
    """Produce the knowledge payload for one request."""
    pages = load_pages(client)
    rows = convert_pages(pages, on_reject=on_reject)

    logger.info("Serving %d knowledge rows (%s)", len(rows), fmt.value)
    if rows:
        logger.info(
            "First row: FAQ_No=%s, Question=%s",
            rows[0].faq_no, rows[0].question[:30],
        )

    return encode(rows, fmt)
