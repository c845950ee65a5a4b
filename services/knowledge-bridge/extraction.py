"""Field extraction: Notion page properties to flat ExtractedFields.

Extraction never raises: absent or malformed properties resolve to "".
Property names are looked up primary-first with one fallback name. An
empty-but-present primary is indistinguishable from an absent one, so both
fall through to the fallback name.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from models import (
    CATEGORY_LEVELS,
    ExtractedFields,
    MissingProperty,
    Property,
    TextProperty,
    TextRun,
    UrlProperty,
)

logger = logging.getLogger(__name__)

# (primary, fallback) property names per logical text field
CATEGORY_NAMES: list[tuple[str, str]] = [
    (f"Category{n}", f"Category {n}") for n in range(1, CATEGORY_LEVELS + 1)
]
QUESTION_NAMES = ("Question", "question")
ANSWER_NAMES = ("Answer", "answer")
LANDING_BUTTON_NAMES = ("Landing URL Button Name", "Button Name")

# URL fields, tried in order
LANDING_URL_NAMES = ("Landing URL",)
IMAGE_URL_NAMES = ("Image Info (URL)", "Image URL")

_TEXT_TYPES = ("rich_text", "title")


def resolve_property(raw: Any) -> Property:
    """Classify a raw Notion property object as Text, Url or Missing."""
    if not isinstance(raw, Mapping):
        return MissingProperty()

    kind = raw.get("type")
    if kind in _TEXT_TYPES:
        return TextProperty(runs=_to_runs(raw.get(kind)))
    if kind == "url":
        return UrlProperty(url=_str_or_none(raw.get("url")))

    # Untyped objects: probe the sub-fields the Notion API uses
    for key in _TEXT_TYPES:
        runs = raw.get(key)
        if isinstance(runs, list) and runs:
            return TextProperty(runs=_to_runs(runs))
    if "url" in raw:
        return UrlProperty(url=_str_or_none(raw.get("url")))

    return MissingProperty()


def text_value(prop: Property) -> str:
    """Plain text of the first run, or "" for anything else."""
    if isinstance(prop, TextProperty) and prop.runs:
        return prop.runs[0].plain_text
    return ""


def url_value(prop: Property) -> str:
    if isinstance(prop, UrlProperty) and prop.url:
        return prop.url
    return ""


def extract(record: Mapping[str, Any], position: int) -> ExtractedFields:
    """Pull the fixed set of FAQ fields out of one page's properties."""
    if not isinstance(record, Mapping):
        record = {}

    return ExtractedFields(
        ordinal=position + 1,
        category=[_text(record, *names) for names in CATEGORY_NAMES],
        question=_text(record, *QUESTION_NAMES),
        answer=_text(record, *ANSWER_NAMES),
        landing_url=_url(record, *LANDING_URL_NAMES),
        landing_button_label=_text(record, *LANDING_BUTTON_NAMES),
        image_url=_url(record, *IMAGE_URL_NAMES),
    )


def page_properties(page: Any) -> Mapping[str, Any]:
    """Return the ``properties`` mapping of a Notion page object."""
    if not isinstance(page, Mapping):
        return {}
    props = page.get("properties")
    return props if isinstance(props, Mapping) else {}


def extract_pages(pages: Iterable[Any]) -> list[ExtractedFields]:
    """Extract every page in order, stamping ordinals from batch position."""
    extracted = [extract(page_properties(page), i) for i, page in enumerate(pages)]
    logger.debug("Extracted %d records", len(extracted))
    return extracted


def _text(record: Mapping[str, Any], primary: str, fallback: str) -> str:
    return (
        text_value(resolve_property(record.get(primary)))
        or text_value(resolve_property(record.get(fallback)))
    )


def _url(record: Mapping[str, Any], *names: str) -> str:
    for name in names:
        value = url_value(resolve_property(record.get(name)))
        if value:
            return value
    return ""


def _to_runs(raw_runs: Any) -> list[TextRun]:
    if not isinstance(raw_runs, list):
        return []
    # Keep positions so "first run" means the first element, even a bad one
    return [
        TextRun(plain_text=_str_or_none(run.get("plain_text")) or "")
        if isinstance(run, Mapping)
        else TextRun()
        for run in raw_runs
    ]


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None
