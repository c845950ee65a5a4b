"""Shared test fixtures for knowledge bridge tests."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path so we can import the modules
sys.path.insert(0, str(Path(__file__).parent.parent))


def _rich_text(value: str) -> dict:
    return {"type": "rich_text", "rich_text": [{"type": "text", "plain_text": value}]}


def _title(value: str) -> dict:
    return {"type": "title", "title": [{"type": "text", "plain_text": value}]}


def _url(value: str | None) -> dict:
    return {"type": "url", "url": value}


@pytest.fixture
def make_page():
    """Build a Notion page object with the FAQ database's properties."""

    def _make(
        question: str = "카페 가입 도와줘",
        answer: str = "카페 가입하기 버튼 클릭 후 질문 작성하면 승인됩니다.",
        categories: tuple[str, ...] = ("온보딩", "카페"),
        landing_url: str | None = "https://cafe.naver.com/linkus16",
        image_url: str | None = None,
        button_label: str | None = None,
    ) -> dict:
        props: dict = {
            "Question": _title(question),
            "Answer": _rich_text(answer),
            "Landing URL": _url(landing_url),
            "Image Info (URL)": _url(image_url),
        }
        for n, value in enumerate(categories, start=1):
            props[f"Category{n}"] = _rich_text(value)
        if button_label is not None:
            props["Landing URL Button Name"] = _rich_text(button_label)
        return {"object": "page", "id": f"page-{question[:8]}", "properties": props}

    return _make


@pytest.fixture
def notion_query_response(make_page) -> dict:
    """Mock Notion database query response with one valid and two invalid pages."""
    return {
        "object": "list",
        "results": [
            make_page(answer="a" * 30),
            make_page(question=""),
            make_page(question="카테고리 오류", categories=("X", "", "Y")),
        ],
        "has_more": False,
        "next_cursor": None,
    }
