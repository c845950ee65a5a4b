"""Static fallback batch served when Notion is not configured or unreachable.

Expressed as Notion page objects so it goes through the same extraction and
validation as live data.
"""


def _text(value: str) -> dict:
    return {"type": "rich_text", "rich_text": [{"type": "text", "plain_text": value}]}


def _title(value: str) -> dict:
    return {"type": "title", "title": [{"type": "text", "plain_text": value}]}


def _url(value: str | None) -> dict:
    return {"type": "url", "url": value}


FALLBACK_PAGES: list[dict] = [
    {
        "object": "page",
        "id": "fallback-onboarding-cafe",
        "properties": {
            "Question": _title("카페 가입 도와줘"),
            "Category1": _text("온보딩"),
            "Category2": _text("카페"),
            "Answer": _text("카페 가입하기 버튼 클릭 후 질문 작성하면 1~2일 내 승인됩니다."),
            "Landing URL": _url("https://cafe.naver.com/linkus16"),
            "Image Info (URL)": _url(None),
        },
    },
]


def fallback_pages() -> list[dict]:
    return [dict(page) for page in FALLBACK_PAGES]
