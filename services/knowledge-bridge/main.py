"""FastAPI knowledge bridge that serves Notion FAQ entries in the Kakao knowledge schema.

The Kakao knowledge-management center polls GET /kakao/knowledge. The
endpoint always answers 200 with a well-formed envelope: fallback rows when
Notion is unavailable, an empty result on unexpected failure.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from config import settings
from knowledge import OutputFormat, build_knowledge, empty_result
from models import KnowledgeValuesResponse
from notion_client import NotionClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

JSON_UTF8 = "application/json; charset=utf-8"

_notion_client: NotionClient | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the Notion client on startup if credentials are configured."""
    global _notion_client

    if not settings.notion_configured:
        logger.info("Notion not configured (NOTION_TOKEN / DATABASE_ID empty), serving fallback data")
    else:
        logger.info("Using Notion database %s", settings.DATABASE_ID)
        _notion_client = NotionClient()

    yield

    if _notion_client is not None:
        _notion_client.close()
        _notion_client = None


app = FastAPI(title="Knowledge Bridge", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ALLOW_ORIGINS.split(",") if origin.strip()],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


def default_format() -> OutputFormat:
    try:
        return OutputFormat(settings.OUTPUT_FORMAT)
    except ValueError:
        logger.warning("Unknown OUTPUT_FORMAT %r, using 'values'", settings.OUTPUT_FORMAT)
        return OutputFormat.VALUES


def _render(payload) -> JSONResponse:
    if isinstance(payload, KnowledgeValuesResponse):
        payload = payload.model_dump()
    return JSONResponse(status_code=200, content=payload, media_type=JSON_UTF8)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "OK"


@app.get("/kakao/knowledge")
def kakao_knowledge(fmt: OutputFormat | None = Query(default=None, alias="format")):
    """Return the current FAQ entries in the Kakao knowledge upload schema."""
    fmt = fmt or default_format()

    try:
        payload = build_knowledge(_notion_client, fmt)
    except Exception:
        logger.exception("Failed to build knowledge payload")
        payload = empty_result(fmt)

    return _render(payload)


@app.get("/health")
def health():
    """Return service status and Notion reachability."""
    base = {
        "status": "healthy",
        "notion_configured": _notion_client is not None,
    }

    if _notion_client is not None:
        base["notion_health"] = _notion_client.health()

    return base


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
