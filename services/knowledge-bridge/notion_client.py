"""HTTP client for querying the Notion database that holds the FAQ entries.

Uses httpx with configurable timeouts. Failures are split into
NotionServiceUnavailable (transient: timeouts, connection errors, 429, 5xx)
and NotionServiceError (request rejected). No retries; callers substitute a
fallback batch.
"""

import logging

import httpx

from config import settings

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class NotionServiceUnavailable(Exception):
    """Notion is temporarily unreachable (timeout, connection error, 429, 5xx)."""


class NotionServiceError(Exception):
    """Notion rejected the request (4xx) or returned an unreadable body."""


class NotionClient:
    """Thin client for the Notion database query endpoint."""

    def __init__(
        self,
        token: str | None = None,
        database_id: str | None = None,
        base_url: str | None = None,
        notion_version: str | None = None,
        timeout: int | None = None,
        connect_timeout: int | None = None,
    ):
        self._database_id = database_id if database_id is not None else settings.DATABASE_ID
        self._base_url = (base_url or settings.NOTION_API_URL).rstrip("/")

        read_timeout = timeout if timeout is not None else settings.NOTION_TIMEOUT_SECONDS
        conn_timeout = connect_timeout if connect_timeout is not None else settings.NOTION_CONNECT_TIMEOUT

        self._client = httpx.Client(
            base_url=self._base_url,
            headers={
                "Authorization": f"Bearer {token if token is not None else settings.NOTION_TOKEN}",
                "Notion-Version": notion_version or settings.NOTION_VERSION,
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(
                connect=float(conn_timeout),
                read=float(read_timeout),
                write=10.0,
                pool=10.0,
            ),
        )

    def close(self):
        self._client.close()

    def query_database(self, page_size: int | None = None) -> list[dict]:
        """Fetch one page of database results.

        Returns the ``results`` list (empty if Notion omits it).
        Raises NotionServiceUnavailable or NotionServiceError.
        """
        size = page_size if page_size is not None else settings.NOTION_PAGE_SIZE
        size = max(1, min(size, MAX_PAGE_SIZE))

        try:
            resp = self._client.post(
                f"/databases/{self._database_id}/query",
                json={"page_size": size},
            )
        except (httpx.ConnectError, httpx.ConnectTimeout) as e:
            logger.warning("Notion connection failed: %s", e)
            raise NotionServiceUnavailable(f"Cannot connect to Notion: {e}") from e
        except httpx.ReadTimeout as e:
            logger.warning("Notion read timeout: %s", e)
            raise NotionServiceUnavailable(f"Notion read timeout: {e}") from e
        except httpx.HTTPError as e:
            logger.error("Notion HTTP error: %s", e)
            raise NotionServiceError(f"Notion HTTP error: {e}") from e

        if resp.status_code == 429 or resp.status_code >= 500:
            detail = _error_message(resp)
            logger.warning("Notion returned %d: %s", resp.status_code, detail)
            raise NotionServiceUnavailable(detail)

        if resp.status_code != 200:
            detail = _error_message(resp)
            logger.error("Notion API error %d: %s", resp.status_code, detail)
            if _is_page_id_error(resp):
                logger.error(
                    "DATABASE_ID points to a page, not a database. Open the database "
                    "as a full-page table view and copy the 32-character id from its URL, "
                    "or use 'Copy link' from the database's '...' menu."
                )
            raise NotionServiceError(detail)

        try:
            data = resp.json()
        except ValueError as e:
            logger.error("Notion returned a non-JSON body: %s", e)
            raise NotionServiceError(f"Unreadable Notion response: {e}") from e

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            return []

        logger.info("Notion query returned %d pages", len(results))
        return results

    def health(self) -> dict:
        """Check that the database is reachable. Returns a status dict, never raises."""
        try:
            resp = self._client.get(f"/databases/{self._database_id}", timeout=10.0)
        except Exception as e:
            logger.warning("Notion health check failed: %s", e)
            return {"status": "unreachable", "error": str(e)}

        if resp.status_code != 200:
            return {"status": "error", "status_code": resp.status_code, "error": _error_message(resp)}
        return {"status": "reachable"}


def _error_body(resp: httpx.Response) -> dict:
    try:
        body = resp.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _error_message(resp: httpx.Response) -> str:
    return _error_body(resp).get("message") or f"HTTP {resp.status_code}"


def _is_page_id_error(resp: httpx.Response) -> bool:
    body = _error_body(resp)
    return (
        body.get("code") == "validation_error"
        and "is a page, not a database" in str(body.get("message", ""))
    )
