from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

from betsmoke.core.config import settings

logger = logging.getLogger("uvicorn.error")

TYPES_PATH = "/core/types"


class SportsMonksError(Exception):
    """Remote fetch failed: transport error, non-2xx, or malformed page."""


class SportsMonksConfigError(SportsMonksError):
    pass


class SportsMonksClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.sportmonks.com/v3",
        *,
        per_page: int = 100,
        timeout_s: float = 30.0,
        max_pages: int = 500,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.per_page = per_page
        self.timeout_s = timeout_s
        self.max_pages = max_pages
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "SportsMonksClient":
        return cls(
            settings.SPORTSMONKS_API_KEY,
            settings.SPORTSMONKS_BASE_URL,
            per_page=settings.SPORTSMONKS_TYPES_PER_PAGE,
            timeout_s=settings.SPORTSMONKS_TIMEOUT_S,
            max_pages=settings.SPORTSMONKS_MAX_PAGES,
        )

    async def _get_page(self, client: httpx.AsyncClient, page: int) -> Dict[str, Any]:
        params = {"api_token": self.api_key, "page": page, "per_page": self.per_page}
        try:
            resp = await client.get(f"{self.base_url}{TYPES_PATH}", params=params)
        except httpx.HTTPError as e:
            raise SportsMonksError(f"request failed page={page}: {e}") from e
        if resp.status_code >= 300:
            raise SportsMonksError(f"API error: {resp.status_code} {resp.reason_phrase} page={page}")
        try:
            body = resp.json()
        except ValueError as e:
            raise SportsMonksError(f"malformed page={page}: body is not JSON") from e
        if not isinstance(body, dict) or not isinstance(body.get("data", []), list):
            raise SportsMonksError(f"malformed page={page}: expected an object with a data list")
        return body

    async def iter_type_pages(self) -> AsyncIterator[List[Dict[str, Any]]]:
        """Yield the `data` list of each `core/types` page, one request at a time.

        Stops on `pagination.has_more` false or an empty page. Raises once
        `max_pages` pages have been read and the source still reports more.
        """
        if not self.api_key:
            raise SportsMonksConfigError("SPORTSMONKS_API_KEY not configured")
        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
            for page in range(1, self.max_pages + 1):
                logger.debug("sportsmonks:types fetching page=%s", page)
                body = await self._get_page(client, page)
                data = body.get("data") or []
                if not data:
                    return
                yield data
                pagination = body.get("pagination") or {}
                if not pagination.get("has_more"):
                    return
        raise SportsMonksError(f"pagination did not terminate after max_pages={self.max_pages}")

    async def fetch_all_types(self) -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        async for data in self.iter_type_pages():
            out.extend(data)
        logger.info("sportsmonks:types fetched total=%s", len(out))
        return out
