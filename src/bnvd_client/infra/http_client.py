from __future__ import annotations

import logging
from typing import Mapping, Optional

import httpx

from ..core.errors import RequestError

logger = logging.getLogger(__name__)


class HttpClient:
    def __init__(
        self,
        base_headers: Optional[Mapping[str, str]] = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers=dict(base_headers or {}),
            follow_redirects=True,
            max_redirects=10,
        )

    def get_text(self, url: str) -> str:
        logger.debug(f"GET {url}")
        try:
            resp = self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Request to {url} failed: {e!r}")
            raise RequestError(f"HTTP request failed: {e}", url=url, cause=e) from e
        # Non-2xx bodies still carry an envelope; status is not checked here.
        logger.debug(f"Response {resp.status_code} from {url} ({len(resp.content)} bytes)")
        return resp.text

    def close(self) -> None:
        self._client.close()


