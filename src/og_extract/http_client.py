from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from urllib.parse import urldefrag

import requests
from requests import exceptions as req_exc

logger = logging.getLogger(__name__)

TRANSIENT_HTTP_STATUSES = {429, 500, 502, 503, 504}

DEFAULT_USER_AGENT = "og-extract/0.1 (+https://ogp.me/)"


class FetchError(RuntimeError):
    """The page could not be retrieved; carries the last status if any."""

    def __init__(self, url: str, message: str, *, status_code: int | None = None) -> None:
        super().__init__(f"Failed to fetch {url}: {message}")
        self.url = url
        self.status_code = status_code


def _retry_after_seconds(headers: dict[str, str]) -> float | None:
    retry_after = headers.get("Retry-After")
    if not retry_after:
        return None
    try:
        return float(retry_after)
    except ValueError:
        return None


@dataclass(frozen=True)
class FetchResult:
    url: str
    final_url: str
    status_code: int
    content_type: str | None
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class HttpClient:
    def __init__(
        self,
        session: requests.Session,
        *,
        timeout_s: float = 45,
        max_retries: int = 4,
        backoff_base_s: float = 1.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._session = session
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._backoff_base_s = backoff_base_s
        self._headers = {
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
        }

    def _wait(self, attempt: int, retry_after: float | None = None) -> None:
        wait_s = (
            retry_after
            if retry_after is not None
            else self._backoff_base_s * (2**attempt)
        )
        time.sleep(wait_s)

    def get(self, url: str) -> FetchResult:
        """GET *url*, retrying transport errors and transient statuses.

        Raises :class:`FetchError` once retries are exhausted or the final
        status is not 2xx.
        """

        target, _ = urldefrag(url)
        last_error: Exception | None = None

        for attempt in range(self._max_retries + 1):
            try:
                resp = self._session.get(
                    target, timeout=self._timeout_s, headers=self._headers
                )
            except req_exc.RequestException as e:
                last_error = e
                if attempt >= self._max_retries:
                    break
                logger.warning("GET %s failed (%s), retrying", target, e)
                self._wait(attempt)
                continue

            if (
                resp.status_code in TRANSIENT_HTTP_STATUSES
                and attempt < self._max_retries
            ):
                logger.warning("GET %s returned %d, retrying", target, resp.status_code)
                self._wait(attempt, _retry_after_seconds(dict(resp.headers)))
                continue

            result = FetchResult(
                url=target,
                final_url=str(resp.url or target),
                status_code=int(resp.status_code),
                content_type=resp.headers.get("Content-Type"),
                body=resp.content,
            )
            if not result.ok:
                raise FetchError(
                    target, f"HTTP {result.status_code}", status_code=result.status_code
                )
            return result

        raise FetchError(target, str(last_error))
