# furextract/services/transport/http.py
"""
httpx‑backed transport.

Owns the session cookies and User‑Agent and converts request failures and
5xx responses into retryable :class:`ScrapeError`s before any bytes reach the
parsers.  Other statuses are handed through: the site renders its own
"not found" pages, which the extractor recognises.
"""

from typing import Optional, Protocol

import httpx
from loguru import logger

from furextract.core.config import Settings
from furextract.core.exceptions import ScrapeError


class Transport(Protocol):
    """What the client needs from a transport."""

    def fetch_document(self, url: str) -> bytes: ...

    def fetch_binary(self, url: str) -> bytes: ...


def build_cookie(name: str, value: str) -> str:
    return f"{name}={value}"


class HttpTransport:
    """
    Synchronous transport over a shared ``httpx.Client``.

    Parameters
    ----------
    settings: Settings
        Supplies cookies, User‑Agent and timeout.
    client: httpx.Client | None
        Pre‑built client (tests pass one with ``httpx.MockTransport``).
    """

    def __init__(self, settings: Settings, client: Optional[httpx.Client] = None):
        self.settings = settings
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=settings.TIMEOUT)

    def _headers(self) -> dict:
        cookies = "; ".join(
            [
                build_cookie("a", self.settings.COOKIE_A),
                build_cookie("b", self.settings.COOKIE_B),
            ]
        )
        return {
            "User-Agent": self.settings.USER_AGENT,
            "Cookie": cookies,
        }

    def _get(self, url: str) -> httpx.Response:
        logger.debug(f"GET {url}")
        try:
            response = self.client.get(url, headers=self._headers(), follow_redirects=True)
        except httpx.RequestError as exc:
            logger.warning(f"Request failure for {url}: {exc!r}")
            raise ScrapeError.from_transport(exc) from exc

        if response.is_server_error:
            logger.warning(f"Server error {response.status_code} for {url}")
            raise ScrapeError.server_error(response.status_code)

        logger.debug(f"{response.status_code} {url} ({len(response.content)} bytes)")
        return response

    def fetch_document(self, url: str) -> bytes:
        return self._get(url).content

    def fetch_binary(self, url: str) -> bytes:
        return self._get(url).content

    def close(self) -> None:
        if self._owns_client:
            self.client.close()
