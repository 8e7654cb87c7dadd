from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from bannerseed.domain.errors import DownloadError, TooManyRedirects

logger = logging.getLogger(__name__)

_REDIRECT_STATUSES = {301, 302}
# Malformed URLs surface as InvalidURL or ValueError rather than HTTPError.
_REQUEST_ERRORS = (httpx.HTTPError, httpx.InvalidURL, ValueError)


@dataclass(frozen=True)
class TransportPolicy:
    """How the fetcher talks to remote hosts.

    ``verify_tls=False`` accepts any certificate, self-signed included. It is
    opt-in only.
    """

    verify_tls: bool = True
    max_redirects: int = 10
    timeout_seconds: float = 30.0


class ImageFetcher:
    """Single GET per hop, following 301/302 until a terminal response."""

    def __init__(self, *, policy: TransportPolicy | None = None, client: httpx.Client | None = None):
        self.policy = policy or TransportPolicy()
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                verify=self.policy.verify_tls,
                timeout=self.policy.timeout_seconds,
                follow_redirects=False,
            )
        return self._client

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> ImageFetcher:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def fetch(self, url: str) -> bytes:
        client = self._get_client()
        current = url
        hops = 0

        while True:
            try:
                response = client.get(current, follow_redirects=False)
            except _REQUEST_ERRORS as exc:
                raise DownloadError(f"Failed to download image from {current}: {exc}", url=current) from exc

            if response.status_code in _REDIRECT_STATUSES:
                location = response.headers.get("location")
                if not location:
                    raise DownloadError(
                        f"Redirect without Location header from {current}",
                        url=current,
                        status_code=response.status_code,
                    )
                hops += 1
                if hops > self.policy.max_redirects:
                    raise TooManyRedirects(url=url, max_redirects=self.policy.max_redirects)
                try:
                    next_url = str(httpx.URL(current).join(location))
                except (httpx.InvalidURL, ValueError) as exc:
                    raise DownloadError(
                        f"Invalid redirect target {location!r} from {current}",
                        url=current,
                        status_code=response.status_code,
                    ) from exc
                logger.debug("Redirect %s -> %s (%s)", current, next_url, response.status_code)
                current = next_url
                continue

            if response.status_code != 200:
                raise DownloadError(
                    f"Failed to download image: {response.status_code}",
                    url=current,
                    status_code=response.status_code,
                )

            return response.content
