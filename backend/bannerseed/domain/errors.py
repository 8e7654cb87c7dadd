from __future__ import annotations


class SeedError(Exception):
    """Base class for failures raised by the banner seed pipeline."""


class DownloadError(SeedError):
    def __init__(self, message: str, *, url: str, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class TooManyRedirects(DownloadError):
    def __init__(self, *, url: str, max_redirects: int):
        super().__init__(f"Exceeded {max_redirects} redirects while fetching {url}", url=url)
        self.max_redirects = max_redirects


class PublishError(SeedError):
    def __init__(self, message: str, *, filename: str):
        super().__init__(message)
        self.filename = filename


class TransactionError(SeedError):
    """The batch create was rolled back; nothing from this run persisted."""
