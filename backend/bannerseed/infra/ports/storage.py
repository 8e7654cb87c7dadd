from __future__ import annotations

from abc import ABC, abstractmethod

from bannerseed.domain.models import AssetFile


class StoragePort(ABC):
    provider_name: str = "local"

    @abstractmethod
    def upload(self, file: AssetFile) -> None:
        """Persist the file durably; set ``file.url`` when it becomes retrievable."""

    @abstractmethod
    def build_url(self, key: str) -> str:
        """Resolve a public URL (or local path) for a key."""
