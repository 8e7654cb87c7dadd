from __future__ import annotations

import time
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from bannerseed.application.staging import stage_file
from bannerseed.domain.errors import PublishError
from bannerseed.domain.models import AssetFile, UploadedAsset
from bannerseed.infra.ports.storage import StoragePort


class FileRegistryPort(Protocol):
    def register_file(
        self,
        *,
        name: str,
        alternative_text: str | None,
        caption: str | None,
        hash: str,
        ext: str,
        mime: str,
        size_kb: float,
        url: str | None,
        provider: str,
    ) -> UploadedAsset:
        ...


def _split_extension(filename: str) -> tuple[str, str]:
    path = Path(filename)
    return path.stem if path.suffix else path.name, path.suffix


class AssetPublisher:
    """Uploads one image to the storage backend and records its metadata."""

    def __init__(
        self,
        *,
        storage: StoragePort,
        registry: FileRegistryPort,
        scratch_dir: Path | None = None,
        clock: Callable[[], int] = time.time_ns,
    ):
        self.storage = storage
        self.registry = registry
        self.scratch_dir = scratch_dir
        self._clock = clock

    def _storage_key(self, name: str) -> str:
        return f"{self._clock()}_{name}"

    def publish(self, data: bytes, filename: str, alt_text: str) -> UploadedAsset:
        name, ext = _split_extension(filename)
        try:
            with stage_file(data, filename, self.scratch_dir) as staged:
                asset_file = AssetFile(
                    name=name,
                    alternative_text=alt_text,
                    caption=alt_text,
                    hash=self._storage_key(name),
                    ext=ext,
                    mime=staged.mime_type,
                    size_kb=round(staged.size_bytes / 1024, 2),
                    buffer=data,
                    stream=staged.stream,
                    path=staged.path,
                )
                self.storage.upload(asset_file)
                return self.registry.register_file(
                    name=asset_file.name,
                    alternative_text=asset_file.alternative_text,
                    caption=asset_file.caption,
                    hash=asset_file.hash,
                    ext=asset_file.ext,
                    mime=asset_file.mime,
                    size_kb=asset_file.size_kb,
                    url=asset_file.url,
                    provider=self.storage.provider_name,
                )
        except Exception as exc:
            raise PublishError(f"Failed to publish {filename}: {exc}", filename=filename) from exc
