from __future__ import annotations

import shutil
from pathlib import Path

from bannerseed.domain.models import AssetFile
from bannerseed.infra.ports.storage import StoragePort


class LocalFileStorage(StoragePort):
    provider_name = "local"

    def __init__(self, base_dir: Path, url_prefix: str = "/uploads"):
        self.base_dir = base_dir
        self.url_prefix = url_prefix.rstrip("/")
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def upload(self, file: AssetFile) -> None:
        key = f"{file.hash}{file.ext}"
        dest = self.base_dir / key
        dest.parent.mkdir(parents=True, exist_ok=True)
        with dest.open("wb") as out:
            shutil.copyfileobj(file.stream, out)
        file.url = self.build_url(key)

    def build_url(self, key: str) -> str:
        return f"{self.url_prefix}/{key}"
