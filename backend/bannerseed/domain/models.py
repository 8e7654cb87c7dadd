from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, Literal

MigrationState = Literal["table_pending", "already_seeded", "done"]


@dataclass(frozen=True)
class SeedItem:
    title: str
    image_url: str
    image_alt: str
    cta_label: str
    cta_url: str


@dataclass
class StagedFile:
    path: Path
    size_bytes: int
    filename: str
    mime_type: str
    stream: BinaryIO


@dataclass
class AssetFile:
    """Descriptor handed to a storage backend; the backend may fill in ``url``."""

    name: str
    alternative_text: str
    caption: str
    hash: str
    ext: str
    mime: str
    size_kb: float
    buffer: bytes
    stream: BinaryIO
    path: Path
    url: str | None = None


@dataclass
class UploadedAsset:
    asset_id: int
    name: str
    hash: str
    ext: str
    mime: str
    size_kb: float
    provider: str
    url: str | None = None
    alternative_text: str | None = None
    caption: str | None = None


@dataclass
class BannerRecord:
    title: str
    cta_label: str
    cta_url: str
    image_asset_id: int | None = None
    published_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    banner_id: int | None = None


@dataclass
class MigrationResult:
    state: MigrationState
    created: int = 0
    image_failures: list[str] = field(default_factory=list)
