from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache

from bannerseed.application.migration import BannerSeedMigration
from bannerseed.application.publisher import AssetPublisher
from bannerseed.core.config import get_settings
from bannerseed.domain.models import SeedItem
from bannerseed.infra.db.store import DatabaseStore
from bannerseed.infra.http.fetcher import ImageFetcher, TransportPolicy
from bannerseed.infra.ports.storage import StoragePort
from bannerseed.infra.storage.local import LocalFileStorage


@lru_cache(maxsize=1)
def get_store() -> DatabaseStore:
    return DatabaseStore()


@lru_cache(maxsize=1)
def get_storage() -> StoragePort:
    settings = get_settings()
    return LocalFileStorage(base_dir=settings.upload_dir, url_prefix=settings.upload_url_prefix)


def get_transport_policy(*, insecure_tls: bool | None = None) -> TransportPolicy:
    settings = get_settings()
    insecure = settings.http_insecure_tls if insecure_tls is None else insecure_tls
    return TransportPolicy(
        verify_tls=not insecure,
        max_redirects=settings.http_max_redirects,
        timeout_seconds=settings.http_timeout_seconds,
    )


def get_publisher() -> AssetPublisher:
    return AssetPublisher(
        storage=get_storage(),
        registry=get_store(),
        scratch_dir=get_settings().scratch_dir,
    )


def build_migration(
    *,
    items: Sequence[SeedItem],
    fetcher: ImageFetcher,
) -> BannerSeedMigration:
    return BannerSeedMigration(
        store=get_store(),
        fetcher=fetcher,
        publisher=get_publisher(),
        items=items,
    )
