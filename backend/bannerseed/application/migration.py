"""Banner seed migration.

Runs once: skips when the ``banners`` table is missing or already holds rows,
otherwise downloads and publishes each seed image, then creates every banner
in a single transaction. Image failures only cost that banner its image; a
failed commit aborts the run with nothing persisted.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from contextlib import AbstractContextManager
from typing import Protocol

from bannerseed.domain.errors import DownloadError, PublishError, TransactionError
from bannerseed.domain.models import BannerRecord, MigrationResult, SeedItem, UploadedAsset

logger = logging.getLogger(__name__)

BANNERS_TABLE = "banners"

_WHITESPACE = re.compile(r"\s+")


class BannerWriterPort(Protocol):
    def create_banner(self, record: BannerRecord) -> BannerRecord:
        ...


class BannerStorePort(Protocol):
    def has_table(self, name: str) -> bool:
        ...

    def find_banners(self, *, limit: int | None = None) -> list[BannerRecord]:
        ...

    def transaction(self) -> AbstractContextManager[BannerWriterPort]:
        ...


class FetcherPort(Protocol):
    def fetch(self, url: str) -> bytes:
        ...


class PublisherPort(Protocol):
    def publish(self, data: bytes, filename: str, alt_text: str) -> UploadedAsset:
        ...


def banner_filename(title: str) -> str:
    return f"banner-{_WHITESPACE.sub('-', title.lower())}.webp"


class BannerSeedMigration:
    def __init__(
        self,
        *,
        store: BannerStorePort,
        fetcher: FetcherPort,
        publisher: PublisherPort,
        items: Sequence[SeedItem],
        table_name: str = BANNERS_TABLE,
    ):
        self.store = store
        self.fetcher = fetcher
        self.publisher = publisher
        self.items = tuple(items)
        self.table_name = table_name

    def _publish_image(self, item: SeedItem) -> int | None:
        try:
            logger.info("Downloading image from %s", item.image_url)
            data = self.fetcher.fetch(item.image_url)
        except DownloadError as exc:
            logger.warning("Failed to download image for %r: %s", item.title, exc)
            return None

        filename = banner_filename(item.title)
        try:
            logger.info("Uploading %s", filename)
            asset = self.publisher.publish(data, filename, item.image_alt)
        except PublishError as exc:
            logger.warning("Failed to publish image for %r: %s", item.title, exc)
            return None

        logger.info("Image uploaded (id=%s)", asset.asset_id)
        return asset.asset_id

    def _pending_records(self) -> tuple[list[BannerRecord], list[str]]:
        records: list[BannerRecord] = []
        failures: list[str] = []
        for item in self.items:
            image_id = self._publish_image(item)
            if image_id is None:
                failures.append(item.title)
            records.append(
                BannerRecord(
                    title=item.title,
                    cta_label=item.cta_label,
                    cta_url=item.cta_url,
                    image_asset_id=image_id,
                )
            )
        return records, failures

    def run(self) -> MigrationResult:
        if not self.store.has_table(self.table_name):
            logger.info("Skipping: %s table not ready yet", self.table_name)
            return MigrationResult(state="table_pending")

        if self.store.find_banners(limit=1):
            logger.info("Banner data already exists, skipping migration")
            return MigrationResult(state="already_seeded")

        # Network and upload work stays outside the transaction.
        pending, failures = self._pending_records()

        try:
            with self.store.transaction() as writer:
                for record in pending:
                    writer.create_banner(record)
        except Exception as exc:
            logger.error("Banner batch rolled back: %s", exc)
            raise TransactionError(f"Failed to create banners: {exc}") from exc

        if failures:
            logger.warning("%d banner(s) created without an image: %s", len(failures), ", ".join(failures))
        logger.info("Banner migration completed - %d banners created", len(pending))
        return MigrationResult(state="done", created=len(pending), image_failures=failures)
