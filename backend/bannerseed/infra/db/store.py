from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import inspect, select
from sqlalchemy.orm import Session, sessionmaker

from bannerseed.domain.models import BannerRecord, UploadedAsset
from bannerseed.infra.db.models import BannerRow, UploadFileRow
from bannerseed.infra.db.session import get_session_factory


class BannerWriter:
    """Creates banner rows inside an open transaction."""

    def __init__(self, db: Session):
        self._db = db

    def create_banner(self, record: BannerRecord) -> BannerRecord:
        row = BannerRow(
            title=record.title,
            cta_label=record.cta_label,
            cta_url=record.cta_url,
            image_id=record.image_asset_id,
            published_at=record.published_at,
        )
        self._db.add(row)
        self._db.flush()
        record.banner_id = row.id
        return record


class DatabaseStore:
    """Persistence layer backed by SQLAlchemy."""

    def __init__(self, session_factory: sessionmaker[Session] | None = None):
        self._session_factory = session_factory or get_session_factory()

    @staticmethod
    def _to_banner_record(row: BannerRow) -> BannerRecord:
        return BannerRecord(
            banner_id=row.id,
            title=row.title,
            cta_label=row.cta_label or "",
            cta_url=row.cta_url or "",
            image_asset_id=row.image_id,
            published_at=row.published_at,
        )

    @staticmethod
    def _to_uploaded_asset(row: UploadFileRow) -> UploadedAsset:
        return UploadedAsset(
            asset_id=row.id,
            name=row.name,
            hash=row.hash,
            ext=row.ext or "",
            mime=row.mime,
            size_kb=row.size,
            provider=row.provider,
            url=row.url,
            alternative_text=row.alternative_text,
            caption=row.caption,
        )

    def has_table(self, name: str) -> bool:
        with self._session_factory() as db:
            return inspect(db.get_bind()).has_table(name)

    def find_banners(self, *, limit: int | None = None) -> list[BannerRecord]:
        with self._session_factory() as db:
            stmt = select(BannerRow).order_by(BannerRow.id)
            if limit is not None:
                stmt = stmt.limit(limit)
            rows = db.execute(stmt).scalars().all()
            return [self._to_banner_record(row) for row in rows]

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
        with self._session_factory() as db:
            row = UploadFileRow(
                name=name,
                alternative_text=alternative_text,
                caption=caption,
                hash=hash,
                ext=ext,
                mime=mime,
                size=size_kb,
                url=url,
                provider=provider,
            )
            db.add(row)
            db.commit()
            return self._to_uploaded_asset(row)

    @contextmanager
    def transaction(self) -> Iterator[BannerWriter]:
        """Commit on clean exit, roll back everything if the block raises."""
        with self._session_factory() as db:
            with db.begin():
                yield BannerWriter(db)
