from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy.exc import IntegrityError

from bannerseed.domain.models import BannerRecord
from bannerseed.infra.db.session import _normalize_database_url, build_engine, build_session_factory
from bannerseed.infra.db.store import DatabaseStore


def test_has_table_reflects_schema(tmp_path: Path, store):
    empty = DatabaseStore(build_session_factory(build_engine(f"sqlite:///{tmp_path / 'empty.db'}")))

    assert empty.has_table("banners") is False
    assert store.has_table("banners") is True
    assert store.has_table("files") is True


def test_transaction_commits_all_records(store):
    asset = store.register_file(
        name="banner-welcome",
        alternative_text="Hero",
        caption="Hero",
        hash="1_banner-welcome",
        ext=".webp",
        mime="image/webp",
        size_kb=1.5,
        url="/uploads/1_banner-welcome.webp",
        provider="local",
    )

    with store.transaction() as writer:
        first = writer.create_banner(
            BannerRecord(title="Welcome", cta_label="Start", cta_url="/start", image_asset_id=asset.asset_id)
        )
        writer.create_banner(BannerRecord(title="Welcome two", cta_label="Start two", cta_url="/starttwo"))

    banners = store.find_banners()
    assert first.banner_id is not None
    assert [b.title for b in banners] == ["Welcome", "Welcome two"]
    assert banners[0].image_asset_id == asset.asset_id
    assert banners[1].image_asset_id is None
    assert len(store.find_banners(limit=1)) == 1


def test_transaction_rolls_back_when_a_create_fails(store):
    with pytest.raises(IntegrityError):
        with store.transaction() as writer:
            writer.create_banner(BannerRecord(title="Welcome", cta_label="Start", cta_url="/start"))
            writer.create_banner(BannerRecord(title=None, cta_label="Broken", cta_url="/broken"))  # type: ignore[arg-type]

    assert store.find_banners() == []


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("postgres://u:p@db/cms", "postgresql+psycopg://u:p@db/cms"),
        ("postgresql://u:p@db/cms", "postgresql+psycopg://u:p@db/cms"),
        ("postgresql+psycopg://u:p@db/cms", "postgresql+psycopg://u:p@db/cms"),
        ("sqlite:///:memory:", "sqlite:///:memory:"),
    ],
)
def test_normalize_database_url(raw: str, expected: str):
    assert _normalize_database_url(raw) == expected


def test_normalize_resolves_relative_sqlite_path():
    normalized = _normalize_database_url("sqlite:///data/cms.db")

    assert normalized.startswith("sqlite:////")
    assert normalized.endswith("data/cms.db")
