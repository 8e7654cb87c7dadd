from __future__ import annotations

from pathlib import Path

import httpx

from bannerseed.application.migration import BannerSeedMigration
from bannerseed.application.publisher import AssetPublisher
from bannerseed.domain.models import SeedItem
from bannerseed.infra.db.models import UploadFileRow
from bannerseed.infra.http.fetcher import ImageFetcher
from bannerseed.infra.storage.local import LocalFileStorage
from tests.fakes import mock_client

ITEMS = (
    SeedItem(
        title="Welcome",
        image_url="https://img.test/redirect/welcome",
        image_alt="Hero",
        cta_label="Start",
        cta_url="/start",
    ),
    SeedItem(
        title="Welcome two",
        image_url="https://down.test/welcome-two.webp",
        image_alt="Hero two",
        cta_label="Start two",
        cta_url="/starttwo",
    ),
)


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.host == "down.test":
        raise httpx.ConnectError("connection reset by peer", request=request)
    if request.url.path == "/redirect/welcome":
        return httpx.Response(302, headers={"Location": "/files/welcome.webp"})
    return httpx.Response(200, content=b"RIFF....WEBPVP8 ")


def test_seed_run_with_one_failed_download(tmp_path: Path, scratch_dir: Path, store, session_factory):
    uploads = tmp_path / "uploads"
    migration = BannerSeedMigration(
        store=store,
        fetcher=ImageFetcher(client=mock_client(_handler)),
        publisher=AssetPublisher(storage=LocalFileStorage(uploads), registry=store, scratch_dir=scratch_dir),
        items=ITEMS,
    )

    result = migration.run()

    assert result.state == "done"
    assert result.created == 2
    assert result.image_failures == ["Welcome two"]

    banners = store.find_banners()
    assert [b.title for b in banners] == ["Welcome", "Welcome two"]
    assert banners[0].image_asset_id is not None
    assert banners[1].image_asset_id is None

    with session_factory() as db:
        asset = db.get(UploadFileRow, banners[0].image_asset_id)
        assert asset is not None
        assert asset.name == "banner-welcome"
        assert asset.mime == "image/webp"
        stored_key = f"{asset.hash}.webp"
    assert (uploads / stored_key).read_bytes() == b"RIFF....WEBPVP8 "
    assert list(scratch_dir.iterdir()) == []

    rerun = migration.run()
    assert rerun.state == "already_seeded"
    assert len(store.find_banners()) == 2
