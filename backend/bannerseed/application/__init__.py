"""Fetch-and-publish pipeline for seeding banners."""

from bannerseed.application.migration import BannerSeedMigration, banner_filename
from bannerseed.application.publisher import AssetPublisher
from bannerseed.application.staging import guess_image_mime, stage_file

__all__ = [
    "AssetPublisher",
    "BannerSeedMigration",
    "banner_filename",
    "guess_image_mime",
    "stage_file",
]
