from __future__ import annotations

import json
from pathlib import Path

from bannerseed.domain.models import SeedItem
from bannerseed.seeds.schemas import SeedFileSchema

DEFAULT_BANNERS: tuple[SeedItem, ...] = (
    SeedItem(
        title="Welcome",
        image_url="https://www.techmonitor.ai/wp-content/uploads/sites/29/2017/02/shutterstock_552493561-2048x1366.webp",
        image_alt="Hero",
        cta_label="Start",
        cta_url="/start",
    ),
    SeedItem(
        title="Welcome two",
        image_url="https://encrypted-tbn0.gstatic.com/images?q=tbn:ANd9GcSV8jDeR8_JWiDCtdwH3Ke39AiBsq1RZL6drQ&s",
        image_alt="Hero two",
        cta_label="Start two",
        cta_url="/starttwo",
    ),
)


def load_seed_file(path: Path) -> list[SeedItem]:
    """Read seed banners from JSON: either a bare list or ``{"banners": [...]}``."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, list):
        payload = {"banners": payload}
    parsed = SeedFileSchema.model_validate(payload)
    return [item.to_domain() for item in parsed.banners]
