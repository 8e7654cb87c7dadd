from __future__ import annotations

import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from bannerseed.domain.models import StagedFile

# Extension lookup only, no content sniffing. Unknown extensions fall back to PNG.
_MIME_BY_EXTENSION = {
    ".webp": "image/webp",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}
_DEFAULT_MIME = "image/png"


def guess_image_mime(filename: str) -> str:
    return _MIME_BY_EXTENSION.get(Path(filename).suffix.lower(), _DEFAULT_MIME)


@contextmanager
def stage_file(data: bytes, filename: str, scratch_dir: Path | None = None) -> Iterator[StagedFile]:
    """Write ``data`` to a scratch file and remove it when the block exits.

    The caller picks ``filename`` and is responsible for keeping it unique
    within ``scratch_dir`` (the system temp dir by default).
    """
    base_dir = scratch_dir or Path(tempfile.gettempdir())
    base_dir.mkdir(parents=True, exist_ok=True)
    path = base_dir / filename

    try:
        path.write_bytes(data)
        with path.open("rb") as stream:
            yield StagedFile(
                path=path,
                size_bytes=path.stat().st_size,
                filename=filename,
                mime_type=guess_image_mime(filename),
                stream=stream,
            )
    finally:
        path.unlink(missing_ok=True)
