from __future__ import annotations

from pathlib import Path

import pytest

from bannerseed.application.staging import guess_image_mime, stage_file


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("banner-welcome.webp", "image/webp"),
        ("photo.JPG", "image/jpeg"),
        ("photo.jpeg", "image/jpeg"),
        ("logo.gif", "image/png"),
        ("no-extension", "image/png"),
    ],
)
def test_guess_image_mime(filename: str, expected: str):
    assert guess_image_mime(filename) == expected


def test_stage_file_exposes_file_and_removes_it(scratch_dir: Path):
    with stage_file(b"abc" * 100, "banner-welcome.webp", scratch_dir) as staged:
        assert staged.path == scratch_dir / "banner-welcome.webp"
        assert staged.path.exists()
        assert staged.size_bytes == 300
        assert staged.mime_type == "image/webp"
        assert staged.stream.read() == b"abc" * 100

    assert not staged.path.exists()
    assert staged.stream.closed


def test_stage_file_removes_file_when_block_raises(scratch_dir: Path):
    with pytest.raises(RuntimeError):
        with stage_file(b"data", "broken.png", scratch_dir) as staged:
            raise RuntimeError("upload failed")

    assert not staged.path.exists()


def test_stage_file_tolerates_file_already_gone(scratch_dir: Path):
    with stage_file(b"data", "gone.jpg", scratch_dir) as staged:
        staged.stream.close()
        staged.path.unlink()

    assert not (scratch_dir / "gone.jpg").exists()


def test_stage_file_creates_missing_scratch_dir(tmp_path: Path):
    target = tmp_path / "nested" / "scratch"

    with stage_file(b"x", "a.webp", target) as staged:
        assert staged.path.parent == target
