from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

from upload_pipeline.uploads.models import UploadedFile


@pytest.fixture()
def square_jpeg(tmp_path: Path) -> Path:
    """A 500x500 RGB JPEG staged like a temp upload (no extension)."""
    path = tmp_path / "staging" / "php8Yq2"
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (500, 500), color=(200, 40, 40)).save(path, format="JPEG")
    return path


@pytest.fixture()
def wide_png(tmp_path: Path) -> Path:
    """An 800x400 RGBA PNG."""
    path = tmp_path / "staging" / "wide.png"
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", (800, 400), color=(10, 120, 200, 128)).save(path, format="PNG")
    return path


@pytest.fixture()
def make_upload() -> Callable[..., UploadedFile]:
    def _make(temp_name: Path | str, name: str = "photo.jpg") -> UploadedFile:
        return UploadedFile.from_path(temp_name, name)

    return _make
