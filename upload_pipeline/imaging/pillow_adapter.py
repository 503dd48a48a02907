from pathlib import Path
from typing import Any

from PIL import Image, ImageOps

from upload_pipeline.imaging.base import BaseImageProcessor
from upload_pipeline.uploads.exceptions import ImageProcessingError
from upload_pipeline.uploads.models import Size

# modes JPEG can encode directly
_JPEG_MODES = {"RGB", "L", "CMYK"}


def _output_format(destination: str) -> str:
    extension = Path(destination).suffix.lower()
    image_format = Image.registered_extensions().get(extension)
    if image_format is None:
        raise ImageProcessingError(f"Unsupported image extension '{extension}' for {destination}")
    return image_format


def _save_options(image_format: str, quality: int) -> dict[str, Any]:
    """Map a 1..100 quality onto the encoder's own option."""
    if image_format == "PNG":
        return {"compress_level": round((100 - quality) * 9 / 100)}
    if image_format in {"JPEG", "WEBP"}:
        return {"quality": quality}
    return {}


class PillowImageProcessor(BaseImageProcessor):
    """Resizes and thumbnails images with Pillow."""

    def resize(self, source: str, destination: str, size: Size, quality: int) -> None:
        try:
            with Image.open(source) as img:
                image = ImageOps.exif_transpose(img)
                image.thumbnail((size.width, size.height), Image.Resampling.LANCZOS)
                self._save(image, destination, quality)
        except ImageProcessingError:
            raise
        except Exception as exc:
            raise ImageProcessingError(f"Pillow resize of {source} failed: {exc}") from exc

    def thumbnail(self, source: str, destination: str, size: Size, quality: int) -> None:
        try:
            with Image.open(source) as img:
                image = ImageOps.fit(
                    ImageOps.exif_transpose(img),
                    (size.width, size.height),
                    Image.Resampling.LANCZOS,
                )
                self._save(image, destination, quality)
        except ImageProcessingError:
            raise
        except Exception as exc:
            raise ImageProcessingError(f"Pillow thumbnail of {source} failed: {exc}") from exc

    def _save(self, image: Image.Image, destination: str, quality: int) -> None:
        image_format = _output_format(destination)
        if image_format == "JPEG" and image.mode not in _JPEG_MODES:
            image = image.convert("RGB")
        image.save(destination, format=image_format, **_save_options(image_format, quality))
