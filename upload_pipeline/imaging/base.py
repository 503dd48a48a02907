from abc import ABC, abstractmethod

from upload_pipeline.uploads.models import Size


class BaseImageProcessor(ABC):
    """Contract for the image engines used by image policies."""

    @abstractmethod
    def resize(self, source: str, destination: str, size: Size, quality: int) -> None:
        """Scale ``source`` to fit inside ``size`` and write it to ``destination``.

        The aspect ratio is preserved and the image is never enlarged.

        Raises:
            ImageProcessingError: if the image cannot be read, scaled or saved.
        """

    @abstractmethod
    def thumbnail(self, source: str, destination: str, size: Size, quality: int) -> None:
        """Crop-to-fit ``source`` to exactly ``size`` and write it to ``destination``.

        Raises:
            ImageProcessingError: if the image cannot be read, cropped or saved.
        """
