from upload_pipeline.config.settings import Settings
from upload_pipeline.imaging.base import BaseImageProcessor
from upload_pipeline.imaging.pillow_adapter import PillowImageProcessor
from upload_pipeline.uploads.exceptions import ImageSupportError


class ImageProcessorFactory:
    """Creates the image engine named by settings."""

    ENGINES: dict[str, type[BaseImageProcessor]] = {
        "pillow": PillowImageProcessor,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseImageProcessor:
        engine = settings.image_engine.lower()
        engine_cls = cls.ENGINES.get(engine)
        if engine_cls is None:
            raise ImageSupportError(
                f"Image engine '{engine}' is not available. Choose from: {list(cls.ENGINES)}"
            )
        return engine_cls()
