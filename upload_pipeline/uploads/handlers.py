from upload_pipeline.imaging.base import BaseImageProcessor
from upload_pipeline.logging.logger import Log
from upload_pipeline.uploads.exceptions import ConfigurationError
from upload_pipeline.uploads.filesystem import copy_file
from upload_pipeline.uploads.models import CustomHandler, HandlerSpec, ImagePolicy


class HandlerExecutor:
    """Writes a step's outputs according to its handler."""

    def __init__(
        self,
        image_processor: BaseImageProcessor,
        thumbnail_prefix: str = "thumb-",
        original_prefix: str = "original-",
    ) -> None:
        self._image_processor = image_processor
        self._thumbnail_prefix = thumbnail_prefix
        self._original_prefix = original_prefix

    def execute(self, handler: HandlerSpec, tmp_file: str, folder: str, file_name: str) -> None:
        """Run ``handler`` for the staged upload ``tmp_file``.

        Outputs are named by plain concatenation of ``folder`` and the file
        name, so ``folder`` is expected to end with a separator.

        Raises:
            ConfigurationError: if ``handler`` is neither variant; nothing is written.
        """
        destination = f"{folder}{file_name}"

        if isinstance(handler, CustomHandler):
            handler.func(tmp_file, destination, folder)
            Log.debug("Custom handler finished", destination=destination)
        elif isinstance(handler, ImagePolicy):
            self._apply_policy(handler, tmp_file, folder, file_name)
        else:
            raise ConfigurationError(
                "Handler must be a CustomHandler or an ImagePolicy, "
                f"got {type(handler).__name__}"
            )

    def _apply_policy(self, policy: ImagePolicy, tmp_file: str, folder: str, file_name: str) -> None:
        self._image_processor.resize(
            tmp_file, f"{folder}{file_name}", policy.size, policy.quality
        )

        if policy.thumbnail_size is not None:
            self._image_processor.thumbnail(
                tmp_file,
                f"{folder}{self._thumbnail_prefix}{file_name}",
                policy.thumbnail_size,
                policy.effective_thumbnail_quality,
            )

        if policy.save_original:
            copy_file(tmp_file, f"{folder}{self._original_prefix}{file_name}")

        Log.debug(
            "Image policy applied",
            folder=folder,
            thumbnail=policy.thumbnail_size is not None,
            original=policy.save_original,
        )
