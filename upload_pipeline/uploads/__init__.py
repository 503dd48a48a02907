from upload_pipeline.uploads.exceptions import (
    ConfigurationError,
    FileSaveError,
    ImageProcessingError,
    ImageSupportError,
    UploadError,
)
from upload_pipeline.uploads.models import (
    CustomHandler,
    DynamicPath,
    ImagePolicy,
    Size,
    StaticPath,
    StepConfig,
    UploadConfig,
    UploadedFile,
)

__all__ = [
    "ConfigurationError",
    "CustomHandler",
    "DynamicPath",
    "FileSaveError",
    "ImagePolicy",
    "ImageProcessingError",
    "ImageSupportError",
    "Size",
    "StaticPath",
    "StepConfig",
    "UploadConfig",
    "UploadError",
    "UploadedFile",
]
