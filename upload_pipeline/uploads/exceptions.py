class UploadError(Exception):
    """Base exception for all upload-related errors."""


class ConfigurationError(UploadError):
    """Raised when the upload configuration is missing or malformed."""


class ImageSupportError(ConfigurationError):
    """Raised when no usable image-processing engine is configured."""


class FileSaveError(UploadError, OSError):
    """Raised when an uploaded file cannot be written to its destination."""


class ImageProcessingError(UploadError, OSError):
    """Raised when an image cannot be decoded, transformed or encoded."""


class RecordNotFoundError(Exception):
    """Raised when an update or delete matches no stored record."""
