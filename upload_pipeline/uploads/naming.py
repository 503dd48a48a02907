import time
import uuid

from upload_pipeline.uploads.models import UploadedFile


def unique_token() -> str:
    """Microsecond timestamp plus a random suffix; unique within one clock tick."""
    return f"{time.time_ns() // 1000:x}{uuid.uuid4().hex[:12]}"


def generate_file_name(uploaded_file: UploadedFile, fixed_name: str | None = None) -> str:
    """Name under which the upload is stored in every step's directory.

    ``avatar`` + ``png`` gives ``avatar.png``; without a fixed name
    ``photo.jpg`` gives ``photo_<token>.jpg``.
    """
    if fixed_name:
        return f"{fixed_name}.{uploaded_file.extension}"
    return f"{uploaded_file.base_name}_{unique_token()}.{uploaded_file.extension}"
