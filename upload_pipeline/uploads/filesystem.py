import shutil
from pathlib import Path

from upload_pipeline.uploads.exceptions import FileSaveError

DIRECTORY_MODE = 0o775


def create_directory(path: str | Path, mode: int = DIRECTORY_MODE) -> None:
    """Create ``path`` and any missing parents; existing directories are fine."""
    Path(path).mkdir(mode=mode, parents=True, exist_ok=True)


def remove_directory(path: str | Path) -> None:
    """Recursively delete ``path``. A missing directory is not an error."""
    target = Path(path)
    if target.is_symlink():
        target.unlink()
        return
    if target.is_dir():
        shutil.rmtree(target)


def copy_file(source: str | Path, destination: str | Path) -> None:
    """Copy the staged upload verbatim, leaving the temp file for the host.

    Raises:
        FileSaveError: if the source cannot be read or the destination written.
    """
    try:
        shutil.copyfile(source, destination)
    except OSError as exc:
        raise FileSaveError(f"Error saving file to {destination}: {exc}") from exc
