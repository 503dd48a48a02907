import logging
import sys
from typing import TextIO


class Log:
    """Centralized logging; keyword fields are appended as key=value pairs."""

    _logger: logging.Logger = logging.getLogger("upload_pipeline")

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Set the level and attach a single stream handler (stdout by default)."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(stream or sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @staticmethod
    def _format(message: str, fields: dict[str, object]) -> str:
        if not fields:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
        return f"{message} {pairs}"

    @classmethod
    def info(cls, message: str, **fields: object) -> None:
        cls._logger.info(cls._format(message, fields))

    @classmethod
    def warning(cls, message: str, **fields: object) -> None:
        cls._logger.warning(cls._format(message, fields))

    @classmethod
    def debug(cls, message: str, **fields: object) -> None:
        cls._logger.debug(cls._format(message, fields))
