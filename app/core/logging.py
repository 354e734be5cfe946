"""Logging setup shared by the API process."""
import logging
import sys
from logging.handlers import RotatingFileHandler

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging() -> None:
    """Configure root logging: a rotating file plus stderr.

    The log file lives at ``<log_dir>/latest.log``. DEBUG is enabled when the
    ``debug`` setting is on, otherwise ``log_level`` applies. Calling this
    again is a no-op once the root logger has handlers.
    """
    level = logging.DEBUG if settings.debug else settings.log_level.upper()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    try:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                settings.log_dir / "latest.log",
                maxBytes=5 * 1024 * 1024,
                backupCount=3,
            )
        )
    except OSError as e:
        # Read-only home directories (containers) still get stderr logging
        file_error = e

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
    if file_error is not None:
        logging.getLogger(__name__).warning(f"File logging disabled: {file_error}")
