import logging
import sys
from typing import TextIO

_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class Log:
    """Centralized logging for the scanner, one named logger for every module."""

    _logger: logging.Logger = logging.getLogger("prospect_scanner")

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Set the level and attach a single stream handler (stdout by default).

        The CLI passes stderr so log lines never interleave with the rendered
        tables on stdout.
        """
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(stream or sys.stdout)
            handler.setFormatter(logging.Formatter(_FORMAT))
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, exc: BaseException | None = None, **kwargs: object) -> None:
        """Log an error; pass ``exc`` to include its traceback for diagnostics."""
        cls._logger.error(message, exc_info=exc, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
