"""
Logger implementation for passforge internal diagnostics.

Wraps stdlib logging with configurable handlers for console (stderr) and file.
The active logger is process-wide: ``get_logger()`` returns whatever
``configure_logging()`` installed last, or a NullLogger.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from ..core.interfaces.logger import ILogger

if TYPE_CHECKING:
    from ..core.models.config import LoggingConfig


class PassforgeLogger(ILogger):
    """
    Logger implementation using stdlib logging.

    Supports dual output to stderr and ~/.passforge/passforge.log.
    """

    LOG_FILE_PATH = Path.home() / ".passforge" / "passforge.log"
    MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 3

    LEVEL_MAP: ClassVar[dict[str, int]] = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(
        self,
        name: str = "passforge",
        level: str = "warning",
        console_enabled: bool = False,
        file_enabled: bool = False,
        log_file: Path | None = None,
    ) -> None:
        """
        Initialize logger.

        Args:
            name: Logger name
            level: Initial log level (debug, info, warning, error)
            console_enabled: Enable stderr output
            file_enabled: Enable rotating file output
            log_file: Override for the log file location
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(logging.DEBUG)  # Let handlers filter
        self._logger.handlers.clear()
        self._logger.propagate = False

        self._console_handler: logging.Handler | None = None
        self._file_handler: logging.Handler | None = None

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        log_level = self.LEVEL_MAP.get(level.lower(), logging.WARNING)

        if console_enabled:
            console = logging.StreamHandler(sys.stderr)
            console.setLevel(log_level)
            console.setFormatter(formatter)
            self._logger.addHandler(console)
            self._console_handler = console

        if file_enabled:
            self._setup_file_handler(formatter, log_level, log_file or self.LOG_FILE_PATH)

    def _setup_file_handler(self, formatter: logging.Formatter, level: int, path: Path) -> None:
        """Set up rotating file handler."""
        path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            path,
            maxBytes=self.MAX_FILE_SIZE,
            backupCount=self.BACKUP_COUNT,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        self._logger.addHandler(file_handler)
        self._file_handler = file_handler

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)

    def set_level(self, level: str) -> None:
        """Set log level for all handlers."""
        lvl = self.LEVEL_MAP.get(level.lower(), logging.WARNING)
        if self._console_handler:
            self._console_handler.setLevel(lvl)
        if self._file_handler:
            self._file_handler.setLevel(lvl)

    def close(self) -> None:
        """Detach and close all handlers."""
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()
        self._console_handler = None
        self._file_handler = None


class NullLogger(ILogger):
    """No-op logger for testing or when logging is disabled."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def set_level(self, level: str) -> None:
        pass


_active_logger: ILogger | None = None


def get_logger() -> ILogger:
    """Return the configured logger, or a NullLogger when none is configured."""
    if _active_logger is None:
        return NullLogger()
    return _active_logger


def set_logger(logger: ILogger | None) -> None:
    """Install ``logger`` as the process-wide logger (None to disable)."""
    global _active_logger
    previous = _active_logger
    _active_logger = logger
    if isinstance(previous, PassforgeLogger) and previous is not logger:
        previous.close()


def configure_logging(config: LoggingConfig) -> ILogger:
    """Create a logger from a logging config section and install it."""
    if not config.console and not config.file:
        logger: ILogger = NullLogger()
    else:
        logger = PassforgeLogger(
            level=config.level,
            console_enabled=config.console,
            file_enabled=config.file,
        )
    set_logger(logger)
    return logger
