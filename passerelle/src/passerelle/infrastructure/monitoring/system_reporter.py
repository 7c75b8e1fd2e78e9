"""
System Reporter - Centralized logging for Passerelle.

Every line goes to stdout; a ``<name>.log`` file is added when LOG_DIR is
set. Lines read ``timestamp | LEVEL | [context] message``.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from passerelle.config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MIN_VERBOSE = 0
MAX_VERBOSE = 3


def _clamp_verbose(level: int) -> int:
    return max(MIN_VERBOSE, min(MAX_VERBOSE, level))


def _file_of(logger: logging.Logger) -> Optional[str]:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return handler.baseFilename
    return None


class SystemReporter:
    """
    Logger with a second, verbosity-based filter on top of log levels.

    A message is emitted only when its ``verbose_level`` is at or below
    the reporter's verbosity:
        0 = Errors and state changes the operator must see
        1 = Bridge milestones (default)
        2 = Per-stage detail
        3 = Wire-level debugging
    """

    def __init__(
        self,
        name: str = "passerelle",
        log_dir: Optional[str] = None,
        level: Optional[int] = None,
        verbose: int = 1,
    ) -> None:
        """
        Args:
            name: Logger name, also the log file stem
            log_dir: Directory for the log file; stdout only when None
            level: Standard logging level; INFO unless already configured
            verbose: Verbosity threshold, clamped to 0-3

        A reporter without ``log_dir`` reuses the handlers already attached
        to its logger; only a reporter given ``log_dir`` replaces them.
        """
        self.name = name
        self.verbose = _clamp_verbose(verbose)
        self.log_file: Optional[str] = None

        self.logger = logging.getLogger(name)
        configured = bool(self.logger.handlers)

        if level is not None:
            self.logger.setLevel(level)
        elif not configured:
            self.logger.setLevel(logging.INFO)

        if configured and not log_dir:
            self.log_file = _file_of(self.logger)
            return

        # Loggers are process-global; rebuilding a reporter replaces handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

        if log_dir:
            directory = Path(log_dir).absolute()
            directory.mkdir(parents=True, exist_ok=True)
            self.log_file = str(directory / f"{name}.log")
            handlers.append(logging.FileHandler(self.log_file, encoding="utf-8"))

        for handler in handlers:
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def set_verbose(self, level: int) -> None:
        self.verbose = _clamp_verbose(level)
        self.info(
            f"Verbosity set to {self.verbose}",
            context="SystemReporter",
            verbose_level=0,
        )

    def _emit(self, level: int, msg: str, context: str, verbose_level: int) -> None:
        if verbose_level <= self.verbose:
            self.logger.log(level, f"[{context}] {msg}")

    def debug(self, msg: str, context: str = "system", verbose_level: int = 3) -> None:
        self._emit(logging.DEBUG, msg, context, verbose_level)

    def info(self, msg: str, context: str = "system", verbose_level: int = 1) -> None:
        self._emit(logging.INFO, msg, context, verbose_level)

    def warning(self, msg: str, context: str = "system", verbose_level: int = 1) -> None:
        self._emit(logging.WARNING, msg, context, verbose_level)

    def error(self, msg: str, context: str = "system", verbose_level: int = 0) -> None:
        self._emit(logging.ERROR, msg, context, verbose_level)

    def critical(
        self, msg: str, context: str = "system", verbose_level: int = 0
    ) -> None:
        self._emit(logging.CRITICAL, msg, context, verbose_level)


def reporter_from_settings(
    name: str = "passerelle",
    settings: Optional[Settings] = None,
) -> SystemReporter:
    """Build a reporter from the LOG_* settings (global settings by default)."""
    settings = settings or get_settings()
    return SystemReporter(
        name=name,
        log_dir=settings.LOG_DIR,
        level=getattr(logging, settings.LOG_LEVEL),
        verbose=settings.LOG_VERBOSE,
    )
