"""Logging utilities and the diagnostics channel for scrapbox2review.

The renderer reports every unsupported construct through a small
``DiagnosticLogger`` capability (``error`` and ``warn``) instead of raising.
``LoggingDiagnostics`` forwards those calls to the standard ``logging``
module and is the default sink; ``CollectingDiagnostics`` records them so the
CLI can summarize a run.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from scrapbox2review.constants import DiagnosticLevel

DIAGNOSTICS_LOGGER_NAME = "scrapbox2review.diagnostics"


@runtime_checkable
class DiagnosticLogger(Protocol):
    """Capability used by the renderer to report lossy conversions."""

    def error(self, message: str) -> object:
        """Report an unsupported construct."""
        ...

    def warn(self, message: str) -> object:
        """Report a construct that was converted with a caveat."""
        ...


class LoggingDiagnostics:
    """Diagnostics sink backed by a standard library logger.

    Parameters
    ----------
    logger : logging.Logger or None, default None
        Logger receiving the messages. Defaults to the
        ``scrapbox2review.diagnostics`` logger.

    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize the sink with the target logger."""
        self.logger = logger or logging.getLogger(DIAGNOSTICS_LOGGER_NAME)

    def error(self, message: str) -> None:
        """Log ``message`` at ERROR level."""
        self.logger.error(message)

    def warn(self, message: str) -> None:
        """Log ``message`` at WARNING level."""
        self.logger.warning(message)


@dataclass(frozen=True)
class Diagnostic:
    """A single message reported during a conversion."""

    level: DiagnosticLevel
    message: str


class CollectingDiagnostics:
    """Diagnostics sink that keeps every reported message.

    Parameters
    ----------
    forward_to : DiagnosticLogger or None, default None
        Optional sink that also receives every message.

    Examples
    --------
        >>> diagnostics = CollectingDiagnostics()
        >>> diagnostics.error("Unsupported syntax: #tag")
        >>> diagnostics.errors
        ['Unsupported syntax: #tag']

    """

    def __init__(self, forward_to: Optional[DiagnosticLogger] = None):
        """Initialize an empty collector."""
        self.forward_to = forward_to
        self.records: list[Diagnostic] = []

    def error(self, message: str) -> None:
        """Record an error message."""
        self.records.append(Diagnostic("error", message))
        if self.forward_to is not None:
            self.forward_to.error(message)

    def warn(self, message: str) -> None:
        """Record a warning message."""
        self.records.append(Diagnostic("warning", message))
        if self.forward_to is not None:
            self.forward_to.warn(message)

    @property
    def errors(self) -> list[str]:
        """Messages reported through ``error``."""
        return [record.message for record in self.records if record.level == "error"]

    @property
    def warnings(self) -> list[str]:
        """Messages reported through ``warn``."""
        return [record.message for record in self.records if record.level == "warning"]

    def clear(self) -> None:
        """Forget all recorded messages."""
        self.records.clear()


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the CLI.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names for debugging traces.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S" if trace_mode else None
    formatter = logging.Formatter(format_str, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_file)
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)

    return root_logger
