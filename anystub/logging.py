"""
anystub Logging Module

Provides rich logging for stub installation and restoration:
- Colored output keyed to the stub lifecycle
- Plain format for CI logs and files
- Restoration failures highlighted

Usage:
    from anystub.logging import setup_logging, get_logger

    logger = setup_logging(level="DEBUG")
    logger.method_stubbed("Account.any_instance.balance", "lookup_hook")
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text
from rich.theme import Theme

# =============================================================================
# CUSTOM THEME
# =============================================================================

ANYSTUB_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "debug": "dim",
        "stub.method": "bold white",
        "stub.installed": "bold green",
        "stub.restored": "bold blue",
        "stub.failed": "bold red",
        "strategy": "magenta",
    }
)

# =============================================================================
# SHARED CONSOLE
# =============================================================================

console = Console(theme=ANYSTUB_THEME)


# =============================================================================
# CUSTOM LOG HANDLER
# =============================================================================


class AnyStubRichHandler(RichHandler):
    """Rich handler with lifecycle icons in the level column."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("show_time", True)
        kwargs.setdefault("show_path", False)
        kwargs.setdefault("rich_tracebacks", True)
        super().__init__(*args, **kwargs)

    def get_level_text(
        self, record: logging.LogRecord
    ) -> Text:
        level_name = record.levelname

        icon = {
            "DEBUG": "·",
            "INFO": "›",
            "WARNING": "!",
            "ERROR": "✗",
            "CRITICAL": "✗",
        }.get(level_name, "•")

        style = {
            "DEBUG": "dim",
            "INFO": "cyan",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold red",
        }.get(level_name, "white")

        return Text(f"{icon} {level_name:<8}", style=style)


# =============================================================================
# ANYSTUB LOGGER
# =============================================================================


class AnyStubLogger:
    """
    High-level logging interface for anystub.

    Provides semantic logging methods for the stub lifecycle:
    - method_stubbed()
    - method_restored()
    - restore_failed()
    - etc.

    Example:
        logger = AnyStubLogger("interception")
        logger.shim_installed("Account", "lookup_hook")
    """

    def __init__(self, name: str, level: Optional[str] = None):
        """
        Initialize an anystub logger.

        Args:
            name: Logger name, nested under ``anystub``
            level: Optional level override (DEBUG, INFO, WARNING, ERROR)
        """
        self.name = name
        self._logger = logging.getLogger(f"anystub.{name}")
        if level is not None:
            self._logger.setLevel(
                getattr(logging, level.upper())
            )

    def _log(self, level: int, message: str, **kwargs):
        extra = {"markup": True, **kwargs}
        self._logger.log(level, message, extra=extra)

    # =========================================================================
    # SEMANTIC LOGGING METHODS
    # =========================================================================

    def strategy_selected(
        self, strategy: str, detected: bool
    ):
        """Log which restoration strategy an interceptor uses."""
        how = "detected" if detected else "configured"
        self._log(
            logging.DEBUG,
            f"Restoration strategy [strategy]{strategy}[/strategy] ({how})",
        )

    def shim_installed(self, class_name: str, strategy: str):
        """Log a dispatch shim being placed on a class."""
        self._log(
            logging.DEBUG,
            f"[stub.installed]Shim installed[/stub.installed] on "
            f"[stub.method]{class_name}[/stub.method] "
            f"[dim]({strategy})[/dim]",
        )

    def shim_removed(self, class_name: str):
        """Log a dispatch shim being unlinked from a class."""
        self._log(
            logging.DEBUG,
            f"[stub.restored]Shim removed[/stub.restored] from "
            f"[stub.method]{class_name}[/stub.method]",
        )

    def method_stubbed(
        self, label: str, visibility: str, existed_before: bool
    ):
        """Log a forwarding entry being defined."""
        origin = "own" if existed_before else "inherited"
        self._log(
            logging.DEBUG,
            f"[stub.installed]Stubbed[/stub.installed] "
            f"[stub.method]{label}[/stub.method] "
            f"[dim]({visibility}, {origin})[/dim]",
        )

    def method_restored(self, label: str):
        """Log an original method being reinstated."""
        self._log(
            logging.DEBUG,
            f"[stub.restored]Restored[/stub.restored] "
            f"[stub.method]{label}[/stub.method]",
        )

    def unstub_ignored(self, label: str, reason: str):
        """Log an unstub request that had nothing to do."""
        self._log(
            logging.DEBUG,
            f"[dim]Unstub of {label} ignored: {reason}[/dim]",
        )

    def restore_failed(self, label: str, error: BaseException):
        """Log a restoration failure that teardown will carry on past."""
        self._logger.error(
            "Restoring %s failed: %s: %s",
            label,
            type(error).__name__,
            error,
        )

    def error(self, message: str, exc_info: bool = False):
        """Log error."""
        self._logger.error(message, exc_info=exc_info)

    def warning(self, message: str):
        """Log warning."""
        self._log(
            logging.WARNING, f"[warning]{message}[/warning]"
        )

    def info(self, message: str):
        """Log info."""
        self._log(logging.INFO, message)

    def debug(self, message: str):
        """Log debug."""
        self._log(logging.DEBUG, f"[dim]{message}[/dim]")


# =============================================================================
# SETUP FUNCTION
# =============================================================================


def setup_logging(
    level: str = "INFO",
    rich_output: bool = True,
    log_file: Optional[str] = None,
) -> AnyStubLogger:
    """
    Configure anystub logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        rich_output: Enable rich console output (disable for CI logs)
        log_file: Optional file path for log output

    Returns:
        AnyStubLogger instance

    Example:
        logger = setup_logging(level="DEBUG", rich_output=False)
        logger.info("Interceptor ready")
    """
    root_logger = logging.getLogger("anystub")
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    if rich_output:
        handler = AnyStubRichHandler(
            console=Console(theme=ANYSTUB_THEME, stderr=True),
            show_time=True,
            show_path=False,
        )
        handler.setFormatter(
            logging.Formatter("%(message)s")
        )
        root_logger.addHandler(handler)
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    return AnyStubLogger("main")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def get_logger(name: str) -> AnyStubLogger:
    """
    Get or create an anystub logger instance.

    Args:
        name: Logger name

    Returns:
        AnyStubLogger instance
    """
    return AnyStubLogger(name)
