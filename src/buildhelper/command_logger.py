"""
Logger capability consumed by the command runner.

Callers can hand the runner anything exposing ``info`` and ``trace``;
``debug`` is optional and falls back to ``trace`` when missing. A standard
``logging.Logger`` is adapted automatically, and the absence of a logger is
represented by a no-op implementation so the runner never has to check for
``None``.
"""

import logging
from typing import Any, Optional, Protocol, runtime_checkable

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


@runtime_checkable
class CommandLogger(Protocol):
    """Leveled write operations used to report command executions."""

    def info(self, message: str) -> None: ...

    def trace(self, message: str) -> None: ...


class NullCommandLogger:
    """Discards everything."""

    def info(self, message: str) -> None:
        pass

    def debug(self, message: str) -> None:
        pass

    def trace(self, message: str) -> None:
        pass

    def __repr__(self) -> str:
        return "NullCommandLogger()"


class LoggingCommandLogger:
    """
    Adapts a ``logging.Logger`` (or ``LoggerAdapter``) to CommandLogger.

    ``trace`` is written at the custom TRACE level, below DEBUG.
    """

    def __init__(self, target: Any):
        self.target = target

    def info(self, message: str) -> None:
        self.target.info(message)

    def debug(self, message: str) -> None:
        self.target.debug(message)

    def trace(self, message: str) -> None:
        self.target.log(TRACE, message)

    def __repr__(self) -> str:
        return f"LoggingCommandLogger({self.target!r})"


class TraceDebugCommandLogger:
    """Wraps a logger without ``debug``, sending debug messages to ``trace``."""

    def __init__(self, target: CommandLogger):
        self.target = target

    def info(self, message: str) -> None:
        self.target.info(message)

    def debug(self, message: str) -> None:
        self.target.trace(message)

    def trace(self, message: str) -> None:
        self.target.trace(message)

    def __repr__(self) -> str:
        return f"TraceDebugCommandLogger({self.target!r})"


NULL_LOGGER = NullCommandLogger()


def as_command_logger(candidate: Optional[Any]) -> CommandLogger:
    """
    Normalize a user supplied logger into a CommandLogger with ``debug``.

    Args:
        candidate: None, a ``logging.Logger``/``logging.LoggerAdapter``, or an
            object implementing CommandLogger, with or without ``debug``.

    Returns:
        A CommandLogger instance that also provides ``debug``.

    Raises:
        TypeError: If the object does not expose info() and trace().
    """
    if candidate is None:
        return NULL_LOGGER
    if isinstance(candidate, (logging.Logger, logging.LoggerAdapter)):
        return LoggingCommandLogger(candidate)
    if isinstance(candidate, CommandLogger):
        if callable(getattr(candidate, "debug", None)):
            return candidate
        return TraceDebugCommandLogger(candidate)
    raise TypeError(
        f"logger must provide info() and trace(), got {type(candidate).__name__}"
    )
