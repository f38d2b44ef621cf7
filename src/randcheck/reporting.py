"""
Progress and outcome reporting for test runs.

The driver only talks to a :class:`TestReporter`; what happens with the
callbacks is up to the implementation.  :class:`LoggingReporter` turns them
into :class:`LogMessage` descriptions and emits those through the standard
:mod:`logging` module; :class:`RecordingReporter` keeps them for inspection
in tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal, Protocol

from randcheck.backend import pp_value
from randcheck.evaluator import FailError, FailFalse, Pass, TestResult
from randcheck.types import assert_never


__all__: list[str] = [
    "DEFAULT_LOGGER_NAME",
    "LogLevel",
    "LogMessage",
    "LoggingReporter",
    "NullReporter",
    "RecordingReporter",
    "ReportEvent",
    "TestReporter",
    "describe_result",
    "emit_log",
]

DEFAULT_LOGGER_NAME = "randcheck"

LogLevel = Literal["debug", "info", "warning", "error", "critical"]


@dataclass(frozen=True)
class LogMessage:
    """Request to emit a log message.

    Attributes:
        kind: Discriminator for pattern matching. Always "LogMessage".
        level: Log level to emit.
        message: Log message payload.
        logger_name: Logger name to use; the package logger when empty.
    """

    kind: Literal["LogMessage"] = "LogMessage"
    level: LogLevel = "info"
    message: str = ""
    logger_name: str = ""


def emit_log(effect: LogMessage) -> None:
    """Emit ``effect`` on its logger."""
    logger = logging.getLogger(effect.logger_name or DEFAULT_LOGGER_NAME)
    match effect.level:
        case "debug":
            logger.debug(effect.message)
        case "info":
            logger.info(effect.message)
        case "warning":
            logger.warning(effect.message)
        case "error":
            logger.error(effect.message)
        case "critical":
            logger.critical(effect.message)
        case _:
            assert_never(effect.level)


def describe_result(result: TestResult) -> str:
    """One-paragraph human description of a single test outcome."""
    match result:
        case Pass():
            return "passed"
        case FailFalse(arguments=args):
            shown = "\n".join(f"  {pp_value(a)}" for a in args)
            return f"counterexample:\n{shown}" if args else "property is False"
        case FailError(error=err, arguments=args):
            shown = "\n".join(f"  {pp_value(a)}" for a in args)
            return f"evaluation failed: {err.describe()}\n{shown}" if args else err.describe()
        case _:
            assert_never(result)


class TestReporter(Protocol):
    """Callbacks invoked by the test driver."""

    def report_progress(self, completed: int, total: int) -> None:
        ...

    def clear_progress(self) -> None:
        ...

    def report_failure(self, result: TestResult) -> None:
        ...

    def report_success(self) -> None:
        ...


class NullReporter:
    """Ignores every callback."""

    def report_progress(self, completed: int, total: int) -> None:
        return None

    def clear_progress(self) -> None:
        return None

    def report_failure(self, result: TestResult) -> None:
        return None

    def report_success(self) -> None:
        return None


class LoggingReporter:
    """Reports through :func:`emit_log`.

    Progress goes out at debug level, success at info, failures at warning.
    """

    def __init__(self, prop: str, logger_name: str = DEFAULT_LOGGER_NAME) -> None:
        self._prop = prop
        self._logger_name = logger_name

    def _emit(self, level: LogLevel, message: str) -> None:
        emit_log(LogMessage(level=level, message=message, logger_name=self._logger_name))

    def report_progress(self, completed: int, total: int) -> None:
        self._emit("debug", f"{self._prop}: test {completed + 1}/{total}")

    def clear_progress(self) -> None:
        return None

    def report_failure(self, result: TestResult) -> None:
        self._emit("warning", f"{self._prop} FAILED, {describe_result(result)}")

    def report_success(self) -> None:
        self._emit("info", f"{self._prop} passed")


ReportEvent = (
    tuple[Literal["progress"], int, int]
    | tuple[Literal["clear"]]
    | tuple[Literal["failure"], TestResult]
    | tuple[Literal["success"]]
)


@dataclass
class RecordingReporter:
    """Records every callback in call order."""

    events: list[ReportEvent] = field(default_factory=list)

    def report_progress(self, completed: int, total: int) -> None:
        self.events.append(("progress", completed, total))

    def clear_progress(self) -> None:
        self.events.append(("clear",))

    def report_failure(self, result: TestResult) -> None:
        self.events.append(("failure", result))

    def report_success(self) -> None:
        self.events.append(("success",))

    def count(self, event: Literal["progress", "clear", "failure", "success"]) -> int:
        return sum(1 for recorded in self.events if recorded[0] == event)
