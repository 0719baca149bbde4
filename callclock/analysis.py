# File: analysis.py
import copy
import logging
from typing import Any, List, Optional

from callclock.clock import Clock, PerfCounterClock
from callclock.report import CallsInformation, FunctionInformation, Path, Report

logger = logging.getLogger(__name__)


class CallStackFrame:
    __slots__ = ("path", "start")

    def __init__(self, path: Path, start: float) -> None:
        self.path = path
        self.start = start


class CallStackAggregator:
    """
    Default instrumentation: keeps the live call stack of instrumented
    functions and folds every call into per-function and per-edge timings.
    State belongs to one session and is reset at every start.
    """
    def __init__(self, clock: Optional[Clock] = None) -> None:
        self.clock = clock or PerfCounterClock()
        self.report = Report()
        self.stack: List[CallStackFrame] = []
        self._session_start: Optional[float] = None
        self._session_end: Optional[float] = None

    def reset(self) -> None:
        self.report = Report()
        self.stack = []
        self._session_start = None
        self._session_end = None

    def begin_session(self) -> None:
        self.reset()
        self._session_start = self.clock.current_time()

    def end_session(self) -> None:
        if self._session_start is None or self._session_end is not None:
            return
        self._session_end = self.clock.current_time()
        self.report.total_time = self._session_end - self._session_start

    def before(self, path: Path) -> None:
        if self.stack:
            caller = self.report.functions[self.stack[-1].path]
            caller.calls.setdefault(path, CallsInformation()).num_calls += 1
        self.report.functions.setdefault(path, FunctionInformation()).num_calls += 1
        self.stack.append(CallStackFrame(path, self.clock.current_time()))

    def after(self, path: Path) -> None:
        if not self.stack or self.stack[-1].path != path:
            logger.warning("unbalanced return from %s ignored", ".".join(path))
            return
        finish = self.clock.current_time()
        elapsed = finish - self.stack[-1].start
        info = self.report.functions[path]
        info.min_time = min(info.min_time, elapsed)
        info.total_time += elapsed
        info.max_time = max(info.max_time, elapsed)
        self.stack.pop()
        if self.stack:
            caller = self.report.functions[self.stack[-1].path]
            caller.calls[path].total_time += elapsed

    def generate_report(self) -> Report:
        """Snapshot of the report, partial while a session is running."""
        report = copy.deepcopy(self.report)
        if self._session_start is not None and self._session_end is None:
            report.total_time = self.clock.current_time() - self._session_start
        return report


def default_before(path: Path, context: Any) -> None:
    context.before(path)


def default_after(path: Path, context: Any) -> None:
    context.after(path)
