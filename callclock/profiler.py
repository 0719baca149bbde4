# File: profiler.py
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from callclock.analysis import CallStackAggregator, default_after, default_before
from callclock.clock import Clock
from callclock.denylist import Denylist
from callclock.discovery import discover
from callclock.hook_manager import HookManager
from callclock.report import Report


class CallClock:
    """
    Call-graph profiler for everything reachable from a root namespace.

        clock = CallClock()
        clock.start(module)
        module.main()
        clock.stop()
        report = clock.generate_report()
    """
    def __init__(self, denylist: Optional[Denylist] = None) -> None:
        self.denylist = denylist or Denylist()
        self.aggregator = CallStackAggregator()
        self.hook_manager = HookManager()

    @property
    def active(self) -> bool:
        return self.hook_manager.active

    def set_clock(self, clock: Clock) -> None:
        self.aggregator.clock = clock

    def get_default_context(self) -> CallStackAggregator:
        return self.aggregator

    def start(
        self,
        root: Any,
        before: Callable = default_before,
        after: Callable = default_after,
        context: Any = None,
    ) -> None:
        if self.hook_manager.active:
            return
        if context is None:
            context = self.aggregator
        if before is default_before or after is default_after:
            self.aggregator.begin_session()
        records = discover(root, self.denylist)
        self.hook_manager.start(root, records, before, after, context)

    def stop(self) -> None:
        self.hook_manager.stop()
        self.aggregator.end_session()

    def generate_report(self) -> Report:
        # the snapshot may run through instrumented library code (copy, dataclasses)
        with self.hook_manager.suspended():
            return self.aggregator.generate_report()

    @contextmanager
    def session(
        self,
        root: Any,
        before: Callable = default_before,
        after: Callable = default_after,
        context: Any = None,
    ) -> Iterator["CallClock"]:
        self.start(root, before, after, context)
        try:
            yield self
        finally:
            self.stop()
