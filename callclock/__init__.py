"""
callclock: call-graph timing by instrumenting every function reachable
from a root namespace.
"""
__version__ = "0.1.0"

from callclock.analysis import CallStackAggregator, default_after, default_before
from callclock.clock import Clock, PerfCounterClock
from callclock.composites import NativeComposite, ProtocolComposite, as_composite, same_composite
from callclock.denylist import DEFAULT_AVOID_PATHS, Denylist
from callclock.discovery import CallableRecord, discover
from callclock.hook_manager import HookManager
from callclock.profiler import CallClock
from callclock.report import CallsInformation, FunctionInformation, Report, format_report

__all__ = [
    "CallClock",
    "CallStackAggregator",
    "CallableRecord",
    "CallsInformation",
    "Clock",
    "DEFAULT_AVOID_PATHS",
    "Denylist",
    "FunctionInformation",
    "HookManager",
    "NativeComposite",
    "PerfCounterClock",
    "ProtocolComposite",
    "Report",
    "as_composite",
    "default_after",
    "default_before",
    "discover",
    "format_report",
    "same_composite",
]
