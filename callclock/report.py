# File: report.py
import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

Path = Tuple[str, ...]

RULE = "-" * 89


@dataclass
class CallsInformation:
    """Calls from one function to another: count and total time spent."""
    num_calls: int = 0
    total_time: float = 0.0


@dataclass
class FunctionInformation:
    num_calls: int = 0
    min_time: float = math.inf
    total_time: float = 0.0
    max_time: float = 0.0
    calls: Dict[Path, CallsInformation] = field(default_factory=dict)

    @property
    def average_time(self) -> float:
        if not self.num_calls:
            return 0.0
        return self.total_time / self.num_calls


@dataclass
class Report:
    functions: Dict[Path, FunctionInformation] = field(default_factory=dict)
    total_time: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"total_time": self.total_time, "functions": {}}
        for path, info in sorted(self.functions.items()):
            out["functions"][".".join(path)] = {
                "num_calls": info.num_calls,
                # a function that never returned has no samples
                "min_time": info.min_time if info.num_calls and math.isfinite(info.min_time) else None,
                "max_time": info.max_time,
                "total_time": info.total_time,
                "average_time": info.average_time,
                "calls": {
                    ".".join(callee): {"num_calls": c.num_calls, "total_time": c.total_time}
                    for callee, c in sorted(info.calls.items())
                },
            }
        return out


def format_report(report: Report) -> str:
    lines = [
        RULE,
        "Report:",
        RULE,
        "%-20s %7s  %14s %14s %14s %14s" % ("FUNC", "#", "MIN", "MAX", "TOTAL", "AVG"),
    ]
    for path, info in sorted(report.functions.items()):
        min_time = info.min_time if math.isfinite(info.min_time) else 0.0
        lines.append(
            "%-20s %7d  %14.9f %14.9f %14.9f %14.9f"
            % (".".join(path), info.num_calls, min_time, info.max_time,
               info.total_time, info.average_time)
        )
        for callee, calls in sorted(info.calls.items()):
            lines.append(
                "  %-18s %7d  %14s %14s %14.9f %14s"
                % (".".join(callee), calls.num_calls, "", "", calls.total_time, "")
            )
    lines.append(RULE)
    lines.append("total: %.9f" % report.total_time)
    return "\n".join(lines)


def write_report(report: Report, path: str) -> None:
    with open(path, "w") as f:
        json.dump(report.to_dict(), f, indent=2)
