# File: hook_loader.py
"""
Configuration loading. A ``callclock.json`` next to the profiled program can
override which composites are never searched and where the JSON report goes:

    {
      "denylist": [[], ["sys"], ["sys", "modules"]],
      "exclude_modules": ["callclock", "myapp.vendored"],
      "report": "callclock-report.json"
    }
"""
import json
import logging
from typing import Any, Dict, Optional

from callclock.clock import Clock
from callclock.denylist import DEFAULT_AVOID_PATHS, DEFAULT_EXCLUDE_MODULES, Denylist
from callclock.profiler import CallClock

logger = logging.getLogger(__name__)


def default_config() -> Dict[str, Any]:
    return {
        "denylist": [list(p) for p in DEFAULT_AVOID_PATHS],
        "exclude_modules": list(DEFAULT_EXCLUDE_MODULES),
        "report": None,
    }


def load_config(path: str = "callclock.json") -> Dict[str, Any]:
    """
    Load settings from a JSON config file, filling in defaults for missing
    keys. A missing file is not an error.
    """
    config = default_config()
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("no config at %s, using defaults", path)
        return config
    config.update({k: v for k, v in data.items() if k in config})
    return config


def create_profiler(config: Optional[Dict[str, Any]] = None, clock: Optional[Clock] = None) -> CallClock:
    config = config or default_config()
    denylist = Denylist(
        paths=config.get("denylist", DEFAULT_AVOID_PATHS),
        exclude_modules=config.get("exclude_modules", DEFAULT_EXCLUDE_MODULES),
    )
    profiler = CallClock(denylist=denylist)
    if clock is not None:
        profiler.set_clock(clock)
    return profiler
