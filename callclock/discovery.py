# File: discovery.py
import inspect
import logging
from types import BuiltinFunctionType, FunctionType, MethodType
from typing import Any, Dict, List, Optional

from callclock.composites import Composite, as_composite
from callclock.denylist import Denylist
from callclock.report import Path

logger = logging.getLogger(__name__)


class CallableRecord:
    """
    One instrumentable function and the location it was found at.
    Records are compared by identity.
    """
    __slots__ = ("path", "composite", "key", "original")

    def __init__(self, path: Path, composite: Composite, key: Any, original: Any) -> None:
        self.path = path
        self.composite = composite
        self.key = key
        self.original = original

    @property
    def parent(self) -> Any:
        return self.composite.target

    def __repr__(self) -> str:
        return f"<CallableRecord {'.'.join(self.path)}>"


def should_wrap(composite: Composite, value: Any) -> bool:
    """
    Determine if a member can be replaced by a forwarding wrapper without
    changing how the program behaves.
    """
    if isinstance(value, type):
        return False
    if inspect.iscoroutinefunction(value) or inspect.isasyncgenfunction(value):
        return False
    # a plain function is the only callable that binds like a wrapper does
    if isinstance(composite.target, type):
        return isinstance(value, FunctionType)
    return isinstance(value, (FunctionType, BuiltinFunctionType, MethodType))


def _search(
    root: Any,
    composite: Composite,
    denylist: Denylist,
    results: List[CallableRecord],
    path: List[str],
    visited: Dict[int, Any],
) -> None:
    for key, value in composite.members():
        if value is composite.target:
            continue
        if denylist.must_not_search(root, value):
            continue
        child = as_composite(value)
        if child is not None:
            if id(child.namespace) in visited:
                continue
            visited[id(child.namespace)] = child.namespace
            path.append(str(key))
            _search(root, child, denylist, results, path, visited)
            path.pop()
        elif callable(value) and should_wrap(composite, value):
            if denylist.is_excluded(value):
                continue
            results.append(CallableRecord(tuple(path) + (str(key),), composite, key, value))


def discover(root: Any, denylist: Optional[Denylist] = None) -> List[CallableRecord]:
    """
    Walk everything reachable from ``root`` and return a record for each
    function found, in enumeration order. Each composite is searched once,
    at the first location it is discovered.
    """
    denylist = denylist or Denylist()
    results: List[CallableRecord] = []
    composite = as_composite(root)
    if composite is None:
        logger.debug("root %r is not a composite, nothing to discover", root)
        return results
    # namespaces are kept alive here so their ids stay unique
    visited = {id(composite.namespace): composite.namespace}
    _search(root, composite, denylist, results, [], visited)
    logger.debug("discovered %d functions under %r", len(results), composite)
    return results
