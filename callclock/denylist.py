# File: denylist.py
import sys
from types import ModuleType
from typing import Any, Iterable, Sequence, Tuple

from callclock.composites import _MISSING, as_composite, same_composite

# Root-relative key paths of composites that are never searched: the root
# itself, the interpreter's own state and its module loading machinery.
DEFAULT_AVOID_PATHS: Tuple[Tuple[str, ...], ...] = (
    (),
    ("sys",),
    ("sys", "modules"),
    ("sys", "path_importer_cache"),
    ("builtins",),
    ("__builtins__",),
)

# the profiler itself and the import machinery
DEFAULT_EXCLUDE_MODULES: Tuple[str, ...] = (
    "callclock",
    "importlib",
    "_frozen_importlib",
    "_frozen_importlib_external",
)


def resolve(root: Any, path: Sequence[str]) -> Any:
    """
    Follow ``path`` from ``root`` by successive key lookups. A leading key
    the root does not hold is looked up in ``sys.modules``. Returns the
    ``_MISSING`` sentinel when any step fails.
    """
    current = root
    for depth, key in enumerate(path):
        composite = as_composite(current)
        value = composite.get(key) if composite is not None else _MISSING
        if value is _MISSING and depth == 0:
            value = sys.modules.get(key, _MISSING)
        if value is _MISSING:
            return _MISSING
        current = value
    return current


def _under(name: Any, prefixes: Iterable[str]) -> bool:
    if not isinstance(name, str):
        return False
    return any(name == p or name.startswith(p + ".") for p in prefixes)


class Denylist:
    """
    Decides whether a composite's subtree must be left alone during discovery.
    """
    def __init__(
        self,
        paths: Iterable[Sequence[str]] = DEFAULT_AVOID_PATHS,
        exclude_modules: Iterable[str] = DEFAULT_EXCLUDE_MODULES,
    ) -> None:
        self.paths = [tuple(p) for p in paths]
        self.exclude_modules = tuple(exclude_modules)

    def is_excluded(self, value: Any) -> bool:
        """True for modules, classes and functions that belong to an excluded package."""
        if isinstance(value, ModuleType):
            return _under(value.__name__, self.exclude_modules)
        return _under(getattr(value, "__module__", None), self.exclude_modules)

    def must_not_search(self, root: Any, candidate: Any) -> bool:
        composite = as_composite(candidate)
        if composite is None:
            return False
        if self.is_excluded(candidate):
            return True
        for path in self.paths:
            resolved = resolve(root, path)
            if resolved is _MISSING:
                continue
            if same_composite(as_composite(resolved), composite):
                return True
        return False
