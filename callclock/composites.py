# File: composites.py
"""
Uniform enumerate/get/set access to the things discovery walks through.

A composite is either native (an exact dict, a module or a mutable class,
enumerated through its namespace dict) or protocol driven (any other object
whose type implements ``keys``, ``__getitem__`` and ``__setitem__``).
"""
import logging
from types import ModuleType
from typing import Any, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Entries of the iteration protocol itself; never user content.
PROTOCOL_KEYS = ("keys", "__getitem__", "__setitem__")

_MISSING = object()

# CPython type flags
_TPFLAGS_IMMUTABLETYPE = 1 << 8
_TPFLAGS_HEAPTYPE = 1 << 9


def _is_mutable_class(value: Any) -> bool:
    if not isinstance(value, type):
        return False
    flags = value.__flags__
    return bool(flags & _TPFLAGS_HEAPTYPE) and not flags & _TPFLAGS_IMMUTABLETYPE


class Composite:
    """
    Base capability: ``members``, ``get`` and ``set`` over a target object.
    ``namespace`` is the object whose identity defines the composite.
    """
    protocol = False

    def __init__(self, target: Any) -> None:
        self.target = target

    @property
    def namespace(self) -> Any:
        return self.target

    def members(self) -> List[Tuple[Any, Any]]:
        raise NotImplementedError

    def get(self, key: Any, default: Any = _MISSING) -> Any:
        raise NotImplementedError

    def set(self, key: Any, value: Any) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {type(self.target).__name__} at {id(self.target):#x}>"


class NativeComposite(Composite):

    @property
    def namespace(self) -> Any:
        # the builtins module and any module's __builtins__ dict share one namespace
        if isinstance(self.target, ModuleType):
            return vars(self.target)
        return self.target

    def _mapping(self):
        if type(self.target) is dict:
            return self.target
        # raw class dict: functions stay undecorated by the descriptor protocol
        return vars(self.target)

    def members(self) -> List[Tuple[Any, Any]]:
        return list(self._mapping().items())

    def get(self, key: Any, default: Any = _MISSING) -> Any:
        return self._mapping().get(key, default)

    def set(self, key: Any, value: Any) -> None:
        if type(self.target) is dict:
            self.target[key] = value
        else:
            setattr(self.target, key, value)


class ProtocolComposite(Composite):
    protocol = True

    def members(self) -> List[Tuple[Any, Any]]:
        try:
            keys = list(self.target.keys())
        except Exception as e:
            logger.debug("cannot enumerate %r, treating it as a leaf: %s", self, e)
            return []
        result = []
        for key in keys:
            if isinstance(key, str) and key in PROTOCOL_KEYS:
                continue
            value = self.get(key)
            if value is not _MISSING:
                result.append((key, value))
        return result

    def get(self, key: Any, default: Any = _MISSING) -> Any:
        try:
            return self.target[key]
        except Exception:
            return default

    def set(self, key: Any, value: Any) -> None:
        self.target[key] = value


def is_native(value: Any) -> bool:
    return type(value) is dict or isinstance(value, ModuleType) or _is_mutable_class(value)


def has_protocol(value: Any) -> bool:
    if type(value) is dict or isinstance(value, type):
        return False
    cls = type(value)
    return all(callable(getattr(cls, name, None)) for name in PROTOCOL_KEYS)


def as_composite(value: Any) -> Optional[Composite]:
    """Return a composite handle for ``value``, or None when it is a leaf."""
    if has_protocol(value):
        return ProtocolComposite(value)
    if is_native(value):
        return NativeComposite(value)
    return None


def same_composite(a: Optional[Composite], b: Optional[Composite]) -> bool:
    """Identity predicate over composite handles."""
    if a is None or b is None:
        return False
    return a.namespace is b.namespace
