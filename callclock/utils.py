# File: utils.py
from threading import get_ident as _get_ident
from functools import wraps
from typing import Any, Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from callclock.hook_manager import HookManager

Hook = Callable[[tuple, Any], None]


def make_wrapper(
    fn: Callable,
    path: tuple,
    before: Hook,
    after: Hook,
    context: Any,
    hook_mgr: "HookManager",
) -> Callable:
    """
    Return a wrapper that calls before/after around fn. Arguments and the
    result pass through untouched; after runs even when fn raises.
    """
    _local = hook_mgr._local

    @wraps(fn)
    def wrapper(*args, **kwargs):
        # only the session's own thread is observed, and never from inside a hook
        if (
            not hook_mgr.active
            or hook_mgr.owner_thread != _get_ident()
            or getattr(_local, "in_hook", False)
        ):
            return fn(*args, **kwargs)

        _local.in_hook = True
        try:
            before(path, context)
        finally:
            _local.in_hook = False

        try:
            return fn(*args, **kwargs)
        finally:
            _local.in_hook = True
            try:
                after(path, context)
            finally:
                _local.in_hook = False

    wrapper.__wrapped__ = fn
    return wrapper
