# File: hook_manager.py
import threading
import logging
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from callclock.discovery import CallableRecord
from callclock.utils import make_wrapper

logger = logging.getLogger(__name__)


def safe_hook(fn):
    """
    Decorator: run a before/after hook, but log and drop whatever it raises
    so a broken hook cannot change how the instrumented program behaves.
    """
    @wraps(fn)
    def wrapper(path, context):
        try:
            return fn(path, context)
        except Exception as e:
            logger.exception("instrumentation hook failed for %s: %s", ".".join(path), e)
            return None
    return wrapper


class HookManager:
    """
    Installs forwarding wrappers in place of discovered functions and puts
    the originals back on stop. One session at a time.
    """
    def __init__(self) -> None:
        self._local = threading.local()
        # record identity -> (record, installed wrapper)
        self._installed: Dict[int, Tuple[CallableRecord, Callable]] = {}
        self._root: Any = None
        self.active = False
        self.owner_thread: Optional[int] = None

    @property
    def records(self) -> List[CallableRecord]:
        return [record for record, _ in self._installed.values()]

    def start(
        self,
        root: Any,
        records: List[CallableRecord],
        before: Callable,
        after: Callable,
        context: Any = None,
    ) -> None:
        if self.active:
            logger.debug("instrumentation already active, start ignored")
            return
        if not records:
            logger.info("no functions found to instrument")
            return

        before = safe_hook(before)
        after = safe_hook(after)
        self.owner_thread = threading.get_ident()
        for record in records:
            wrapper = make_wrapper(record.original, record.path, before, after, context, self)
            try:
                record.composite.set(record.key, wrapper)
            except Exception as e:
                logger.debug("cannot instrument %s: %s", ".".join(record.path), e)
                continue
            self._installed[id(record)] = (record, wrapper)

        logger.info("instrumented %d functions", len(self._installed))
        self._root = root
        self.active = True

    def stop(self) -> None:
        if not self.active:
            logger.debug("instrumentation not active, stop ignored")
            return
        self.active = False
        for record, wrapper in self._installed.values():
            if record.composite.get(record.key) is not wrapper:
                logger.debug("%s was replaced during the session", ".".join(record.path))
            record.composite.set(record.key, record.original)
        logger.info("restored %d functions", len(self._installed))
        self._installed.clear()
        self._root = None
        self.owner_thread = None

    @contextmanager
    def suspended(self) -> Iterator[None]:
        """Run a block on this thread with every installed wrapper forwarding directly."""
        previous = getattr(self._local, "in_hook", False)
        self._local.in_hook = True
        try:
            yield
        finally:
            self._local.in_hook = previous
