import pytest

from callclock.clock import Clock


class MockClock(Clock):
    def __init__(self) -> None:
        self.time = 0.0

    def current_time(self) -> float:
        return self.time


@pytest.fixture
def mock_clock():
    return MockClock()


class Registry:
    """Opaque object that only speaks the keys/getitem/setitem protocol."""

    def __init__(self):
        self._members = {}

    def keys(self):
        return list(self._members)

    def __getitem__(self, key):
        return self._members[key]

    def __setitem__(self, key, value):
        self._members[key] = value


@pytest.fixture
def make_registry():
    def factory(**members):
        registry = Registry()
        # protocol entries stored beside the content, like a table that is
        # its own metatable
        registry["keys"] = registry.keys
        registry["__getitem__"] = registry.__getitem__
        registry["__setitem__"] = registry.__setitem__
        for key, value in members.items():
            registry[key] = value
        return registry
    return factory
