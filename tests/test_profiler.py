"""
End-to-end tests: instrument a real module namespace and run it.
"""

import types

import pytest

from callclock.profiler import CallClock

FIBONACCI = """
import json

def fibonacci(x):
    if x == 0:
        return 0
    if x == 1:
        return 1
    return fibonacci(x - 2) + fibonacci(x - 1)

def main():
    return [fibonacci(x) for x in range(6)]

def dump(values):
    return json.dumps(values)
"""


@pytest.fixture
def program():
    module = types.ModuleType("program")
    exec(FIBONACCI, vars(module))
    return module


def test_profile_fibonacci(program):
    profiler = CallClock()
    profiler.start(program)
    assert program.main() == [0, 1, 1, 2, 3, 5]
    profiler.stop()

    report = profiler.generate_report()
    fib = report.functions[("fibonacci",)]
    main = report.functions[("main",)]

    # fib(0..5) makes 1, 1, 3, 5, 9, 15 calls
    assert fib.num_calls == 34
    assert main.num_calls == 1
    assert main.calls[("fibonacci",)].num_calls == 6
    assert fib.calls[("fibonacci",)].num_calls == 28
    assert fib.min_time <= fib.max_time <= fib.total_time
    assert main.calls[("fibonacci",)].total_time <= main.total_time
    assert report.total_time >= main.total_time
    assert program.fibonacci.__name__ == "fibonacci"
    assert not hasattr(program.fibonacci, "__wrapped__")


def test_imported_module_functions_are_timed(program):
    profiler = CallClock()
    with profiler.session(program):
        assert program.dump([1, 2]) == "[1, 2]"
        assert profiler.active
    assert not profiler.active

    report = profiler.generate_report()
    assert report.functions[("dump",)].calls[("json", "dumps")].num_calls == 1
    assert ("json", "dumps") in report.functions


def test_session_restores_on_error(program):
    profiler = CallClock()
    original = program.fibonacci
    with pytest.raises(RuntimeError):
        with profiler.session(program):
            raise RuntimeError("stop")
    assert program.fibonacci is original


def test_functions_not_called_are_absent(program):
    profiler = CallClock()
    with profiler.session(program):
        program.fibonacci(1)
    assert set(profiler.generate_report().functions) == {("fibonacci",)}


def test_profiler_does_not_instrument_itself():
    import callclock

    root = {"callclock": callclock, "CallClock": CallClock}
    profiler = CallClock()
    profiler.start(root)
    assert profiler.hook_manager.records == []
    assert not profiler.active
    assert CallClock.start.__module__ == "callclock.profiler"


COPYING = """
import copy

def work(n):
    return n + 1

def main():
    return [work(n) for n in range(3)]
"""


def test_mid_session_report_with_copy_reachable():
    module = types.ModuleType("copying")
    exec(COPYING, vars(module))
    profiler = CallClock()
    profiler.start(module)
    try:
        module.main()
        report = profiler.generate_report()
        assert set(report.functions) == {("main",), ("work",)}
        assert report.functions[("work",)].num_calls == 3

        # the snapshot left the live session untouched
        module.main()
    finally:
        profiler.stop()

    final = profiler.generate_report()
    assert set(final.functions) == {("main",), ("work",)}
    assert final.functions[("main",)].num_calls == 2
    assert final.functions[("main",)].calls[("work",)].num_calls == 6
    assert report.functions[("main",)].num_calls == 1
