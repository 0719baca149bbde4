"""
Unit tests for report rendering.
"""

import json
import math

from callclock.report import (
    CallsInformation,
    FunctionInformation,
    Report,
    format_report,
    write_report,
)


def sample_report():
    return Report(
        functions={
            ("foo",): FunctionInformation(
                num_calls=1,
                min_time=0.6,
                total_time=0.6,
                max_time=0.6,
                calls={("bar",): CallsInformation(2, 0.15)},
            ),
            ("bar",): FunctionInformation(num_calls=2, min_time=0.05, total_time=0.15, max_time=0.1),
        },
        total_time=1.2,
    )


def test_function_information_defaults():
    info = FunctionInformation()
    assert info.num_calls == 0
    assert math.isinf(info.min_time)
    assert info.total_time == 0.0
    assert info.max_time == 0.0
    assert info.calls == {}
    assert info.average_time == 0.0


def test_average_time():
    assert sample_report().functions[("bar",)].average_time == 0.075


def test_format_report_table():
    text = format_report(sample_report())
    lines = text.splitlines()

    assert lines[1] == "Report:"
    assert lines[3].split() == ["FUNC", "#", "MIN", "MAX", "TOTAL", "AVG"]
    # sorted by path: bar before foo
    assert lines[4].split() == ["bar", "2", "0.050000000", "0.100000000", "0.150000000", "0.075000000"]
    assert lines[5].split() == ["foo", "1", "0.600000000", "0.600000000", "0.600000000", "0.600000000"]
    assert lines[6].startswith("  bar")
    assert lines[6].split() == ["bar", "2", "0.150000000"]
    assert lines[-1] == "total: 1.200000000"


def test_format_report_dotted_paths_and_unreturned_calls():
    report = Report(functions={("pkg", "mod", "fn"): FunctionInformation(num_calls=1)})
    line = format_report(report).splitlines()[4]
    assert line.split()[:3] == ["pkg.mod.fn", "1", "0.000000000"]


def test_to_dict_and_write_report(tmp_path):
    out = tmp_path / "report.json"
    write_report(sample_report(), str(out))
    data = json.loads(out.read_text())

    assert data["total_time"] == 1.2
    assert list(data["functions"]) == ["bar", "foo"]
    assert data["functions"]["foo"]["calls"] == {"bar": {"num_calls": 2, "total_time": 0.15}}
    assert data["functions"]["bar"]["min_time"] == 0.05


def test_to_dict_unsampled_min_time_is_null():
    report = Report(functions={("foo",): FunctionInformation(num_calls=1)})
    assert report.to_dict()["functions"]["foo"]["min_time"] is None
