"""
Pytest configuration and shared fixtures for build trace analyzer tests.
"""
import json
import pytest


CLANG_MARKER = {
    "cat": "", "pid": 1, "tid": 0, "ts": 0, "ph": "M",
    "name": "process_name", "args": {"name": "clang"}
}


@pytest.fixture
def clang_marker():
    """The metadata record identifying a clang time trace."""
    return dict(CLANG_MARKER)


@pytest.fixture
def trace_event():
    """Return a helper building one complete ("X") trace record."""
    def _event(name, ts, dur, detail=None, ph="X", tid=0):
        event = {"pid": 1, "tid": tid, "ph": ph, "ts": ts, "name": name}
        if ph == "X":
            event["dur"] = dur
        if detail is not None:
            event["args"] = {"detail": detail}
        return event

    return _event


@pytest.fixture
def write_trace(tmp_path):
    """Create a clang-style trace file and return its path."""
    def _write(filename, events, beginning_of_time=None, marker=True):
        trace_events = ([dict(CLANG_MARKER)] if marker else []) + list(events)
        document = {"traceEvents": trace_events}
        if beginning_of_time is not None:
            document["beginningOfTime"] = beginning_of_time
        file_path = tmp_path / filename
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w") as f:
            json.dump(document, f)
        return str(file_path)

    return _write


@pytest.fixture
def unit_events(trace_event):
    """Return a helper producing the records of one translation unit."""
    def _unit(header_us, start=0, template_us=10, function_us=20):
        # ExecuteCompiler [start, start+1000]
        #   Frontend [start, start+600]
        #     Source header.h [start+10, start+10+header_us]
        #       Source detail.h [start+12, start+14]
        #     InstantiateClass Foo<int> / InstantiateFunction Foo<double>
        #   Backend [start+600, start+1000]
        #     OptFunction bar(int)
        return [
            trace_event("ExecuteCompiler", start, 1000),
            trace_event("Frontend", start, 600),
            trace_event("Source", start + 10, header_us, detail="include/header.h"),
            trace_event("Source", start + 12, 2, detail="include/detail.h"),
            trace_event("InstantiateClass", start + 200, template_us, detail="Foo<int>"),
            trace_event("InstantiateFunction", start + 300, function_us, detail="Foo<double>"),
            trace_event("Backend", start + 600, 400),
            trace_event("OptFunction", start + 650, 50, detail="bar(int)"),
            trace_event("Total Frontend", 0, 600, tid=1),
        ]

    return _unit


@pytest.fixture
def sample_build(write_trace, unit_events):
    """Three translation units including include/header.h (5, 7 and 9 us to parse)."""
    return [
        write_trace("obj/a.cpp.json", unit_events(5, start=0), beginning_of_time=1_000_000),
        write_trace("obj/b.cpp.json", unit_events(7, start=0), beginning_of_time=1_000_500),
        write_trace("obj/c.cpp.json", unit_events(9, start=0), beginning_of_time=1_003_000),
    ]
