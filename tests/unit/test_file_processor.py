"""
Unit tests for build_trace_analyzer.processors.file_processor module.
"""
import json

import pytest
from build_trace_analyzer.core.errors import MalformedTrace, NotATargetTrace, UnreadableFile
from build_trace_analyzer.core.types import BuildEventType
from build_trace_analyzer.processors.file_processor import TraceFileProcessor


@pytest.fixture
def processor():
    return TraceFileProcessor()


class TestTraceFileProcessor:
    """Tests for decoding -ftime-trace files."""

    def test_complete_events(self, processor, write_trace, trace_event):
        """X records become records with their own duration and detail."""
        path = write_trace("a.cpp.json", [
            trace_event("Source", 10, 5, detail="include/header.h"),
            trace_event("InstantiateFunction", 20, 3, detail="Foo<int>"),
        ])
        records = processor.process_file(path)

        assert [(r.type, r.detail, r.ts, r.dur) for r in records] == [
            (BuildEventType.PARSE_FILE, "include/header.h", 10, 5),
            (BuildEventType.INSTANTIATE_FUNCTION, "Foo<int>", 20, 3),
        ]

    def test_unit_events_named_after_trace_file(self, processor, write_trace, trace_event):
        """Compiler/Frontend/Backend without detail take the trace file's name."""
        path = write_trace("obj/main.cpp.json", [trace_event("ExecuteCompiler", 0, 100)])
        records = processor.process_file(path)

        assert records[0].type is BuildEventType.COMPILER
        assert records[0].detail.endswith("obj/main.cpp")

    def test_unknown_names_retained(self, processor, write_trace, trace_event):
        path = write_trace("a.json", [trace_event("PerformPendingInstantiations", 0, 50)])
        records = processor.process_file(path)

        assert len(records) == 1
        assert records[0].type is BuildEventType.UNKNOWN
        assert records[0].name == "PerformPendingInstantiations"

    def test_total_records_skipped(self, processor, write_trace, trace_event):
        """Clang's per-category summary records are not phases."""
        path = write_trace("a.json", [
            trace_event("Source", 0, 5, detail="a.h"),
            trace_event("Total Source", 0, 5, tid=2),
        ])
        assert len(processor.process_file(path)) == 1

    def test_begin_end_pairs(self, processor, write_trace):
        """B/E pairs on one thread are merged into a single record."""
        path = write_trace("a.json", [
            {"pid": 1, "tid": 0, "ph": "B", "ts": 100, "name": "Frontend"},
            {"pid": 1, "tid": 0, "ph": "B", "ts": 110, "name": "Source", "args": {"detail": "x.h"}},
            {"pid": 1, "tid": 0, "ph": "E", "ts": 130, "name": "Source"},
            {"pid": 1, "tid": 0, "ph": "E", "ts": 200, "name": "Frontend"},
            {"pid": 1, "tid": 0, "ph": "E", "ts": 300, "name": "Stray"},
        ])
        records = processor.process_file(path)

        assert sorted((r.name, r.ts, r.dur) for r in records) == [
            ("Frontend", 100, 100),
            ("Source", 110, 20),
        ]

    def test_begin_args_not_an_object(self, processor, write_trace):
        """Non-object args on a begin record are ignored when merging with its end."""
        path = write_trace("a.json", [
            {"pid": 1, "tid": 0, "ph": "B", "ts": 10, "name": "Source", "args": [1]},
            {"pid": 1, "tid": 0, "ph": "E", "ts": 15, "name": "Source", "args": {"detail": "x.h"}},
        ])
        records = processor.process_file(path)

        assert [(r.type, r.detail, r.ts, r.dur) for r in records] == [
            (BuildEventType.PARSE_FILE, "x.h", 10, 5),
        ]

    def test_instant_events(self, processor, write_trace):
        path = write_trace("a.json", [{"pid": 1, "tid": 0, "ph": "i", "ts": 42, "name": "Marker"}])
        records = processor.process_file(path)
        assert [(r.ts, r.dur) for r in records] == [(42, 0)]

    def test_beginning_of_time_offset(self, processor, write_trace, trace_event):
        """Records are shifted onto the absolute clock."""
        path = write_trace("a.json", [trace_event("ExecuteCompiler", 5, 10)], beginning_of_time=1_000_000)
        assert processor.process_file(path)[0].ts == 1_000_005

    def test_top_level_array(self, processor, tmp_path, clang_marker, trace_event):
        """A bare array of records is accepted."""
        path = tmp_path / "bare.json"
        path.write_text(json.dumps([clang_marker, trace_event("Backend", 0, 7)]))
        records = processor.process_file(str(path))
        assert [r.type for r in records] == [BuildEventType.BACKEND]

    def test_windows_paths_normalized(self, processor, write_trace, trace_event):
        path = write_trace("a.json", [trace_event("Source", 0, 1, detail="C:\\src\\a.h")])
        assert processor.process_file(path)[0].detail == "C:/src/a.h"

    def test_missing_marker(self, processor, write_trace, trace_event):
        """JSON from other tools is rejected as not a target trace."""
        path = write_trace("other.json", [trace_event("Source", 0, 1)], marker=False)
        with pytest.raises(NotATargetTrace):
            processor.process_file(path)

    def test_malformed_json(self, processor, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{"traceEvents": [{"ph": "X", "name": "Source", "ts": 1')
        with pytest.raises(MalformedTrace) as exc_info:
            processor.process_file(str(path))
        assert exc_info.value.path == str(path)

    def test_missing_file(self, processor, tmp_path):
        with pytest.raises(UnreadableFile):
            processor.process_file(str(tmp_path / "nope.json"))

    def test_empty_file(self, processor, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("")
        with pytest.raises(UnreadableFile):
            processor.process_file(str(path))

    def test_parse_bytes(self, processor, clang_marker, trace_event):
        """Raw content can be decoded without touching the filesystem."""
        data = json.dumps({"traceEvents": [clang_marker, trace_event("OptModule", 1, 2, detail="m")]})
        records = processor.parse_bytes(data.encode("utf-8"), "mem.json")
        assert records[0].type is BuildEventType.OPT_MODULE
