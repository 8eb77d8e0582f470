"""
Unit tests for build_trace_analyzer.formatters.report_renderer module.
"""
import io

import pytest
from build_trace_analyzer.core.store import EventStore, NameTable
from build_trace_analyzer.core.types import BuildEventType, TraceRecord
from build_trace_analyzer.formatters.report_renderer import ReportRenderer
from build_trace_analyzer.processors.aggregator import EventAggregator
from build_trace_analyzer.processors.hierarchy_builder import HierarchyBuilder

T = BuildEventType


@pytest.fixture
def summary():
    events, names = EventStore(), NameTable()
    builder = HierarchyBuilder(events, names)
    builder.build([
        TraceRecord(T.COMPILER, "ExecuteCompiler", "obj/main.cpp", 0, 5000),
        TraceRecord(T.FRONTEND, "Frontend", "obj/main.cpp", 0, 4000),
        TraceRecord(T.PARSE_FILE, "Source", "include/header.h", 10, 2000),
        TraceRecord(T.INSTANTIATE_CLASS, "InstantiateClass", "B<int>", 2100, 300),
        TraceRecord(T.INSTANTIATE_CLASS, "InstantiateClass", "A<int>", 2500, 300),
    ])
    return EventAggregator(events, names).summarize(10)


class TestReportRenderer:
    """Tests for the text report."""

    def test_sections_in_fixed_order(self, summary):
        text = ReportRenderer().render(summary)
        titles = [line for line in text.splitlines() if line.startswith("**** ")]

        assert titles[:5] == [
            "**** Time summary:",
            "**** Cumulative time per category:",
            "**** Expensive headers:",
            "**** Template sets that took longest to instantiate:",
            "**** Function sets that took longest to compile / optimize:",
        ]
        assert titles[5] == "**** Files that took longest to parse (compiler frontend):"
        assert titles[-1] == "**** Functions that took longest to compile:"

    def test_time_summary(self, summary):
        text = ReportRenderer().render(summary)
        assert "Compilation (1 times):" in text
        assert "Total wall time (overlaps merged): 5.00 ms" in text

    def test_tie_break_in_report(self, summary):
        """Equal-duration groups appear in ascending name order."""
        text = ReportRenderer().render(summary)
        assert text.index(": A (1 times") < text.index(": B (1 times")

    def test_header_line_and_chain(self, summary):
        text = ReportRenderer().render(summary)
        assert "include/header.h (included 1 times, avg 2.00 ms)" in text
        assert "included via: main.cpp" in text

    def test_empty_sections(self, summary):
        """Categories without events render a placeholder instead of failing."""
        text = ReportRenderer().render(summary)
        section = text.split("**** Modules that took longest to optimize:\n")[1]
        assert section.startswith("  (none)")

    def test_long_names_shortened(self):
        renderer = ReportRenderer(max_name_length=10)
        assert renderer.shorten("short") == "short"
        assert renderer.shorten("a_very_long_template_name") == "a_very_..."

    def test_render_is_idempotent(self, summary):
        renderer = ReportRenderer()
        assert renderer.render(summary) == renderer.render(summary)

    def test_write_to_sink(self, summary):
        out = io.StringIO()
        ReportRenderer().write(summary, out)
        assert out.getvalue() == ReportRenderer().render(summary)
