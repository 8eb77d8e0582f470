"""Output formatting utilities."""

from .time_formatter import format_time
from .interval_merger import merge_intervals, merge_time_intervals, calculate_parallelism_factor
from .report_renderer import ReportRenderer

__all__ = [
    "format_time",
    "merge_intervals",
    "merge_time_intervals",
    "calculate_parallelism_factor",
    "ReportRenderer",
]
