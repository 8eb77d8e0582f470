"""Processors for trace decoding, tree building and aggregation."""

from .file_processor import TraceFileProcessor
from .hierarchy_builder import HierarchyBuilder
from .aggregator import EventAggregator
from .parallel_processor import ParallelTraceProcessor

__all__ = [
    "TraceFileProcessor",
    "HierarchyBuilder",
    "EventAggregator",
    "ParallelTraceProcessor",
]
