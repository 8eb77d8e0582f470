"""Core components for build trace analysis."""

from .analyzer import BuildAnalyzer
from .types import AnalyzerConfig, BuildEvent, BuildEventType, DetailIndex, EventIndex, TraceRecord
from .store import EventStore, NameTable
from .errors import (
    EmptyTraceSet,
    MalformedTrace,
    NotATargetTrace,
    SessionError,
    TraceAnalysisError,
    UnreadableFile,
)

__all__ = [
    "BuildAnalyzer",
    "AnalyzerConfig",
    "BuildEvent",
    "BuildEventType",
    "DetailIndex",
    "EventIndex",
    "TraceRecord",
    "EventStore",
    "NameTable",
    "EmptyTraceSet",
    "MalformedTrace",
    "NotATargetTrace",
    "SessionError",
    "TraceAnalysisError",
    "UnreadableFile",
]
