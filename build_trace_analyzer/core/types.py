"""
Type definitions for build trace analysis.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, TypedDict


class BuildEventType(Enum):
    """Closed set of compiler phases every report is categorized by."""
    UNKNOWN = 'Unknown'
    COMPILER = 'Compiler'
    FRONTEND = 'Frontend'
    BACKEND = 'Backend'
    PARSE_FILE = 'ParseFile'
    PARSE_TEMPLATE = 'ParseTemplate'
    PARSE_CLASS = 'ParseClass'
    INSTANTIATE_CLASS = 'InstantiateClass'
    INSTANTIATE_FUNCTION = 'InstantiateFunction'
    OPT_MODULE = 'OptModule'
    OPT_FUNCTION = 'OptFunction'


class DetailIndex(int):
    """Index into a NameTable. Distinct from EventIndex on purpose."""
    __slots__ = ()

    def __repr__(self):
        return f"DetailIndex({int(self)})"


class EventIndex(int):
    """Index into an EventStore."""
    __slots__ = ()

    def __repr__(self):
        return f"EventIndex({int(self)})"


class TraceRecord(NamedTuple):
    """One duration-bearing record decoded from a trace file, before nesting."""
    type: BuildEventType
    name: str
    detail: str
    ts: int
    dur: int

    @property
    def end(self) -> int:
        return self.ts + self.dur


@dataclass
class BuildEvent:
    """A node of the containment tree. Edges are indices into the owning EventStore."""
    type: BuildEventType
    ts: int
    dur: int
    detail: DetailIndex
    parent: Optional[EventIndex] = None
    children: List[EventIndex] = field(default_factory=list)

    @property
    def end(self) -> int:
        return self.ts + self.dur


class EventStats(TypedDict):
    """A single ranked event."""
    name: str
    duration_us: int
    event_index: int


class GroupStats(TypedDict):
    """An aggregate over events sharing a detail name or canonical key."""
    name: str
    duration_us: int
    count: int


class HeaderStats(TypedDict):
    """Aggregate parse time for one file, with its most expensive include chain."""
    name: str
    duration_us: int
    count: int
    included_via: List[str]


class CategoryStats(TypedDict):
    """Cumulative (plain sum) time for one event type."""
    type: str
    duration_us: int
    count: int


class AnalyzerConfig:
    """Configuration for build trace analysis."""

    def __init__(
        self,
        top_n: int = 10,
        max_name_length: int = 70,
        num_workers: int = 1,
        header_chain_depth: int = 5
    ):
        """
        Initialize analysis configuration.

        Args:
            top_n: How many entries every ranked report section lists.
                   Default: 10

            max_name_length: Names longer than this are shortened with "..." in
                             the text report. Aggregation always uses full names.
                             Default: 70

            num_workers: Number of processes used to decode trace files. Values
                         above 1 parse files in a worker pool; tree building stays
                         in the calling process. Default: 1 (sequential)

            header_chain_depth: How many including files are listed in the
                                "included via" chain of an expensive header.
                                Default: 5
        """
        if top_n < 0:
            raise ValueError("top_n must be >= 0")
        if max_name_length < 4:
            raise ValueError("max_name_length must be >= 4")
        self.top_n = top_n
        self.max_name_length = max_name_length
        self.num_workers = max(1, num_workers)
        self.header_chain_depth = max(0, header_chain_depth)
