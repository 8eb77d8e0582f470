"""
Event aggregator producing ranked and grouped build statistics.
"""

from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional

from ..core.store import EventStore, NameTable
from ..core.types import (
    BuildEventType,
    CategoryStats,
    EventIndex,
    EventStats,
    GroupStats,
    HeaderStats,
)
from ..extractors import NameCanonicalizer
from ..formatters.interval_merger import calculate_parallelism_factor, merge_intervals

# Categories listed individually, in report order
SLOWEST_CATEGORIES = (
    BuildEventType.FRONTEND,
    BuildEventType.BACKEND,
    BuildEventType.PARSE_FILE,
    BuildEventType.PARSE_TEMPLATE,
    BuildEventType.PARSE_CLASS,
    BuildEventType.INSTANTIATE_CLASS,
    BuildEventType.INSTANTIATE_FUNCTION,
    BuildEventType.OPT_MODULE,
    BuildEventType.OPT_FUNCTION,
)

TEMPLATE_SET_TYPES = (BuildEventType.INSTANTIATE_CLASS, BuildEventType.INSTANTIATE_FUNCTION)
FUNCTION_SET_TYPES = (BuildEventType.OPT_FUNCTION,)


def _ranked(stats: Iterable[Dict], n: Optional[int]) -> List[Dict]:
    """Longest first; equal durations ordered by name so output is reproducible."""
    ordered = sorted(stats, key=lambda s: (-s['duration_us'], s['name']))
    return ordered if n is None else ordered[:n]


class EventAggregator:
    """Read-only statistics over a completed EventStore."""

    def __init__(
        self,
        events: EventStore,
        names: NameTable,
        canonicalizer: Optional[NameCanonicalizer] = None
    ):
        """
        Initialize with the stores of a finished run.

        Args:
            events: Event arena with every parsed file merged in
            names: Name table the events' detail indices refer to
            canonicalizer: NameCanonicalizer used for set grouping
        """
        self.events = events
        self.names = names
        self.canonicalizer = canonicalizer or NameCanonicalizer()

    def _of_types(self, types) -> Iterable:
        for index, event in self.events.indexed():
            if event.type in types:
                yield index, event

    def compilation_count(self) -> int:
        return sum(1 for event in self.events if event.type is BuildEventType.COMPILER)

    def total_wall_time_us(self) -> int:
        """
        Wall-clock time covered by all roots.

        Compilations of one build run in parallel, so root intervals are
        unioned rather than summed.
        """
        intervals = [(self.events[i].ts, self.events[i].end) for i in self.events.roots]
        return merge_intervals(intervals)

    def cumulative_by_type(self) -> List[CategoryStats]:
        """Plain sum of durations per event type, in BuildEventType order."""
        totals: Dict[BuildEventType, int] = defaultdict(int)
        counts: Dict[BuildEventType, int] = defaultdict(int)
        for event in self.events:
            totals[event.type] += event.dur
            counts[event.type] += 1

        return [
            {'type': event_type.value, 'duration_us': totals[event_type], 'count': counts[event_type]}
            for event_type in BuildEventType
        ]

    def slowest_events(self, event_type: BuildEventType, n: Optional[int]) -> List[EventStats]:
        """
        Individual events of one type, longest first.

        Args:
            event_type: Category to rank
            n: How many to return (None for all)
        """
        stats = [
            {'name': self.names.name(event.detail), 'duration_us': event.dur, 'event_index': int(index)}
            for index, event in self._of_types((event_type,))
        ]
        # Same name and duration in two units: insertion order decides
        stats.sort(key=lambda s: s['event_index'])
        return _ranked(stats, n)

    def grouped(
        self,
        types,
        n: Optional[int],
        key: Optional[Callable[[str], str]] = None
    ) -> List[GroupStats]:
        """
        Sum durations and count occurrences per grouping key.

        Args:
            types: Event types to include
            n: How many groups to return (None for all)
            key: Maps a detail name to its group key; identity when omitted

        Returns:
            Groups ranked by aggregate duration
        """
        totals: Dict[str, int] = defaultdict(int)
        counts: Dict[str, int] = defaultdict(int)
        keys: Dict[int, str] = {}

        for _, event in self._of_types(types):
            group = keys.get(event.detail)
            if group is None:
                name = self.names.name(event.detail)
                group = key(name) if key else name
                keys[event.detail] = group
            totals[group] += event.dur
            counts[group] += 1

        stats = [
            {'name': name, 'duration_us': totals[name], 'count': counts[name]}
            for name in totals
        ]
        return _ranked(stats, n)

    def template_sets(self, n: Optional[int]) -> List[GroupStats]:
        return self.grouped(TEMPLATE_SET_TYPES, n, self.canonicalizer.canonicalize)

    def function_sets(self, n: Optional[int]) -> List[GroupStats]:
        return self.grouped(FUNCTION_SET_TYPES, n, self.canonicalizer.canonicalize)

    def include_chain(self, index: EventIndex, depth: int) -> List[str]:
        """
        Files through which a parsed file was reached, outermost first.

        The chain starts at the translation unit and ends at the direct
        includer; only the `depth` nearest entries are kept.
        """
        chain = []
        unit = None
        for ancestor in self.events.ancestors(index):
            event = self.events[ancestor]
            if event.type is BuildEventType.PARSE_FILE:
                chain.append(self.names.name(event.detail))
            elif event.type is BuildEventType.COMPILER:
                unit = self.names.name(event.detail)
        if unit is not None:
            chain.append(unit)
        chain.reverse()
        if depth <= 0:
            return []
        return chain[-depth:]

    def expensive_headers(self, n: Optional[int], chain_depth: int = 5) -> List[HeaderStats]:
        """
        ParseFile time per file path across all compilations.

        Args:
            n: How many files to return (None for all)
            chain_depth: Include chain length for each file's costliest parse
        """
        costliest: Dict[str, EventIndex] = {}
        for index, event in self._of_types((BuildEventType.PARSE_FILE,)):
            name = self.names.name(event.detail)
            best = costliest.get(name)
            if best is None or event.dur > self.events[best].dur:
                costliest[name] = index

        headers = []
        for group in self.grouped((BuildEventType.PARSE_FILE,), n):
            headers.append({
                'name': group['name'],
                'duration_us': group['duration_us'],
                'count': group['count'],
                'included_via': self.include_chain(costliest[group['name']], chain_depth),
            })
        return headers

    def summarize(self, top_n: int, chain_depth: int = 5) -> Dict:
        """
        Every statistic of the report, in report order.

        Args:
            top_n: Length of each ranked section
            chain_depth: Include chain length for expensive headers

        Returns:
            Dictionary consumed by ReportRenderer and the web result builder
        """
        wall_time = self.total_wall_time_us()
        compile_time = sum(e.dur for e in self.events if e.type is BuildEventType.COMPILER)
        return {
            'compilations': self.compilation_count(),
            'total_wall_time_us': wall_time,
            'cumulative_compile_us': compile_time,
            'parallelism_factor': round(calculate_parallelism_factor(compile_time, wall_time), 2),
            'categories': self.cumulative_by_type(),
            'expensive_headers': self.expensive_headers(top_n, chain_depth),
            'template_sets': self.template_sets(top_n),
            'function_sets': self.function_sets(top_n),
            'slowest': {
                event_type.value: self.slowest_events(event_type, top_n)
                for event_type in SLOWEST_CATEGORIES
            },
        }
