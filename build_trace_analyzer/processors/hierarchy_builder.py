"""
Hierarchy builder for compiler trace records.
"""

import logging
from typing import List

from ..core.store import EventStore, NameTable
from ..core.types import BuildEvent, EventIndex, TraceRecord

logger = logging.getLogger(__name__)


class HierarchyBuilder:
    """Builds containment trees from flat lists of timed records."""

    def __init__(self, events: EventStore, names: NameTable):
        """
        Initialize with the shared stores of the current run.

        Args:
            events: Event arena all files are merged into
            names: Interning table shared by all files
        """
        self.events = events
        self.names = names

    @staticmethod
    def sort_records(records: List[TraceRecord]) -> List[TraceRecord]:
        """Chronological order; on equal start the longer record comes first so it can enclose."""
        return sorted(records, key=lambda r: (r.ts, -r.dur))

    def build(self, records: List[TraceRecord], source: str = '') -> List[EventIndex]:
        """
        Nest one file's records by time containment and append them to the store.

        Timestamps are only comparable within a file, so each call starts with
        an empty stack.

        Args:
            records: Flat records of one trace file, in any order
            source: File name used in diagnostics

        Returns:
            Indices of the roots created for this file
        """
        roots = []
        stack: List[EventIndex] = []
        overlaps = 0

        for record in self.sort_records(records):
            # Close everything that ended before this record started
            while stack and self.events[stack[-1]].end <= record.ts:
                stack.pop()

            parent = None
            if stack:
                top = self.events[stack[-1]]
                if record.end <= top.end:
                    parent = stack[-1]
                else:
                    overlaps += 1

            event = BuildEvent(
                type=record.type,
                ts=record.ts,
                dur=record.dur,
                detail=self.names.intern(record.detail),
                parent=parent,
            )
            index = self.events.append(event)
            if parent is None:
                roots.append(index)
            stack.append(index)

        if overlaps:
            logger.debug("%s: %d overlapping records attached as roots", source, overlaps)

        return roots
