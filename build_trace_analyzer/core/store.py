"""
Shared storage for one analysis run: interned names and the event arena.
"""

from typing import Dict, Iterator, List, Optional

from .types import BuildEvent, DetailIndex, EventIndex


class NameTable:
    """Bidirectional string <-> DetailIndex interning table."""

    def __init__(self):
        self._ids: Dict[str, DetailIndex] = {}
        self._names: List[str] = []

    def intern(self, name: str) -> DetailIndex:
        """
        Return the index for a name, assigning the next free one on first sight.

        Args:
            name: Detail string (file path, template or function name)

        Returns:
            DetailIndex shared by every occurrence of the same string
        """
        index = self._ids.get(name)
        if index is None:
            index = DetailIndex(len(self._names))
            self._names.append(name)
            self._ids[name] = index
        return index

    def lookup(self, name: str) -> Optional[DetailIndex]:
        return self._ids.get(name)

    def name(self, index: DetailIndex) -> str:
        if not isinstance(index, DetailIndex):
            raise TypeError(f"expected DetailIndex, got {type(index).__name__}")
        return self._names[index]

    def __len__(self) -> int:
        return len(self._names)


class EventStore:
    """
    Append-only arena of BuildEvents addressed by EventIndex.

    Parent/child links are indices into this store; indices are never reused.
    """

    def __init__(self):
        self._events: List[BuildEvent] = []
        self.roots: List[EventIndex] = []

    def append(self, event: BuildEvent) -> EventIndex:
        """
        Store an event and link it to its parent (or register it as a root).

        Args:
            event: Event whose parent field is already set (None for roots)

        Returns:
            The new event's index
        """
        index = EventIndex(len(self._events))
        self._events.append(event)
        if event.parent is None:
            self.roots.append(index)
        else:
            self[event.parent].children.append(index)
        return index

    def __getitem__(self, index: EventIndex) -> BuildEvent:
        if not isinstance(index, EventIndex):
            raise TypeError(f"expected EventIndex, got {type(index).__name__}")
        return self._events[index]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[BuildEvent]:
        return iter(self._events)

    def indexed(self) -> Iterator:
        """Yield (EventIndex, BuildEvent) pairs in insertion order."""
        for i, event in enumerate(self._events):
            yield EventIndex(i), event

    def ancestors(self, index: EventIndex) -> Iterator[EventIndex]:
        """Yield parent, grandparent, ... of an event up to its root."""
        parent = self[index].parent
        while parent is not None:
            yield parent
            parent = self[parent].parent
