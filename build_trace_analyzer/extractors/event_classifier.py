"""
Mapping of compiler time-trace record names to build event types.
"""

from typing import Dict, Optional

from ..core.types import BuildEventType


EVENT_TYPES: Dict[str, BuildEventType] = {
    'ExecuteCompiler': BuildEventType.COMPILER,
    'Frontend': BuildEventType.FRONTEND,
    'Backend': BuildEventType.BACKEND,
    'Source': BuildEventType.PARSE_FILE,
    'ParseTemplate': BuildEventType.PARSE_TEMPLATE,
    'ParseClass': BuildEventType.PARSE_CLASS,
    'InstantiateClass': BuildEventType.INSTANTIATE_CLASS,
    'InstantiateFunction': BuildEventType.INSTANTIATE_FUNCTION,
    'OptModule': BuildEventType.OPT_MODULE,
    'OptFunction': BuildEventType.OPT_FUNCTION,
}

# Whole-unit phases: without an explicit detail they are named after the trace file
UNIT_TYPES = frozenset({
    BuildEventType.COMPILER,
    BuildEventType.FRONTEND,
    BuildEventType.BACKEND,
})


class EventClassifier:
    """Classifies raw trace records and extracts their detail names."""

    @staticmethod
    def classify(name: str) -> BuildEventType:
        return EVENT_TYPES.get(name, BuildEventType.UNKNOWN)

    @staticmethod
    def is_summary(name: str) -> bool:
        """Clang appends per-category 'Total <name>' summary records; they are not work phases."""
        return name.startswith('Total ')

    @staticmethod
    def unit_name(file_path: str) -> str:
        """Translation unit name derived from its trace file path."""
        path = file_path.replace('\\', '/')
        if path.endswith('.json'):
            path = path[:-len('.json')]
        return path

    def extract_detail(
        self,
        event_type: BuildEventType,
        args: Optional[Dict],
        file_path: str
    ) -> str:
        """
        Extract the human-readable detail name of a record.

        Args:
            event_type: Already classified type of the record
            args: The record's "args" map, if any
            file_path: Path of the trace file the record came from

        Returns:
            Detail string ('' when the record carries none)
        """
        detail = ''
        if isinstance(args, dict):
            value = args.get('detail')
            if value is not None:
                detail = str(value)

        if not detail and event_type in UNIT_TYPES:
            return self.unit_name(file_path)
        if event_type is BuildEventType.PARSE_FILE:
            return detail.replace('\\', '/')
        return detail
