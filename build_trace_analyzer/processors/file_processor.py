"""
Compiler time-trace file processing using streaming parser.
"""

import io
import logging
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

import ijson

from ..core.errors import MalformedTrace, NotATargetTrace, UnreadableFile
from ..core.types import TraceRecord
from ..extractors import EventClassifier

logger = logging.getLogger(__name__)

MARKER_PROCESS = 'clang'


def _to_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class TraceFileProcessor:
    """Decodes one -ftime-trace JSON document into flat TraceRecords."""

    def __init__(self, classifier: Optional[EventClassifier] = None):
        self.classifier = classifier or EventClassifier()

    def process_file(self, file_path: str) -> List[TraceRecord]:
        """
        Read a trace file and decode its records.

        Args:
            file_path: Path to the trace JSON file

        Returns:
            List of duration-bearing records, in file order

        Raises:
            UnreadableFile: file missing, unreadable or empty
            NotATargetTrace: no compiler marker record in the file
            MalformedTrace: content is not valid JSON
        """
        try:
            with open(file_path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise UnreadableFile(file_path, e.strerror or str(e)) from e

        if not data.strip():
            raise UnreadableFile(file_path, 'file is empty')

        return self.parse_bytes(data, file_path)

    def parse_bytes(self, data: bytes, file_path: str) -> List[TraceRecord]:
        """
        Decode raw trace content.

        Clang writes {"traceEvents": [...]}; a bare top-level array is accepted too.

        Args:
            data: Raw file content
            file_path: Path used for diagnostics and unit naming

        Returns:
            List of duration-bearing records, in file order
        """
        prefix = 'item' if data.lstrip()[:1] == b'[' else 'traceEvents.item'

        records = []
        has_marker = False
        # (pid, tid) -> stack of open "B" records
        open_spans: Dict[Tuple, List[Dict]] = defaultdict(list)

        try:
            for raw in ijson.items(io.BytesIO(data), prefix, use_float=True):
                if not isinstance(raw, dict):
                    continue
                phase = raw.get('ph')

                if phase == 'M':
                    if self._is_marker(raw):
                        has_marker = True
                    continue

                if phase == 'X':
                    record = self._make_record(raw, raw.get('dur', 0), file_path)
                elif phase in ('i', 'I'):
                    record = self._make_record(raw, 0, file_path)
                elif phase == 'B':
                    open_spans[(raw.get('pid'), raw.get('tid'))].append(raw)
                    continue
                elif phase == 'E':
                    stack = open_spans[(raw.get('pid'), raw.get('tid'))]
                    if not stack:
                        logger.debug("%s: end record without begin at ts=%s", file_path, raw.get('ts'))
                        continue
                    begin = stack.pop()
                    end_ts = _to_int(raw.get('ts'))
                    begin_ts = _to_int(begin.get('ts'))
                    if end_ts is None or begin_ts is None:
                        continue
                    merged = dict(begin)
                    if isinstance(raw.get('args'), dict):
                        begin_args = begin.get('args')
                        if not isinstance(begin_args, dict):
                            begin_args = {}
                        merged['args'] = {**begin_args, **raw['args']}
                    record = self._make_record(merged, end_ts - begin_ts, file_path)
                else:
                    continue

                if record is not None:
                    records.append(record)
        except (ijson.JSONError, UnicodeDecodeError) as e:
            raise MalformedTrace(file_path, str(e)) from e

        if not has_marker:
            raise NotATargetTrace(file_path)

        unclosed = sum(len(stack) for stack in open_spans.values())
        if unclosed:
            logger.debug("%s: dropped %d begin records without end", file_path, unclosed)

        # Per-process timestamps start near zero; shift them onto the shared clock
        offset = self._beginning_of_time(data) if prefix != 'item' else 0
        if offset:
            records = [r._replace(ts=r.ts + offset) for r in records]

        return records

    @staticmethod
    def _beginning_of_time(data: bytes) -> int:
        for value in ijson.items(io.BytesIO(data), 'beginningOfTime', use_float=True):
            return _to_int(value) or 0
        return 0

    @staticmethod
    def _is_marker(raw: Dict) -> bool:
        args = raw.get('args')
        return (raw.get('name') == 'process_name'
                and isinstance(args, dict)
                and args.get('name') == MARKER_PROCESS)

    def _make_record(self, raw: Dict, dur, file_path: str) -> Optional[TraceRecord]:
        name = raw.get('name')
        if not isinstance(name, str) or self.classifier.is_summary(name):
            return None

        ts = _to_int(raw.get('ts'))
        dur = _to_int(dur)
        if ts is None or dur is None:
            return None

        event_type = self.classifier.classify(name)
        detail = self.classifier.extract_detail(event_type, raw.get('args'), file_path)
        return TraceRecord(event_type, name, detail, ts, max(0, dur))
