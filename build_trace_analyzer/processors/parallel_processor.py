"""
Parallel trace file decoding for builds with many translation units.
"""

import os
from multiprocessing import Pool
from typing import Iterator, List, Optional, Tuple

from ..core.errors import TraceAnalysisError
from ..core.types import TraceRecord
from .file_processor import TraceFileProcessor

ParseResult = Tuple[str, Optional[List[TraceRecord]], Optional[TraceAnalysisError]]


def _parse_single_file(file_path: str) -> ParseResult:
    """
    Decode one trace file. Designed to run in a worker process.

    Args:
        file_path: Path to the trace JSON file

    Returns:
        Tuple of (file_path, records, error); exactly one of records/error is set
    """
    try:
        return file_path, TraceFileProcessor().process_file(file_path), None
    except TraceAnalysisError as e:
        return file_path, None, e


class ParallelTraceProcessor:
    """
    Decode trace files in worker processes.

    Workers only produce flat record lists; results come back in input order
    so the single tree-building writer sees files exactly as a sequential run would.
    """

    def __init__(self, num_workers: Optional[int] = None):
        """
        Initialize parallel processor.

        Args:
            num_workers: Number of worker processes (default: CPU count)
        """
        self.num_workers = num_workers or os.cpu_count() or 4

    def parse_files(self, file_paths: List[str]) -> Iterator[ParseResult]:
        """
        Decode files, yielding results in the order of `file_paths`.

        Args:
            file_paths: Trace files to decode
        """
        total = len(file_paths)

        if total <= 1 or self.num_workers <= 1:
            yield from map(_parse_single_file, file_paths)
            return

        effective_workers = min(self.num_workers, total)
        with Pool(processes=effective_workers) as pool:
            yield from pool.imap(_parse_single_file, file_paths, chunksize=1)
