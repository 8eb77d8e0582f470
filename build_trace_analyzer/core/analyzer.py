"""
Main build trace analyzer orchestrator.
"""

import logging
from typing import Dict, List, Optional, TextIO

from ..core.errors import EmptyTraceSet, NotATargetTrace
from ..core.store import EventStore, NameTable
from ..core.types import AnalyzerConfig
from ..extractors import NameCanonicalizer
from ..formatters import ReportRenderer, format_time
from ..processors import EventAggregator, HierarchyBuilder, ParallelTraceProcessor
from ..session import find_trace_files, read_session

logger = logging.getLogger(__name__)


class BuildAnalyzer:
    """Main orchestrator for build trace analysis."""

    def __init__(
        self,
        top_n: int = 10,
        max_name_length: int = 70,
        num_workers: int = 1,
        header_chain_depth: int = 5
    ):
        """
        Initialize the BuildAnalyzer.

        Args:
            top_n: Entries listed in every ranked section
            max_name_length: Truncation length for names in the text report
            num_workers: Processes used to decode trace files
            header_chain_depth: Entries listed in "included via" chains
        """
        # Configuration
        self.config = AnalyzerConfig(
            top_n=top_n,
            max_name_length=max_name_length,
            num_workers=num_workers,
            header_chain_depth=header_chain_depth
        )

        # Per-run state, replaced by every analyze_files() call
        self.events = EventStore()
        self.names = NameTable()
        self.files_analyzed: List[str] = []
        self.warnings: List[str] = []
        self.summary: Optional[Dict] = None

        # Initialize components
        self.canonicalizer = NameCanonicalizer()
        self.parallel_processor = ParallelTraceProcessor(self.config.num_workers)
        self.renderer = ReportRenderer(self.config.max_name_length)

    def analyze_files(self, file_paths: List[str]) -> Dict:
        """
        Parse every trace file, merge them into one event tree and aggregate.

        Files that cannot be read or decoded are skipped with a warning;
        files not produced by the compiler are skipped silently.

        Args:
            file_paths: Candidate trace files, in the order they are merged

        Returns:
            Summary dictionary (see EventAggregator.summarize)

        Raises:
            EmptyTraceSet: none of the files was a usable compiler trace
        """
        self.events = EventStore()
        self.names = NameTable()
        self.files_analyzed = []
        self.warnings = []
        self.summary = None

        builder = HierarchyBuilder(self.events, self.names)

        # Step 1: Decode files (possibly in workers) and fold each into the shared store
        for file_path, records, error in self.parallel_processor.parse_files(file_paths):
            print(f"Processing {file_path}...")
            if isinstance(error, NotATargetTrace):
                logger.debug("Skipping %s: %s", file_path, error)
                continue
            if error is not None:
                logger.warning("%s", error)
                self.warnings.append(str(error))
                continue

            if not records:
                logger.info("%s: no trace events found", file_path)
            builder.build(records, file_path)
            self.files_analyzed.append(file_path)

        if not self.files_analyzed:
            raise EmptyTraceSet(f"no compiler time trace files found among {len(file_paths)} candidates")

        # Step 2: Aggregate
        aggregator = EventAggregator(self.events, self.names, self.canonicalizer)
        self.summary = aggregator.summarize(self.config.top_n, self.config.header_chain_depth)

        print(f"Analyzed {len(self.files_analyzed)} trace files, {len(self.events)} events, "
              f"{len(self.names)} unique names.")
        if self.warnings:
            print(f"Skipped {len(self.warnings)} files with errors.")

        return self.summary

    def analyze_directory(self, root: str, start_time: Optional[float] = None,
                          end_time: Optional[float] = None) -> Dict:
        """
        Analyze trace files written under `root` during a session.

        Args:
            root: Artifacts directory
            start_time: Window start, epoch seconds (default: read from the session file)
            end_time: Window end, epoch seconds (default: now)
        """
        if start_time is None:
            start_time = read_session(root)
        files = find_trace_files(root, start_time, end_time)
        print(f"Found {len(files)} candidate trace files under '{root}'.")
        if not files:
            raise EmptyTraceSet(f"no -ftime-trace .json files found under '{root}'")
        return self.analyze_files(files)

    def report(self) -> str:
        """Render the last analysis as text."""
        if self.summary is None:
            raise RuntimeError("analyze_files() has not been run")
        return self.renderer.render(self.summary)

    def write_report(self, out: TextIO) -> None:
        out.write(self.report())

    def format_time(self, us: int) -> str:
        """
        Format time in microseconds to a human-readable string.

        Args:
            us: Time in microseconds

        Returns:
            Formatted time string
        """
        return format_time(us)
