"""
Plain text rendering of an aggregated build summary.
"""

import posixpath
from typing import Dict, List, TextIO

from .time_formatter import format_time

SLOWEST_TITLES = {
    'Frontend': 'Files that took longest to parse (compiler frontend)',
    'Backend': 'Files that took longest to codegen (compiler backend)',
    'ParseFile': 'Source files that took longest to parse',
    'ParseTemplate': 'Templates that took longest to parse',
    'ParseClass': 'Classes that took longest to parse',
    'InstantiateClass': 'Classes that took longest to instantiate',
    'InstantiateFunction': 'Functions that took longest to instantiate',
    'OptModule': 'Modules that took longest to optimize',
    'OptFunction': 'Functions that took longest to compile',
}


class ReportRenderer:
    """Writes the summary produced by EventAggregator.summarize() as text."""

    def __init__(self, max_name_length: int = 70):
        self.max_name_length = max_name_length

    def shorten(self, name: str) -> str:
        if len(name) <= self.max_name_length:
            return name
        return name[:self.max_name_length - 3] + '...'

    @staticmethod
    def _heading(lines: List[str], title: str) -> None:
        if lines:
            lines.append('')
        lines.append(f"**** {title}:")

    def _group_lines(self, lines: List[str], groups: List[Dict], noun: str) -> None:
        if not groups:
            lines.append('  (none)')
            return
        for group in groups:
            avg = group['duration_us'] // group['count'] if group['count'] else 0
            lines.append(
                f"{format_time(group['duration_us']):>10}: {self.shorten(group['name'])} "
                f"({group['count']} {noun}, avg {format_time(avg)})"
            )

    def render_lines(self, summary: Dict) -> List[str]:
        """
        Build the report as a list of lines.

        Sections, in order: time summary, cumulative time per category,
        expensive headers, template sets, function sets, then the slowest
        individual events of each category.
        """
        lines: List[str] = []

        self._heading(lines, 'Time summary')
        lines.append(f"Compilation ({summary['compilations']} times):")
        lines.append(f"  Total wall time (overlaps merged): {format_time(summary['total_wall_time_us'])}")
        lines.append(
            f"  Cumulative compiler time:          {format_time(summary['cumulative_compile_us'])}"
            f" (parallelism {summary['parallelism_factor']:.2f}x)"
        )

        self._heading(lines, 'Cumulative time per category')
        for category in summary['categories']:
            lines.append(
                f"  {category['type'] + ':':<21}{format_time(category['duration_us']):>10}"
                f" ({category['count']} events)"
            )

        self._heading(lines, 'Expensive headers')
        headers = summary['expensive_headers']
        if not headers:
            lines.append('  (none)')
        for header in headers:
            avg = header['duration_us'] // header['count'] if header['count'] else 0
            lines.append(
                f"{format_time(header['duration_us']):>10}: {self.shorten(header['name'])} "
                f"(included {header['count']} times, avg {format_time(avg)})"
            )
            if header['included_via']:
                via = ' '.join(posixpath.basename(p) for p in header['included_via'])
                lines.append(f"            included via: {via}")

        self._heading(lines, 'Template sets that took longest to instantiate')
        self._group_lines(lines, summary['template_sets'], 'times')

        self._heading(lines, 'Function sets that took longest to compile / optimize')
        self._group_lines(lines, summary['function_sets'], 'times')

        for category, events in summary['slowest'].items():
            self._heading(lines, SLOWEST_TITLES.get(category, category))
            if not events:
                lines.append('  (none)')
            for event in events:
                lines.append(f"{format_time(event['duration_us']):>10}: {self.shorten(event['name'])}")

        return lines

    def render(self, summary: Dict) -> str:
        return '\n'.join(self.render_lines(summary)) + '\n'

    def write(self, summary: Dict, out: TextIO) -> None:
        out.write(self.render(summary))
