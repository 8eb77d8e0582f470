"""
Discovery of trace files written during a build session.
"""

import os
import time
from typing import List, Optional


def find_trace_files(root: str, start_time: float, end_time: Optional[float] = None) -> List[str]:
    """
    Find .json files under `root` modified within [start_time, end_time].

    Args:
        root: Directory to walk
        start_time: Session start, epoch seconds
        end_time: Session end, epoch seconds (default: now)

    Returns:
        Sorted list of paths using forward slashes
    """
    if end_time is None:
        end_time = time.time()

    files = set()
    for dirpath, _, filenames in os.walk(root):
        for filename in filenames:
            if not filename.endswith('.json'):
                continue
            path = os.path.join(dirpath, filename)
            try:
                mtime = int(os.path.getmtime(path))
            except OSError:
                continue
            if start_time <= mtime <= end_time:
                files.add(path.replace('\\', '/'))

    return sorted(files)
