"""
Build session bookkeeping: remembers when tracing started.
"""

import os
import time
from typing import Optional

from ..core.errors import SessionError

SESSION_FILE_NAME = 'BuildTraceAnalyzerSession.txt'


def session_path(artifacts_dir: str) -> str:
    return os.path.join(artifacts_dir, SESSION_FILE_NAME)


def start_session(artifacts_dir: str, now: Optional[int] = None) -> str:
    """
    Record the session start time in the artifacts directory.

    Args:
        artifacts_dir: Directory the build writes its trace files into
        now: Start time in epoch seconds (default: current time)

    Returns:
        Path of the session file written
    """
    path = session_path(artifacts_dir)
    start = int(time.time()) if now is None else int(now)
    try:
        with open(path, 'w') as f:
            f.write(f"{start}\n")
    except OSError as e:
        raise SessionError(f"failed to create session file at '{path}': {e}") from e
    return path


def read_session(artifacts_dir: str) -> int:
    """Return the session start time (epoch seconds) stored by start_session()."""
    path = session_path(artifacts_dir)
    try:
        with open(path) as f:
            content = f.read().strip()
    except OSError as e:
        raise SessionError(f"failed to open session file at '{path}': {e}") from e

    try:
        return int(content.split()[0])
    except (IndexError, ValueError) as e:
        raise SessionError(f"session file '{path}' does not contain a start time") from e
