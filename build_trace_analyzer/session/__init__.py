"""Build session tracking and trace file discovery."""

from .session import SESSION_FILE_NAME, read_session, start_session
from .file_finder import find_trace_files

__all__ = ["SESSION_FILE_NAME", "read_session", "start_session", "find_trace_files"]
