"""
Error kinds raised while collecting and analyzing build traces.
"""


class TraceAnalysisError(Exception):
    """Base class for all analysis errors."""


class UnreadableFile(TraceAnalysisError):
    """A trace file is missing or cannot be read. The file is skipped."""

    def __init__(self, path: str, reason: str = ''):
        self.path = path
        self.reason = reason
        message = f"could not read file '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)

    def __reduce__(self):
        return (self.__class__, (self.path, self.reason))


class NotATargetTrace(TraceAnalysisError):
    """The file is JSON but was not produced by the compiler. Skipped silently."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"'{path}' is not a compiler time trace")

    def __reduce__(self):
        return (self.__class__, (self.path,))


class MalformedTrace(TraceAnalysisError):
    """The file cannot be decoded as JSON. The file is skipped."""

    def __init__(self, path: str, reason: str = ''):
        self.path = path
        self.reason = reason
        message = f"malformed trace '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)

    def __reduce__(self):
        return (self.__class__, (self.path, self.reason))


class EmptyTraceSet(TraceAnalysisError):
    """No usable trace file was found in the whole run."""


class SessionError(TraceAnalysisError):
    """The session marker file is missing or unreadable."""
