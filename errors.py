"""
Errors raised while building a redirect handler from a data source.
"""

from typing import Optional


class HandlerConstructionError(Exception):
    """Base class for every failure that prevents a route table from being built"""

    def __init__(self, file_path: str, operation: str, cause: Optional[BaseException] = None):
        self.file_path = file_path
        self.operation = operation
        self.cause = cause
        message = f"failed to {operation} {file_path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class SourceIOError(HandlerConstructionError):
    """The data file or database could not be read or opened"""


class FormatError(HandlerConstructionError):
    """The file content does not parse as the declared format"""


class QueryError(HandlerConstructionError):
    """The pathsurls query could not be executed or iterated"""


class ScanError(HandlerConstructionError):
    """A database row could not be read as two strings"""


class UnsupportedFormatError(HandlerConstructionError):
    """The data file extension is not one of .yaml, .json or .db"""
