"""
tabtrace/utils/exceptions.py

Custom exceptions for tabtrace.

Contains:
- TabtraceError: Base exception
- DataSourceConnectionError: Event source subscription failures
- CaptureFileError: Unreadable or invalid capture files
"""


class TabtraceError(Exception):
    """
    Base exception for all tabtrace errors.
    """


class DataSourceConnectionError(TabtraceError):
    """
    Raised by an event source when a page-event listener cannot be attached to a tab.
    """


class CaptureFileError(TabtraceError):
    """
    Raised when a raw capture file cannot be read or contains an invalid line.
    """
