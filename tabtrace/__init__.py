"""
tabtrace - Time-aligned event streams from browser tab instrumentation.

Usage:
    from tabtrace import ReplayEventSource, TabMonitor

    source = ReplayEventSource.from_jsonl("./capture.jsonl")
    with TabMonitor(tab_id=0, event_source=source, output_dir="./normalized") as monitor:
        source.replay(tab_id=0)
    print(monitor.get_summary())
"""

__version__ = "0.1.0"

# Public API - High-level interface
from .sdk import TabMonitor

# Core components
from .proxy import NormalizationProxy, ProxyState
from .sinks import DataInstance, FileRecordWriter
from .sources import AbstractEventSource, ListenerHandle, ReplayEventSource

# Data models
from .data_models.events import EventRecord, EventRecordType, UnNormalizedEventRecord
from .data_models.inspector import InspectorResourceMessage
from .data_models.signals import PageEvent

# Exceptions
from .utils.exceptions import (
    TabtraceError,
    DataSourceConnectionError,
    CaptureFileError,
)

__all__ = [
    # High-level API
    "TabMonitor",
    # Core components
    "NormalizationProxy",
    "ProxyState",
    "DataInstance",
    "FileRecordWriter",
    "AbstractEventSource",
    "ListenerHandle",
    "ReplayEventSource",
    # Data models
    "EventRecord",
    "EventRecordType",
    "UnNormalizedEventRecord",
    "InspectorResourceMessage",
    "PageEvent",
    # Exceptions
    "TabtraceError",
    "DataSourceConnectionError",
    "CaptureFileError",
]
