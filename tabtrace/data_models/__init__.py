"""
tabtrace/data_models/__init__.py

Event records, inspector messages and inbound signals.
"""

from tabtrace.data_models.events import (
    EventRecord,
    EventRecordType,
    ResourceResponseEvent,
    ResourceWillSendEvent,
    TabChangeEvent,
    UnNormalizedEventRecord,
)
from tabtrace.data_models.inspector import (
    DetailedResponseTiming,
    InspectorDidReceiveContentLengthData,
    InspectorDidReceiveResponseData,
    InspectorResourceData,
    InspectorResourceMessage,
    InspectorResponse,
    InspectorWillSendRequestData,
)
from tabtrace.data_models.signals import PageEvent, PageEventMethod, PageEventSignal, parse_page_event

__all__ = [
    "EventRecord",
    "EventRecordType",
    "ResourceResponseEvent",
    "ResourceWillSendEvent",
    "TabChangeEvent",
    "UnNormalizedEventRecord",
    "DetailedResponseTiming",
    "InspectorDidReceiveContentLengthData",
    "InspectorDidReceiveResponseData",
    "InspectorResourceData",
    "InspectorResourceMessage",
    "InspectorResponse",
    "InspectorWillSendRequestData",
    "PageEvent",
    "PageEventMethod",
    "PageEventSignal",
    "parse_page_event",
]
