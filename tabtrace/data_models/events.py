"""
tabtrace/data_models/events.py

Data models for timeline event records.

Contains:
- EventRecordType: numeric record types (timeline, synthesized, inspector)
- UnNormalizedEventRecord: raw record tree as delivered by the event source
- EventRecord: normalized record tree (milliseconds relative to base time)
- ResourceWillSendEvent, ResourceResponseEvent: resource lifecycle records
- TabChangeEvent: synthesized page transition record
"""

from __future__ import annotations

from copy import deepcopy
from enum import IntEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat


class EventRecordType(IntEnum):
    """Numeric types of event records."""

    # timeline record types delivered by the source
    DOM_EVENT = 0
    LAYOUT = 1
    RECALC_STYLE = 2
    PAINT = 3
    PARSE_HTML = 4
    TIMER_INSTALLED = 5
    TIMER_CLEARED = 6
    TIMER_FIRED = 7
    XHR_READY_STATE_CHANGE = 8
    XHR_LOAD = 9
    EVAL_SCRIPT = 10
    LOG_MESSAGE = 11
    RESOURCE_SEND_REQUEST = 12
    RESOURCE_RECEIVE_RESPONSE = 13
    RESOURCE_FINISH = 14
    JAVASCRIPT_EXECUTION = 15
    RESOURCE_DATA_RECEIVED = 16
    GC_EVENT = 17
    MARK_DOM_CONTENT = 18
    MARK_LOAD = 19

    # types produced locally; kept at the top of the int32 range
    TAB_CHANGED = 2147483646
    INSPECTOR_WILL_SEND_REQUEST = 2147483645
    INSPECTOR_DID_RECEIVE_RESPONSE = 2147483644
    INSPECTOR_DID_RECEIVE_CONTENT_LENGTH = 2147483643

    @classmethod
    def from_tag(cls, tag: str) -> EventRecordType | None:
        """
        Look up a record type by the tag name the source uses for it.
        Args:
            tag: Source tag name (e.g., "ResourceSendRequest") or a numeric string.
        Returns:
            The matching EventRecordType, or None if the tag is unknown.
        """
        if tag.isdigit():
            try:
                return cls(int(tag))
            except ValueError:
                return None
        return _TAG_TO_TYPE.get(tag)

    @classmethod
    def inspector_types(cls) -> set[EventRecordType]:
        """Return all side-channel inspector message types."""
        return {
            cls.INSPECTOR_WILL_SEND_REQUEST,
            cls.INSPECTOR_DID_RECEIVE_RESPONSE,
            cls.INSPECTOR_DID_RECEIVE_CONTENT_LENGTH,
        }


_TAG_TO_TYPE: dict[str, EventRecordType] = {
    "EventDispatch": EventRecordType.DOM_EVENT,
    "Layout": EventRecordType.LAYOUT,
    "RecalculateStyles": EventRecordType.RECALC_STYLE,
    "Paint": EventRecordType.PAINT,
    "ParseHTML": EventRecordType.PARSE_HTML,
    "TimerInstall": EventRecordType.TIMER_INSTALLED,
    "TimerRemove": EventRecordType.TIMER_CLEARED,
    "TimerFire": EventRecordType.TIMER_FIRED,
    "XHRReadyStateChange": EventRecordType.XHR_READY_STATE_CHANGE,
    "XHRLoad": EventRecordType.XHR_LOAD,
    "EvaluateScript": EventRecordType.EVAL_SCRIPT,
    "MarkTimeline": EventRecordType.LOG_MESSAGE,
    "ResourceSendRequest": EventRecordType.RESOURCE_SEND_REQUEST,
    "ResourceReceiveResponse": EventRecordType.RESOURCE_RECEIVE_RESPONSE,
    "ResourceFinish": EventRecordType.RESOURCE_FINISH,
    "FunctionCall": EventRecordType.JAVASCRIPT_EXECUTION,
    "ResourceReceivedData": EventRecordType.RESOURCE_DATA_RECEIVED,
    "GCEvent": EventRecordType.GC_EVENT,
    "MarkDOMContent": EventRecordType.MARK_DOM_CONTENT,
    "MarkLoad": EventRecordType.MARK_LOAD,
}


def resolve_record_type(raw_type: EventRecordType | int | str | None) -> EventRecordType | int | str | None:
    """
    Resolve a raw type tag into an EventRecordType where possible.
    Unknown numeric tags stay plain ints and unknown string tags stay strings.
    """
    if raw_type is None or isinstance(raw_type, EventRecordType):
        return raw_type
    if isinstance(raw_type, str):
        resolved = EventRecordType.from_tag(raw_type)
        return raw_type if resolved is None else resolved
    try:
        return EventRecordType(raw_type)
    except ValueError:
        return raw_type


def record_type_name(record_type: EventRecordType | int | str | None) -> str:
    """Human-readable name for a (possibly unresolved) record type."""
    resolved = resolve_record_type(record_type)
    if isinstance(resolved, EventRecordType):
        return resolved.name
    return "UNKNOWN" if resolved is None else str(resolved)


## Normalized records

class EventRecord(BaseModel):
    """
    Normalized event record.
    Times are milliseconds relative to the session's base time.
    """
    model_config = ConfigDict(extra="allow")

    type: EventRecordType | int | str | None = Field(
        default=None,
        description="Record type (resolved EventRecordType where known)",
    )
    time: float = Field(
        ...,
        allow_inf_nan=False,
        description="Milliseconds since the base time",
    )
    duration: FiniteFloat | None = Field(
        default=None,
        description="Duration in milliseconds, when the source reported an end time",
    )
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Type-specific payload",
    )
    children: list[EventRecord] = Field(
        default_factory=list,
        description="Nested sub-events, in source order",
    )


## Raw records

class UnNormalizedEventRecord(BaseModel):
    """
    Raw timeline record as delivered by the event source.
    Times are seconds on the source clock, and the type tag may not be resolved yet.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: EventRecordType | int | str | None = Field(
        default=None,
        description="Raw type tag: numeric type, source tag name, or unset",
        examples=[12, "ResourceSendRequest"],
    )
    start_time: float = Field(
        ...,
        alias="startTime",
        allow_inf_nan=False,
        description="Start time in seconds on the source clock",
    )
    end_time: FiniteFloat | None = Field(
        default=None,
        alias="endTime",
        description="End time in seconds on the source clock",
    )
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Type-specific payload",
    )
    children: list[UnNormalizedEventRecord] = Field(
        default_factory=list,
        description="Nested sub-events, in source order",
    )

    @property
    def start_millis(self) -> float:
        """Start time converted to milliseconds, still on the source clock."""
        return self.start_time * 1000

    def with_resolved_type(self, children: list[UnNormalizedEventRecord]) -> UnNormalizedEventRecord:
        """
        Return a copy of this node with its type tag resolved and the given children.
        """
        return self.model_copy(update={"type": resolve_record_type(self.type), "children": children})

    def to_event_record(self, base_time: float, children: list[EventRecord]) -> EventRecord:
        """
        Convert this node into a normalized EventRecord.
        Args:
            base_time: Session base time in milliseconds on the source clock.
            children: Already normalized children for the new node.
        Returns:
            A new EventRecord; this record is left untouched.
        """
        start_millis = self.start_millis
        duration = None if self.end_time is None else self.end_time * 1000 - start_millis
        # extra keys named like a normalized field would override it; they are dropped
        extra = {
            key: deepcopy(value)
            for key, value in (self.model_extra or {}).items()
            if key not in EventRecord.model_fields
        }
        return EventRecord(
            type=self.type,
            time=start_millis - base_time,
            duration=duration,
            data=deepcopy(self.data),
            children=children,
            **extra,
        )


class ResourceWillSendEvent(UnNormalizedEventRecord):
    """
    Resource start record. The identifier is reused across redirects of the same request.
    """
    TYPE: ClassVar[EventRecordType] = EventRecordType.RESOURCE_SEND_REQUEST

    @property
    def identifier(self) -> Any:
        return self.data.get("identifier")

    @property
    def url(self) -> str | None:
        return self.data.get("url")


class ResourceResponseEvent(UnNormalizedEventRecord):
    """
    Response arrival for a resource.
    """
    TYPE: ClassVar[EventRecordType] = EventRecordType.RESOURCE_RECEIVE_RESPONSE

    @property
    def identifier(self) -> Any:
        return self.data.get("identifier")


class TabChangeEvent(UnNormalizedEventRecord):
    """
    Synthesized page transition. Never delivered by the source.
    """
    TYPE: ClassVar[EventRecordType] = EventRecordType.TAB_CHANGED

    @property
    def url(self) -> str | None:
        return self.data.get("url")

    @classmethod
    def create_unnormalized(cls, start_time: float, url: str | None) -> TabChangeEvent:
        """
        Build a page transition record on the source clock.
        Args:
            start_time: Start time in seconds, copied from the resource start that caused it.
            url: URL of the new page.
        Returns:
            An unnormalized TabChangeEvent.
        """
        return cls(type=cls.TYPE, start_time=start_time, data={"url": url})


_TYPED_RECORD_CLASSES: dict[EventRecordType, type[UnNormalizedEventRecord]] = {
    EventRecordType.RESOURCE_SEND_REQUEST: ResourceWillSendEvent,
    EventRecordType.RESOURCE_RECEIVE_RESPONSE: ResourceResponseEvent,
    EventRecordType.TAB_CHANGED: TabChangeEvent,
}


def specialize_record(record: UnNormalizedEventRecord) -> UnNormalizedEventRecord:
    """
    Return the record as its typed subclass (ResourceWillSendEvent, ...) when one exists.
    The record's type must already be resolved.
    """
    record_cls = _TYPED_RECORD_CLASSES.get(record.type) if isinstance(record.type, EventRecordType) else None
    if record_cls is None or isinstance(record, record_cls):
        return record
    return record_cls.model_validate(record.model_dump(by_alias=True))
