"""
tabtrace/data_models/signals.py

Inbound page-event signals, validated once at the source boundary.

Contains:
- PageEvent: raw (method, body) pair pushed by an event source
- PageEventMethod: the five routable signal names
- PageEventSignal: discriminated union of typed signals
- parse_page_event(): validate a raw page event into a typed signal
"""

from enum import StrEnum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from tabtrace.data_models.events import UnNormalizedEventRecord
from tabtrace.data_models.inspector import (
    InspectorDidReceiveContentLengthData,
    InspectorDidReceiveResponseData,
    InspectorWillSendRequestData,
)


class PageEvent(BaseModel):
    """
    Raw page event as delivered by an event source listener.
    """
    method: str = Field(
        ...,
        description="Signal name",
        examples=["addRecordToTimeline", "didReceiveResponse"],
    )
    body: dict[str, Any] | None = Field(
        default=None,
        description="Signal payload",
    )


class PageEventMethod(StrEnum):
    """Names of the signals the proxy routes."""
    ADD_RECORD_TO_TIMELINE = "addRecordToTimeline"
    WILL_SEND_REQUEST = "willSendRequest"
    DID_RECEIVE_RESPONSE = "didReceiveResponse"
    DID_RECEIVE_CONTENT_LENGTH = "didReceiveContentLength"
    FRONTEND_REUSED = "frontendReused"


class AddRecordToTimelineSignal(BaseModel):
    """A timeline record tree."""
    method: Literal[PageEventMethod.ADD_RECORD_TO_TIMELINE] = PageEventMethod.ADD_RECORD_TO_TIMELINE
    record: UnNormalizedEventRecord = Field(..., description="Raw record tree")


class WillSendRequestSignal(BaseModel):
    """An inspector will-send-request message."""
    method: Literal[PageEventMethod.WILL_SEND_REQUEST] = PageEventMethod.WILL_SEND_REQUEST
    data: InspectorWillSendRequestData


class DidReceiveResponseSignal(BaseModel):
    """An inspector did-receive-response message."""
    method: Literal[PageEventMethod.DID_RECEIVE_RESPONSE] = PageEventMethod.DID_RECEIVE_RESPONSE
    data: InspectorDidReceiveResponseData


class DidReceiveContentLengthSignal(BaseModel):
    """An inspector did-receive-content-length message."""
    method: Literal[PageEventMethod.DID_RECEIVE_CONTENT_LENGTH] = PageEventMethod.DID_RECEIVE_CONTENT_LENGTH
    data: InspectorDidReceiveContentLengthData


class FrontendReusedSignal(BaseModel):
    """The inspected page reused its frontend; the next resource start is the main resource."""
    method: Literal[PageEventMethod.FRONTEND_REUSED] = PageEventMethod.FRONTEND_REUSED


# Union of all signal types - discriminated by 'method' field
PageEventSignal = Annotated[
    Union[
        AddRecordToTimelineSignal,
        WillSendRequestSignal,
        DidReceiveResponseSignal,
        DidReceiveContentLengthSignal,
        FrontendReusedSignal,
    ],
    Field(discriminator="method"),
]

_PAGE_EVENT_SIGNAL_ADAPTER: TypeAdapter[PageEventSignal] = TypeAdapter(PageEventSignal)
_ROUTABLE_METHODS: frozenset[str] = frozenset(m.value for m in PageEventMethod)


def parse_page_event(method: str, body: dict[str, Any] | None) -> PageEventSignal | None:
    """
    Validate a raw page event into its typed signal.
    Args:
        method: The signal name.
        body: The signal payload as delivered by the source.
    Returns:
        The typed signal, or None if the method is not routable.
    Raises:
        pydantic.ValidationError: If the method is routable but the payload is malformed.
    """
    if method not in _ROUTABLE_METHODS:
        return None

    method = PageEventMethod(method)
    payload = body if isinstance(body, dict) else {}
    if method == PageEventMethod.ADD_RECORD_TO_TIMELINE:
        raw = {"method": method, "record": payload.get("record")}
    elif method == PageEventMethod.FRONTEND_REUSED:
        raw = {"method": method}
    else:
        raw = {"method": method, "data": payload}
    return _PAGE_EVENT_SIGNAL_ADAPTER.validate_python(raw)
