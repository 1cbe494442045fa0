"""
tabtrace/data_models/inspector.py

Data models for side-channel inspector resource messages.

NOTE: Inspector messages are flat (no children) and carry their own time field.
Times in these payloads are seconds on the source clock until normalized.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tabtrace.data_models.events import EventRecord, EventRecordType


## Payloads

class InspectorResourceData(BaseModel):
    """
    Base model for inspector resource message payloads.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    identifier: int | str = Field(
        ...,
        description="Resource identifier shared with the timeline resource records",
    )
    time: float = Field(
        ...,
        allow_inf_nan=False,
        description="Time of the message in seconds on the source clock",
    )


class InspectorRequest(BaseModel):
    """
    Request part of a will-send-request message.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    url: str | None = Field(
        default=None,
        description="The requested URL",
    )
    http_method: str | None = Field(
        default=None,
        alias="httpMethod",
        examples=["GET", "POST"],
    )
    http_header_fields: dict[str, str] = Field(
        default_factory=dict,
        alias="httpHeaderFields",
    )


class InspectorWillSendRequestData(InspectorResourceData):
    """
    Payload of a willSendRequest message.
    """
    request: InspectorRequest | None = Field(
        default=None,
        description="The outgoing request",
    )
    redirect_response: dict[str, Any] | None = Field(
        default=None,
        alias="redirectResponse",
        description="Response that caused this request, for redirects",
    )


class DetailedResponseTiming(BaseModel):
    """
    Detailed network timing of a response.
    request_time is absolute (seconds, source clock); the other fields are
    millisecond offsets from it and are left as delivered.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    request_time: float = Field(
        ...,
        alias="requestTime",
        allow_inf_nan=False,
    )
    proxy_start: float | None = Field(default=None, alias="proxyStart")
    proxy_end: float | None = Field(default=None, alias="proxyEnd")
    dns_start: float | None = Field(default=None, alias="dnsStart")
    dns_end: float | None = Field(default=None, alias="dnsEnd")
    connect_start: float | None = Field(default=None, alias="connectStart")
    connect_end: float | None = Field(default=None, alias="connectEnd")
    ssl_start: float | None = Field(default=None, alias="sslStart")
    ssl_end: float | None = Field(default=None, alias="sslEnd")
    send_start: float | None = Field(default=None, alias="sendStart")
    send_end: float | None = Field(default=None, alias="sendEnd")
    receive_headers_end: float | None = Field(default=None, alias="receiveHeadersEnd")


class InspectorResponse(BaseModel):
    """
    Response part of a didReceiveResponse message.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    connection_id: int | None = Field(
        default=None,
        alias="connectionID",
    )
    connection_reused: bool = Field(
        default=False,
        alias="connectionReused",
    )
    timing: DetailedResponseTiming | None = Field(
        default=None,
        description="Detailed timing; absent for cached responses",
    )
    http_header_fields: dict[str, str] = Field(
        default_factory=dict,
        alias="httpHeaderFields",
    )
    http_status_code: int | None = Field(
        default=None,
        alias="httpStatusCode",
        examples=[200, 301, 404],
    )
    http_status_text: str | None = Field(
        default=None,
        alias="httpStatusText",
    )
    url: str | None = Field(
        default=None,
    )
    was_cached: bool = Field(
        default=False,
        alias="wasCached",
    )


class InspectorDidReceiveResponseData(InspectorResourceData):
    """
    Payload of a didReceiveResponse message.
    """
    response: InspectorResponse = Field(
        ...,
        description="The received response",
    )

    def with_request_time(self, request_time: float) -> "InspectorDidReceiveResponseData":
        """
        Return a copy whose detailed timing carries the given request time.
        Returns self unchanged when the response has no detailed timing.
        """
        timing = self.response.timing
        if timing is None:
            return self
        new_timing = timing.model_copy(update={"request_time": request_time})
        new_response = self.response.model_copy(update={"timing": new_timing})
        return self.model_copy(update={"response": new_response})


class InspectorDidReceiveContentLengthData(InspectorResourceData):
    """
    Payload of a didReceiveContentLength message.
    """
    length_received: int = Field(
        default=0,
        alias="lengthReceived",
        description="Number of bytes received in this chunk",
    )


## Normalized message

class InspectorResourceMessage(EventRecord):
    """
    Normalized inspector message forwarded downstream.
    data holds the payload in source (camelCase) form.
    """

    @classmethod
    def create(
        cls,
        message_type: EventRecordType,
        time: float,
        data: InspectorResourceData,
    ) -> "InspectorResourceMessage":
        """
        Build a normalized inspector message.
        Args:
            message_type: One of EventRecordType.inspector_types().
            time: Normalized time in milliseconds since the base time.
            data: The message payload.
        Returns:
            The message record.
        """
        return cls(
            type=message_type,
            time=time,
            data=data.model_dump(by_alias=True, exclude_none=True),
        )
