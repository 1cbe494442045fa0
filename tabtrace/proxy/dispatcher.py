"""
tabtrace/proxy/dispatcher.py

Routes raw page events to the handlers of a NormalizationProxy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, assert_never

from pydantic import ValidationError

from tabtrace.data_models.events import EventRecordType
from tabtrace.data_models.signals import (
    AddRecordToTimelineSignal,
    DidReceiveContentLengthSignal,
    DidReceiveResponseSignal,
    FrontendReusedSignal,
    PageEventSignal,
    WillSendRequestSignal,
    parse_page_event,
)
from tabtrace.utils.logger import get_logger

if TYPE_CHECKING:  # avoid circular import
    from tabtrace.proxy.normalization_proxy import NormalizationProxy

logger = get_logger(name=__name__)


class PageEventDispatcher:
    """
    Validates page events at the boundary and calls the matching proxy handler.
    Unroutable names and malformed payloads are ignored.
    """

    def __init__(self, delegate: NormalizationProxy) -> None:
        self.delegate = delegate

    def invoke(self, method: str, body: dict[str, Any] | None) -> None:
        """
        Route a raw page event.
        Args:
            method: Signal name.
            body: Signal payload.
        """
        try:
            signal = parse_page_event(method, body)
        except ValidationError as e:
            logger.debug("⚠️ Ignoring malformed %s payload: %s", method, e)
            return

        if signal is None:
            logger.debug("⏭️ Ignoring unroutable page event: %s", method)
            return

        self.dispatch(signal)

    def dispatch(self, signal: PageEventSignal) -> None:
        """
        Call the proxy handler for an already validated signal.
        """
        match signal:
            case AddRecordToTimelineSignal(record=record):
                self.delegate.on_timeline_record(record)
            case WillSendRequestSignal(data=data):
                self.delegate.on_inspector_message(EventRecordType.INSPECTOR_WILL_SEND_REQUEST, data)
            case DidReceiveResponseSignal(data=data):
                self.delegate.on_did_receive_response(data)
            case DidReceiveContentLengthSignal(data=data):
                self.delegate.on_inspector_message(EventRecordType.INSPECTOR_DID_RECEIVE_CONTENT_LENGTH, data)
            case FrontendReusedSignal():
                self.delegate.on_frontend_reused()
            case _:
                assert_never(signal)
