"""
tests/unit/proxy/test_dispatcher.py

Tests for PageEventDispatcher routing.
"""

from unittest.mock import MagicMock

import pytest

from conftest import make_raw_record
from tabtrace.data_models.events import EventRecordType, UnNormalizedEventRecord
from tabtrace.data_models.inspector import (
    InspectorDidReceiveContentLengthData,
    InspectorDidReceiveResponseData,
    InspectorWillSendRequestData,
)
from tabtrace.proxy.dispatcher import PageEventDispatcher


@pytest.fixture
def delegate() -> MagicMock:
    return MagicMock()


@pytest.fixture
def dispatcher(delegate: MagicMock) -> PageEventDispatcher:
    return PageEventDispatcher(delegate=delegate)


class TestPageEventDispatcher:
    """
    Tests for routing each signal to its handler.
    """

    def test_add_record_to_timeline(self, dispatcher: PageEventDispatcher, delegate: MagicMock) -> None:
        dispatcher.invoke("addRecordToTimeline", {"record": make_raw_record("Layout", 1.0)})

        delegate.on_timeline_record.assert_called_once()
        record = delegate.on_timeline_record.call_args.args[0]
        assert isinstance(record, UnNormalizedEventRecord)
        assert record.start_time == 1.0

    def test_will_send_request(self, dispatcher: PageEventDispatcher, delegate: MagicMock) -> None:
        dispatcher.invoke("willSendRequest", {"identifier": 1, "time": 1.0})

        message_type, data = delegate.on_inspector_message.call_args.args
        assert message_type == EventRecordType.INSPECTOR_WILL_SEND_REQUEST
        assert isinstance(data, InspectorWillSendRequestData)

    def test_did_receive_response(self, dispatcher: PageEventDispatcher, delegate: MagicMock) -> None:
        """Responses go to the dedicated handler so their timing can be normalized."""
        dispatcher.invoke("didReceiveResponse", {"identifier": 1, "time": 1.0, "response": {}})

        delegate.on_did_receive_response.assert_called_once()
        assert isinstance(delegate.on_did_receive_response.call_args.args[0], InspectorDidReceiveResponseData)
        delegate.on_inspector_message.assert_not_called()

    def test_did_receive_content_length(self, dispatcher: PageEventDispatcher, delegate: MagicMock) -> None:
        dispatcher.invoke("didReceiveContentLength", {"identifier": 1, "time": 1.0, "lengthReceived": 3})

        message_type, data = delegate.on_inspector_message.call_args.args
        assert message_type == EventRecordType.INSPECTOR_DID_RECEIVE_CONTENT_LENGTH
        assert isinstance(data, InspectorDidReceiveContentLengthData)
        assert data.length_received == 3

    def test_frontend_reused(self, dispatcher: PageEventDispatcher, delegate: MagicMock) -> None:
        dispatcher.invoke("frontendReused", None)

        delegate.on_frontend_reused.assert_called_once_with()

    def test_unroutable_method_ignored(self, dispatcher: PageEventDispatcher, delegate: MagicMock) -> None:
        dispatcher.invoke("updateFocusedNode", {"nodeId": 3})

        assert delegate.method_calls == []

    def test_malformed_payload_ignored(self, dispatcher: PageEventDispatcher, delegate: MagicMock) -> None:
        dispatcher.invoke("willSendRequest", {"identifier": 1})
        dispatcher.invoke("addRecordToTimeline", {})

        assert delegate.method_calls == []
