"""
tests/unit/data_models/test_inspector.py

Tests for inspector message payloads.
"""

from tabtrace.data_models.events import EventRecordType
from tabtrace.data_models.inspector import (
    InspectorDidReceiveResponseData,
    InspectorResourceMessage,
    InspectorWillSendRequestData,
)


class TestInspectorDidReceiveResponseData:

    def test_with_request_time_is_pure(self) -> None:
        data = InspectorDidReceiveResponseData.model_validate({
            "identifier": 1,
            "time": 2.0,
            "response": {"timing": {"requestTime": 1.9, "sendStart": 0.3}},
        })
        updated = data.with_request_time(900.0)

        assert updated.response.timing.request_time == 900.0
        assert updated.response.timing.send_start == 0.3
        assert data.response.timing.request_time == 1.9

    def test_with_request_time_without_timing(self) -> None:
        data = InspectorDidReceiveResponseData.model_validate({"identifier": 1, "time": 2.0, "response": {}})
        assert data.with_request_time(900.0) is data


class TestInspectorResourceMessage:

    def test_create_keeps_source_keys(self) -> None:
        data = InspectorWillSendRequestData.model_validate({
            "identifier": 3,
            "time": 1.0,
            "request": {"url": "http://a", "httpMethod": "POST"},
            "loaderId": "L1",
        })
        message = InspectorResourceMessage.create(EventRecordType.INSPECTOR_WILL_SEND_REQUEST, 12.5, data)

        assert message.type == EventRecordType.INSPECTOR_WILL_SEND_REQUEST
        assert message.time == 12.5
        assert message.children == []
        assert message.data["request"]["httpMethod"] == "POST"
        assert message.data["loaderId"] == "L1"
        assert "redirectResponse" not in message.data
