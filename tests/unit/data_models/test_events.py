"""
tests/unit/data_models/test_events.py

Tests for event record models and record type resolution.
"""

import pytest
from pydantic import ValidationError

from conftest import make_raw_record, resource_start
from tabtrace.data_models.events import (
    EventRecordType,
    ResourceResponseEvent,
    ResourceWillSendEvent,
    TabChangeEvent,
    UnNormalizedEventRecord,
    record_type_name,
    resolve_record_type,
    specialize_record,
)


class TestEventRecordType:
    """
    Tests for EventRecordType lookups.
    """

    def test_from_tag_names(self) -> None:
        assert EventRecordType.from_tag("ResourceSendRequest") == EventRecordType.RESOURCE_SEND_REQUEST
        assert EventRecordType.from_tag("ResourceReceiveResponse") == EventRecordType.RESOURCE_RECEIVE_RESPONSE
        assert EventRecordType.from_tag("MarkLoad") == EventRecordType.MARK_LOAD

    def test_from_tag_numeric_string(self) -> None:
        assert EventRecordType.from_tag("12") == EventRecordType.RESOURCE_SEND_REQUEST
        assert EventRecordType.from_tag("999") is None

    def test_from_tag_unknown(self) -> None:
        assert EventRecordType.from_tag("SomethingNew") is None

    def test_synthesized_types_do_not_collide(self) -> None:
        timeline_values = {t.value for t in EventRecordType if t.value < 100}
        assert EventRecordType.TAB_CHANGED not in timeline_values
        assert EventRecordType.inspector_types().isdisjoint(timeline_values)
        assert EventRecordType.TAB_CHANGED not in EventRecordType.inspector_types()


class TestResolveRecordType:

    def test_known_int(self) -> None:
        resolved = resolve_record_type(13)
        assert resolved is EventRecordType.RESOURCE_RECEIVE_RESPONSE

    def test_unknown_values_are_preserved(self) -> None:
        assert resolve_record_type(57) == 57
        assert resolve_record_type("Custom") == "Custom"
        assert resolve_record_type(None) is None

    def test_record_type_name(self) -> None:
        assert record_type_name(1) == "LAYOUT"
        assert record_type_name("Custom") == "Custom"
        assert record_type_name(None) == "UNKNOWN"


class TestUnNormalizedEventRecord:
    """
    Tests for raw record conversion.
    """

    def test_aliases(self) -> None:
        record = UnNormalizedEventRecord.model_validate(make_raw_record(1, 2.0, endTime=2.5))

        assert record.start_time == 2.0
        assert record.end_time == 2.5
        assert record.start_millis == pytest.approx(2000.0)

    def test_to_event_record(self) -> None:
        record = UnNormalizedEventRecord.model_validate(
            make_raw_record(EventRecordType.PAINT, 2.0, data={"x": 1}, endTime=2.25, frameId="f1")
        )
        event = record.to_event_record(base_time=1500.0, children=[])

        assert event.type == EventRecordType.PAINT
        assert event.time == pytest.approx(500.0)
        assert event.duration == pytest.approx(250.0)
        assert event.data == {"x": 1}
        assert event.model_extra["frameId"] == "f1"

    def test_to_event_record_does_not_share_data(self) -> None:
        record = UnNormalizedEventRecord.model_validate(make_raw_record(1, 2.0, data={"nested": {"a": 1}}))
        event = record.to_event_record(base_time=0.0, children=[])

        event.data["nested"]["a"] = 2
        assert record.data["nested"]["a"] == 1

    def test_extras_do_not_override_normalized_fields(self) -> None:
        record = UnNormalizedEventRecord.model_validate(
            make_raw_record(1, 2.0, endTime=2.1, time=7.0, duration=1.0, children=[])
        )
        event = record.to_event_record(base_time=1000.0, children=[])

        assert event.time == pytest.approx(1000.0)
        assert event.duration == pytest.approx(100.0)

    def test_non_finite_end_time_rejected(self) -> None:
        with pytest.raises(ValidationError):
            UnNormalizedEventRecord.model_validate(make_raw_record(1, 2.0, endTime=float("nan")))

    def test_without_end_time_duration_is_none(self) -> None:
        record = UnNormalizedEventRecord.model_validate(make_raw_record(1, 2.0))
        assert record.to_event_record(base_time=0.0, children=[]).duration is None


class TestTypedRecords:
    """
    Tests for specialize_record() and the typed record classes.
    """

    def test_resource_start(self) -> None:
        raw = UnNormalizedEventRecord.model_validate(resource_start(8, 1.0, url="http://a"))
        record = specialize_record(raw.with_resolved_type(children=[]))

        assert isinstance(record, ResourceWillSendEvent)
        assert record.identifier == 8
        assert record.url == "http://a"

    def test_resource_response(self) -> None:
        raw = UnNormalizedEventRecord.model_validate(make_raw_record(13, 1.0, data={"identifier": 8}))
        record = specialize_record(raw.with_resolved_type(children=[]))

        assert isinstance(record, ResourceResponseEvent)
        assert record.identifier == 8

    def test_other_records_unchanged(self) -> None:
        raw = UnNormalizedEventRecord.model_validate(make_raw_record("Layout", 1.0))
        resolved = raw.with_resolved_type(children=[])

        assert specialize_record(resolved) is resolved

    def test_tab_change_create_unnormalized(self) -> None:
        record = TabChangeEvent.create_unnormalized(4.5, "http://b")

        assert record.type == EventRecordType.TAB_CHANGED
        assert record.start_time == 4.5
        assert record.url == "http://b"
        assert record.children == []
