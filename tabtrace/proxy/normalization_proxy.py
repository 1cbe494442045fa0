"""
tabtrace/proxy/normalization_proxy.py

Normalization proxy for one monitored tab.

Receives raw page events from an event source, establishes the session base
time, buffers early resource starts until it exists, synthesizes page
transitions, and forwards normalized records to the downstream sink.
"""

from __future__ import annotations

import math
from enum import StrEnum
from typing import Any, ClassVar

from tabtrace.data_models.events import (
    EventRecord,
    EventRecordType,
    ResourceWillSendEvent,
    TabChangeEvent,
    UnNormalizedEventRecord,
    record_type_name,
    specialize_record,
)
from tabtrace.data_models.inspector import (
    InspectorDidReceiveResponseData,
    InspectorResourceData,
    InspectorResourceMessage,
)
from tabtrace.data_models.signals import PageEvent
from tabtrace.model.traversal import ensure_types, normalize_times
from tabtrace.proxy.abstract_data_proxy import AbstractDataProxy, EventRecordSink
from tabtrace.proxy.dispatcher import PageEventDispatcher
from tabtrace.sources.abstract_event_source import AbstractEventSource, ListenerHandle
from tabtrace.utils.exceptions import DataSourceConnectionError
from tabtrace.utils.logger import get_logger

logger = get_logger(name=__name__)


class ProxyState(StrEnum):
    """Synchronization state of a proxy."""
    AWAITING_BASE_TIME = "awaiting_base_time"
    SYNCHRONIZED = "synchronized"


class NormalizationProxy(AbstractDataProxy):
    """
    Normalizes the page events of one tab into a time-aligned record stream.

    Driven synchronously by the event source; one event is fully processed
    (including any replay of buffered records) before the next is accepted.
    """

    # Class attributes _____________________________________________________________________________________________________

    UNSET_BASE_TIME: ClassVar[float] = -1.0


    # Magic methods ________________________________________________________________________________________________________

    def __init__(self, tab_id: int, event_source: AbstractEventSource) -> None:
        """
        Initialize NormalizationProxy.
        Args:
            tab_id: The tab whose page events this proxy normalizes.
            event_source: Source to attach to on load()/resume_monitoring().
        """
        self.tab_id = tab_id
        self.event_source = event_source
        self.dispatcher = PageEventDispatcher(delegate=self)
        self.sink: EventRecordSink | None = None

        # session state
        self._base_time: float = self.UNSET_BASE_TIME
        self.current_page: ResourceWillSendEvent | None = None  # last resource start that defined a page
        self.pending_records: list[UnNormalizedEventRecord] = []  # resource starts seen before base time
        self.next_resource_is_main = False

        self._listener_handle: ListenerHandle | None = None


    # Properties ___________________________________________________________________________________________________________

    @property
    def state(self) -> ProxyState:
        if self._base_time < 0:
            return ProxyState.AWAITING_BASE_TIME
        return ProxyState.SYNCHRONIZED

    @property
    def is_connected(self) -> bool:
        return self._listener_handle is not None


    # Abstract method implementations ______________________________________________________________________________________

    def load(self, sink: EventRecordSink) -> None:
        self.sink = sink
        self.connect_to_data_source()

    def get_base_time(self) -> float:
        return self._base_time

    def set_base_time(self, base_time: float) -> None:
        self._base_time = base_time

    def set_profiling_options(self, enable_stack_traces: bool, enable_cpu_profiling: bool) -> None:
        self.event_source.set_profiling_options(self.tab_id, enable_stack_traces, enable_cpu_profiling)

    def resume_monitoring(self) -> None:
        self.connect_to_data_source()

    def stop_monitoring(self) -> None:
        self._disconnect()

    def unload(self) -> None:
        logger.info("🧹 Unloading proxy for tab %s", self.tab_id)
        self._base_time = self.UNSET_BASE_TIME
        self.pending_records = []
        self.current_page = None
        self.next_resource_is_main = False
        self._disconnect()


    # Public methods _______________________________________________________________________________________________________

    def connect_to_data_source(self) -> None:
        """
        Attach to the tab's page events. Does nothing if already attached.
        A failure to attach is logged and leaves the proxy disconnected.
        """
        if self._listener_handle is not None:
            # the source must not see a second listener for the same proxy
            return

        try:
            self._listener_handle = self.event_source.add_page_event_listener(self.tab_id, self.dispatch_page_event)
            logger.info("✅ Attached to page events of tab %s", self.tab_id)
        except DataSourceConnectionError as e:
            logger.error("❌ Error attaching to page events of tab %s: %s", self.tab_id, e)

    def dispatch_page_event(self, event: PageEvent) -> None:
        self.dispatcher.invoke(event.method, event.body)

    def normalize_time(self, seconds: float) -> float:
        """
        Convert a source-clock time in seconds to milliseconds since the base time.
        """
        assert self._base_time >= 0, "normalize_time called before a base time was established."
        return seconds * 1000 - self._base_time

    def on_timeline_record(self, record: UnNormalizedEventRecord) -> None:
        """
        Handle a timeline record tree.
        Resource starts seen before the base time is known are buffered; the
        first other record establishes the base time and flushes the buffer.
        """
        assert self.sink is not None, "on_timeline_record called before a sink was loaded."

        record = specialize_record(ensure_types(record))

        if self._base_time < 0:
            # A resource start may have happened as a child of another trace, so
            # it cannot establish the base time by itself. Hold it until a
            # different record arrives.
            if record.type == EventRecordType.RESOURCE_SEND_REQUEST:
                self.pending_records.append(record)
                logger.debug("⏳ Buffered resource start %s (%d pending)",
                             getattr(record, "identifier", None), len(self.pending_records))
                return
            # buffered records are replayed before the trigger itself is handled
            self._send_pending_records_and_set_base_time(record)

        if record.type == EventRecordType.RESOURCE_SEND_REQUEST:
            assert isinstance(record, ResourceWillSendEvent)
            if self.next_resource_is_main:
                self.next_resource_is_main = False
                # redirects reuse the identifier; only one transition per main request
                if self.current_page is None or self.current_page.identifier != record.identifier:
                    self.current_page = record
                    logger.debug("🧭 Page transition to %s", record.url)
                    self._normalize_and_dispatch_event_record(
                        TabChangeEvent.create_unnormalized(record.start_time, record.url)
                    )

        elif record.type == EventRecordType.RESOURCE_RECEIVE_RESPONSE:
            # lets the next main resource start a fresh transition
            self.current_page = None

        self._normalize_and_dispatch_event_record(record)

    def on_inspector_message(self, message_type: EventRecordType, data: InspectorResourceData) -> None:
        """
        Handle a side-channel inspector message.
        Only timeline records establish the base time, so messages arriving
        before it are dropped rather than buffered.
        """
        if self._base_time < 0:
            logger.debug("⏭️ Dropping %s before base time", record_type_name(message_type))
            return

        self._forward_to_sink(
            InspectorResourceMessage.create(message_type, self.normalize_time(data.time), data)
        )

    def on_did_receive_response(self, data: InspectorDidReceiveResponseData) -> None:
        """
        Handle a did-receive-response message, normalizing its detailed timing first.
        """
        if self._base_time < 0:
            logger.debug("⏭️ Dropping %s before base time",
                         record_type_name(EventRecordType.INSPECTOR_DID_RECEIVE_RESPONSE))
            return

        timing = data.response.timing
        if timing is not None:
            data = data.with_request_time(self.normalize_time(timing.request_time))

        self.on_inspector_message(EventRecordType.INSPECTOR_DID_RECEIVE_RESPONSE, data)

    def on_frontend_reused(self) -> None:
        self.next_resource_is_main = True

    def get_state_snapshot(self) -> dict[str, Any]:
        """
        Return a lightweight summary of the proxy's session state.
        """
        return {
            "tab_id": self.tab_id,
            "state": self.state.value,
            "base_time": self._base_time,
            "connected": self.is_connected,
            "pending_records": len(self.pending_records),
            "current_page": None if self.current_page is None else self.current_page.identifier,
            "next_resource_is_main": self.next_resource_is_main,
        }


    # Private methods ______________________________________________________________________________________________________

    def _disconnect(self) -> None:
        if self._listener_handle is not None:
            self._listener_handle.remove_listener()
            logger.info("🔌 Detached from page events of tab %s", self.tab_id)
        self._listener_handle = None

    def _forward_to_sink(self, record: EventRecord) -> None:
        """
        Forward an already normalized record to the sink.
        """
        assert math.isfinite(record.time), "Time was not normalized!"

        # The source occasionally delivers records with a timestamp before the
        # base time. These are discarded.
        if record.time < 0:
            logger.debug("⏭️ Dropping %s with negative time %.3f", record_type_name(record.type), record.time)
            return

        self.sink.on_event_record(record)

    def _normalize_and_dispatch_event_record(self, record: UnNormalizedEventRecord) -> None:
        """
        Normalize the record tree and forward it.
        """
        assert self._base_time >= 0, "Base time is still not set."

        self._forward_to_sink(normalize_times(record, self._base_time))

    def _send_pending_records_and_set_base_time(self, trigger_record: UnNormalizedEventRecord) -> None:
        """
        Establish the base time from the trigger record and the buffered
        resource starts, then replay the buffered records in arrival order.
        Args:
            trigger_record: The first record that is not a resource start.
        """
        assert self._base_time < 0, "Emptying record buffer after establishing a base time."

        base_time = trigger_record.start_millis
        if self.pending_records:
            base_time = min(base_time, min(r.start_millis for r in self.pending_records))

        self.set_base_time(base_time)
        logger.info("🕐 Base time for tab %s set to %.3f ms (%d buffered records)",
                    self.tab_id, base_time, len(self.pending_records))

        # buffered resource starts still go through page transition logic
        pending_records, self.pending_records = self.pending_records, []
        for pending_record in pending_records:
            self.on_timeline_record(pending_record)
