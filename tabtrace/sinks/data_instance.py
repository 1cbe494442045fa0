"""
tabtrace/sinks/data_instance.py

In-memory sink that collects normalized records and fans them out to callbacks.
"""

from __future__ import annotations

from typing import Callable

from tabtrace.data_models.events import EventRecord
from tabtrace.proxy.abstract_data_proxy import AbstractDataProxy

EventRecordCallback = Callable[[EventRecord], None]


class DataInstance:
    """
    Receives normalized records from a data proxy.
    Records are kept in arrival order and passed to every registered callback.

    Usage:
        proxy = NormalizationProxy(tab_id=3, event_source=source)
        data_instance = DataInstance.create(proxy)
        data_instance.add_callback(lambda record: print(record.type, record.time))
    """

    def __init__(self) -> None:
        self.records: list[EventRecord] = []
        self.proxy: AbstractDataProxy | None = None
        self._callbacks: list[EventRecordCallback] = []

    @classmethod
    def create(cls, proxy: AbstractDataProxy) -> DataInstance:
        """
        Factory method to create a DataInstance wired to a proxy.
        Loading the proxy attaches it to its event source.
        """
        data_instance = cls()
        data_instance.proxy = proxy
        proxy.load(data_instance)
        return data_instance

    def add_callback(self, callback: EventRecordCallback) -> None:
        self._callbacks.append(callback)

    def on_event_record(self, record: EventRecord) -> None:
        self.records.append(record)
        for callback in self._callbacks:
            callback(record)

    def clear(self) -> None:
        self.records = []

    # proxy passthroughs

    def get_base_time(self) -> float:
        return self._require_proxy().get_base_time()

    def set_profiling_options(self, enable_stack_traces: bool, enable_cpu_profiling: bool) -> None:
        self._require_proxy().set_profiling_options(enable_stack_traces, enable_cpu_profiling)

    def resume_monitoring(self) -> None:
        self._require_proxy().resume_monitoring()

    def stop_monitoring(self) -> None:
        self._require_proxy().stop_monitoring()

    def unload(self) -> None:
        self._require_proxy().unload()

    def _require_proxy(self) -> AbstractDataProxy:
        if self.proxy is None:
            raise RuntimeError("DataInstance is not attached to a proxy; use DataInstance.create(proxy)")
        return self.proxy
