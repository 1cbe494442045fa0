"""
tabtrace/proxy/abstract_data_proxy.py

Abstract base class for data proxies.
A data proxy sits between an event source and a data instance: it receives raw
page events, turns them into normalized records and forwards them to its sink.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol

from tabtrace.data_models.events import EventRecord


class EventRecordSink(Protocol):
    """Downstream consumer of normalized records."""

    def on_event_record(self, record: EventRecord) -> None: ...


class AbstractDataProxy(ABC):
    """
    Abstract base class for data proxies.
    """

    @abstractmethod
    def load(self, sink: EventRecordSink) -> None:
        """
        Attach the downstream sink and start monitoring.
        """
        pass

    @abstractmethod
    def get_base_time(self) -> float:
        """
        Return the base time in milliseconds on the source clock (negative when unset).
        """
        pass

    @abstractmethod
    def set_base_time(self, base_time: float) -> None:
        pass

    @abstractmethod
    def set_profiling_options(self, enable_stack_traces: bool, enable_cpu_profiling: bool) -> None:
        pass

    @abstractmethod
    def resume_monitoring(self) -> None:
        pass

    @abstractmethod
    def stop_monitoring(self) -> None:
        pass

    @abstractmethod
    def unload(self) -> None:
        """
        Stop monitoring and reset all session state.
        """
        pass
