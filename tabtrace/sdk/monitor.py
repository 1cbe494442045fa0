"""
tabtrace/sdk/monitor.py

Tab monitoring SDK wrapper.

Contains:
- TabMonitor: Wires an event source, a NormalizationProxy and a DataInstance
- start() / stop() / resume() / unload(): monitoring lifecycle
- get_summary(): record counts and proxy state
- Outputs (optional): <output_dir>/records.jsonl
"""

from collections import Counter
from typing import Any, Optional

from ..data_models.events import EventRecord, record_type_name
from ..model.traversal import traverse_leaf_first
from ..proxy.normalization_proxy import NormalizationProxy
from ..sinks.data_instance import DataInstance
from ..sinks.file_record_writer import FileRecordWriter
from ..sources.abstract_event_source import AbstractEventSource
from ..utils.logger import get_logger

logger = get_logger(__name__)


class TabMonitor:
    """
    High-level interface for normalizing the event stream of one tab.

    Example:
        >>> source = ReplayEventSource.from_jsonl("./capture.jsonl")
        >>> monitor = TabMonitor(tab_id=0, event_source=source, output_dir="./normalized")
        >>> with monitor:
        ...     source.replay(tab_id=0)
        >>> summary = monitor.get_summary()
    """

    def __init__(
        self,
        tab_id: int,
        event_source: AbstractEventSource,
        output_dir: Optional[str] = None,
        enable_stack_traces: bool = False,
        enable_cpu_profiling: bool = False,
    ):
        self.tab_id = tab_id
        self.event_source = event_source
        self.output_dir = output_dir
        self.enable_stack_traces = enable_stack_traces
        self.enable_cpu_profiling = enable_cpu_profiling

        self.proxy = NormalizationProxy(tab_id=tab_id, event_source=event_source)
        self.data_instance: Optional[DataInstance] = None
        self.writer: Optional[FileRecordWriter] = (
            FileRecordWriter.create_from_output_dir(output_dir) if output_dir else None
        )

    def __enter__(self) -> "TabMonitor":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    @property
    def records(self) -> list[EventRecord]:
        if self.data_instance is None:
            return []
        return self.data_instance.records

    def start(self) -> None:
        """Start monitoring. The first call loads the proxy; later calls resume it."""
        if self.data_instance is None:
            self.data_instance = DataInstance.create(self.proxy)
            if self.writer is not None:
                self.data_instance.add_callback(self.writer.on_event_record)
        else:
            self.proxy.resume_monitoring()

        self.proxy.set_profiling_options(self.enable_stack_traces, self.enable_cpu_profiling)
        logger.info("🚀 Monitoring tab %s (connected=%s)", self.tab_id, self.proxy.is_connected)

    def stop(self) -> None:
        """Stop monitoring. Session state is kept so that resume() continues the same timeline."""
        self.proxy.stop_monitoring()
        logger.info("⏹️ Stopped monitoring tab %s", self.tab_id)

    def resume(self) -> None:
        self.proxy.resume_monitoring()

    def unload(self) -> None:
        """Stop monitoring and reset the session (base time, buffered and derived state)."""
        self.proxy.unload()

    def get_summary(self) -> dict[str, Any]:
        """
        Summarize the monitored session.
        Returns:
            Proxy state plus counts of forwarded records, top-level and including nested children.
        """
        top_level_counts: Counter[str] = Counter()
        node_counts: Counter[str] = Counter()
        for record in self.records:
            top_level_counts[record_type_name(record.type)] += 1
            traverse_leaf_first(record, lambda node: node_counts.update([record_type_name(node.type)]))

        summary = self.proxy.get_state_snapshot()
        summary.update({
            "record_count": len(self.records),
            "records_by_type": dict(top_level_counts),
            "nodes_by_type": dict(node_counts),
            "records_path": str(self.writer.records_path) if self.writer else None,
        })
        return summary
