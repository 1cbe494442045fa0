"""
tabtrace/sources/replay_event_source.py

In-memory event source that replays page events pushed by the caller or
loaded from a JSONL capture file.
"""

import json
from collections import defaultdict
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from tabtrace.data_models.signals import PageEvent
from tabtrace.sources.abstract_event_source import AbstractEventSource, ListenerHandle, PageEventListener
from tabtrace.utils.exceptions import CaptureFileError
from tabtrace.utils.logger import get_logger

logger = get_logger(name=__name__)


class ReplayEventSource(AbstractEventSource):
    """
    Event source fed from memory.

    Usage:
        source = ReplayEventSource.from_jsonl("./capture.jsonl")
        proxy = NormalizationProxy(tab_id=0, event_source=source)
        data_instance = DataInstance.create(proxy)
        source.replay(tab_id=0)
    """

    # Magic methods ________________________________________________________________________________________________________

    def __init__(self, captured_events: dict[int, list[PageEvent]] | None = None) -> None:
        """
        Initialize ReplayEventSource.
        Args:
            captured_events: Optional page events per tab, delivered by replay().
        """
        self.captured_events: dict[int, list[PageEvent]] = captured_events or {}
        self.profiling_options: dict[int, tuple[bool, bool]] = {}  # tab_id -> (stack traces, cpu profiling)
        self._listeners: dict[int, list[PageEventListener]] = defaultdict(list)


    # Static methods _______________________________________________________________________________________________________

    @staticmethod
    def load_jsonl(path: str | Path, default_tab_id: int = 0) -> dict[int, list[PageEvent]]:
        """
        Read a capture file of page events, one JSON object per line:
            {"method": "addRecordToTimeline", "body": {...}, "tabId": 3}
        "tabId" is optional.
        Args:
            path: Path to the JSONL capture.
            default_tab_id: Tab for lines without "tabId".
        Returns:
            Page events per tab, in file order.
        Raises:
            CaptureFileError: If the file is missing or a line is not a valid page event.
        """
        path = Path(path)
        if not path.exists():
            raise CaptureFileError(f"Capture file not found: {path}")

        events: dict[int, list[PageEvent]] = defaultdict(list)
        with open(path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    raw: dict[str, Any] = json.loads(line)
                    tab_id = int(raw.pop("tabId", default_tab_id))
                    events[tab_id].append(PageEvent.model_validate(raw))
                except (json.JSONDecodeError, ValidationError, TypeError, ValueError, AttributeError) as e:
                    raise CaptureFileError(f"Invalid page event on line {line_num} of {path}: {e}") from e

        logger.info("📂 Loaded %d page events for %d tab(s) from %s",
                    sum(len(v) for v in events.values()), len(events), path)
        return dict(events)


    # Class methods ________________________________________________________________________________________________________

    @classmethod
    def from_jsonl(cls, path: str | Path, default_tab_id: int = 0) -> "ReplayEventSource":
        """
        Factory method to create a ReplayEventSource from a JSONL capture file.
        """
        return cls(captured_events=cls.load_jsonl(path, default_tab_id=default_tab_id))


    # Abstract method implementations ______________________________________________________________________________________

    def add_page_event_listener(self, tab_id: int, listener: PageEventListener) -> ListenerHandle:
        self._listeners[tab_id].append(listener)
        logger.debug("🔌 Listener attached to tab %s (%d total)", tab_id, len(self._listeners[tab_id]))

        def _remove() -> None:
            listeners = self._listeners.get(tab_id, [])
            if listener in listeners:
                listeners.remove(listener)
                logger.debug("🔌 Listener detached from tab %s", tab_id)

        return ListenerHandle(remove_fn=_remove)

    def set_profiling_options(self, tab_id: int, enable_stack_traces: bool, enable_cpu_profiling: bool) -> None:
        self.profiling_options[tab_id] = (enable_stack_traces, enable_cpu_profiling)


    # Public methods _______________________________________________________________________________________________________

    def listener_count(self, tab_id: int) -> int:
        return len(self._listeners.get(tab_id, []))

    def emit(self, tab_id: int, method: str, body: dict[str, Any] | None = None) -> None:
        """
        Deliver one page event to the current listeners of a tab.
        """
        self.emit_page_event(tab_id, PageEvent(method=method, body=body))

    def emit_page_event(self, tab_id: int, event: PageEvent) -> None:
        # copy: a listener may detach itself while handling the event
        for listener in list(self._listeners.get(tab_id, [])):
            listener(event)

    def emit_page_events(self, tab_id: int, events: Iterable[PageEvent]) -> int:
        """
        Deliver page events in order.
        Returns:
            The number of events delivered.
        """
        count = 0
        for event in events:
            self.emit_page_event(tab_id, event)
            count += 1
        return count

    def replay(self, tab_id: int) -> int:
        """
        Deliver the captured events of a tab in capture order.
        Returns:
            The number of events delivered.
        """
        events = self.captured_events.get(tab_id, [])
        logger.info("▶️ Replaying %d page events for tab %s", len(events), tab_id)
        return self.emit_page_events(tab_id, events)
