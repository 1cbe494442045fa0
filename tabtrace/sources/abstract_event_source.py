"""
tabtrace/sources/abstract_event_source.py

Abstract base class for event sources (the capture side of a monitored tab).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from tabtrace.data_models.signals import PageEvent

PageEventListener = Callable[[PageEvent], None]


class ListenerHandle:
    """
    Handle returned when a listener is attached; removing it detaches the listener.
    """

    def __init__(self, remove_fn: Callable[[], None]) -> None:
        self._remove_fn = remove_fn
        self._removed = False

    @property
    def is_active(self) -> bool:
        return not self._removed

    def remove_listener(self) -> None:
        """
        Detach the listener. Safe to call more than once.
        """
        if self._removed:
            return
        self._removed = True
        self._remove_fn()


class AbstractEventSource(ABC):
    """
    Abstract base class for event sources.
    A source delivers page events for a tab synchronously, one at a time, to its listeners.
    """

    @abstractmethod
    def add_page_event_listener(self, tab_id: int, listener: PageEventListener) -> ListenerHandle:
        """
        Attach a listener to the page events of a tab.
        Args:
            tab_id: The tab to listen to.
            listener: Called once per page event.
        Returns:
            A handle that detaches the listener.
        Raises:
            DataSourceConnectionError: If the source cannot attach to the tab.
        """
        pass

    @abstractmethod
    def set_profiling_options(self, tab_id: int, enable_stack_traces: bool, enable_cpu_profiling: bool) -> None:
        """
        Configure capture options for a tab. The source owns their meaning.
        """
        pass
