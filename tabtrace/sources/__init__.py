"""
tabtrace/sources/__init__.py

Event sources that push raw page events to a proxy.
"""

from tabtrace.sources.abstract_event_source import AbstractEventSource, ListenerHandle, PageEventListener
from tabtrace.sources.replay_event_source import ReplayEventSource

__all__ = [
    "AbstractEventSource",
    "ListenerHandle",
    "PageEventListener",
    "ReplayEventSource",
]
