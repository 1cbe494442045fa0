"""
tabtrace SDK - High-level API for tab monitoring.
"""

from .monitor import TabMonitor

__all__ = [
    "TabMonitor",
]
