"""
tabtrace/proxy/__init__.py

Data proxies that turn raw page events into normalized records.
"""

from tabtrace.proxy.abstract_data_proxy import AbstractDataProxy, EventRecordSink
from tabtrace.proxy.dispatcher import PageEventDispatcher
from tabtrace.proxy.normalization_proxy import NormalizationProxy, ProxyState

__all__ = [
    "AbstractDataProxy",
    "EventRecordSink",
    "NormalizationProxy",
    "PageEventDispatcher",
    "ProxyState",
]
