"""
tabtrace/sinks/__init__.py

Downstream consumers of normalized records.
"""

from tabtrace.sinks.data_instance import DataInstance
from tabtrace.sinks.file_record_writer import FileRecordWriter

__all__ = [
    "DataInstance",
    "FileRecordWriter",
]
