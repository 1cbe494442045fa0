"""
tabtrace/sinks/file_record_writer.py

File-based sink that appends normalized records to a JSONL file.
"""

import json
from pathlib import Path

from tabtrace.data_models.events import EventRecord
from tabtrace.utils.logger import get_logger

logger = get_logger(name=__name__)


class FileRecordWriter:
    """
    Sink adapter that writes normalized records to disk, one JSON object per line.

    Usage:
        writer = FileRecordWriter.create_from_output_dir("./captures")
        data_instance.add_callback(writer.on_event_record)
    """

    RECORDS_FILENAME = "records.jsonl"

    def __init__(self, records_path: str | Path) -> None:
        """
        Initialize FileRecordWriter.

        Args:
            records_path: Path of the JSONL file. Parent directories are created.
        """
        self.records_path = Path(records_path)
        self.records_path.parent.mkdir(parents=True, exist_ok=True)
        self.written_count = 0

        logger.info("📁 FileRecordWriter initialized: %s", self.records_path)

    def on_event_record(self, record: EventRecord) -> None:
        """
        Append a record to the JSONL file. Write failures are logged, not raised.

        Args:
            record: The normalized record.
        """
        try:
            with open(self.records_path, mode="a", encoding="utf-8") as f:
                json_line = json.dumps(record.model_dump(mode="json"), ensure_ascii=False)
                f.write(json_line + "\n")
            self.written_count += 1
        except Exception as e:
            logger.error("❌ Failed to write record to %s: %s", self.records_path, e)

    @classmethod
    def create_from_output_dir(cls, output_dir: str | Path) -> "FileRecordWriter":
        """
        Factory method to create a FileRecordWriter writing to output_dir/records.jsonl.

        Args:
            output_dir: Base output directory path.

        Returns:
            Configured FileRecordWriter instance.
        """
        return cls(records_path=Path(output_dir) / cls.RECORDS_FILENAME)
