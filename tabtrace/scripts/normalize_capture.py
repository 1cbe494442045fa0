"""
tabtrace/scripts/normalize_capture.py

Script for normalizing a raw page-event capture into a time-aligned record stream.
"""

from argparse import ArgumentParser
from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from tabtrace.config import Config
from tabtrace.sdk.monitor import TabMonitor
from tabtrace.sinks.file_record_writer import FileRecordWriter
from tabtrace.sources.replay_event_source import ReplayEventSource
from tabtrace.utils.exceptions import CaptureFileError
from tabtrace.utils.logger import get_logger, set_log_level

logger = get_logger(__name__)

console = Console()


def print_summary(summary: dict[str, Any], replayed: int) -> None:
    """Print the session summary as a table."""
    table = Table(title=f"Tab {summary['tab_id']}", box=box.ROUNDED)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Page events replayed", str(replayed))
    table.add_row("Records forwarded", str(summary["record_count"]))
    table.add_row("State", summary["state"])
    table.add_row("Base time (ms)", f"{summary['base_time']:.3f}")
    table.add_row("Pending records", str(summary["pending_records"]))
    for type_name, count in sorted(summary["records_by_type"].items()):
        table.add_row(f"  {type_name}", str(count))
    if summary["records_path"]:
        table.add_row("Output", summary["records_path"])

    console.print()
    console.print(table)
    console.print()


def main(argv: list[str] | None = None) -> int:
    # parse arguments
    parser = ArgumentParser(description="Normalize a raw JSONL page-event capture into time-aligned records.")
    parser.add_argument("input", type=str, help="The raw capture (JSONL, one page event per line).")
    parser.add_argument("-o", "--output-dir", type=str, default=Config.DEFAULT_OUTPUT_DIR, help="The directory to write records.jsonl to.")
    parser.add_argument("--tab-id", type=int, default=0, help="The tab to normalize (lines without tabId belong to tab 0).")
    parser.add_argument("--log-level", type=str, default=None, help="Override the log level (e.g. DEBUG).")
    args = parser.parse_args(argv)

    if args.log_level:
        set_log_level(args.log_level)

    try:
        source = ReplayEventSource.from_jsonl(args.input)
    except CaptureFileError as e:
        logger.error("❌ %s", e)
        return 1

    # start from an empty output file
    records_path = Path(args.output_dir) / FileRecordWriter.RECORDS_FILENAME
    if records_path.exists():
        records_path.unlink()

    monitor = TabMonitor(tab_id=args.tab_id, event_source=source, output_dir=args.output_dir)
    with monitor:
        replayed = source.replay(tab_id=args.tab_id)

    print_summary(monitor.get_summary(), replayed)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
