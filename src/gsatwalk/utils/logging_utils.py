"""
Logging utilities for gsatwalk.

This module provides ``configure_logging`` for Python's built-in logging,
a SearchTraceLogger that records search progress as JSON Lines or CSV, and
a NumpyJSONEncoder for serializing numpy values to JSON.
"""

import csv
import json
import logging
import os
import time
from datetime import datetime
from typing import Any

import numpy as np

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class NumpyJSONEncoder(json.JSONEncoder):
    """JSON encoder that can handle NumPy arrays and scalars."""

    def default(self, obj):
        """Convert numpy objects to standard Python types."""
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.bool_):
            return bool(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


def configure_logging(
    level: str | int = "INFO", fmt: str = DEFAULT_FORMAT, log_file: str | None = None
) -> None:
    """
    Configure the root logger for command-line use.

    Args:
        level: Logging level name or number
        fmt: Format string for log records
        log_file: Optional file to log to instead of stderr
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(level=level, format=fmt, filename=log_file, force=True)


class SearchTraceLogger:
    """
    A logger for structured search data.

    Each event type goes to its own file, named
    ``<run_name>_<event_type>.jsonl`` or ``.csv``.
    """

    FORMAT_JSON = "json"
    FORMAT_CSV = "csv"

    def __init__(self, output_dir: str, run_name: str, format_type: str = "json"):
        """
        Initialize the trace logger.

        Args:
            output_dir: Directory to save trace files in
            run_name: Name of the run (used in filenames)
            format_type: Format to save traces in ("json" or "csv")
        """
        if format_type not in (self.FORMAT_JSON, self.FORMAT_CSV):
            raise ValueError(f"Unsupported trace format: {format_type}")

        self.output_dir = output_dir
        self.run_name = run_name
        self.format_type = format_type

        os.makedirs(output_dir, exist_ok=True)

        self.files = {}
        self.write_counts = {}
        self.metadata = {
            "run_name": run_name,
            "start_time": datetime.now().isoformat(),
            "log_files": {},
        }

    def _get_file(self, event_type: str) -> tuple:
        """
        Get the file handle for a given event type.

        Returns:
            Tuple of (file_handle, is_new)
        """
        if event_type not in self.files:
            ext = ".jsonl" if self.format_type == self.FORMAT_JSON else ".csv"
            filepath = os.path.join(self.output_dir, f"{self.run_name}_{event_type}{ext}")
            self.metadata["log_files"][event_type] = filepath

            file = open(
                filepath,
                "w",
                newline="" if self.format_type == self.FORMAT_CSV else None,
            )
            self.files[event_type] = file
            self.write_counts[event_type] = 0
            return file, True

        return self.files[event_type], False

    def _write_event(self, event_type: str, data: dict[str, Any]):
        file, is_new = self._get_file(event_type)

        if self.format_type == self.FORMAT_JSON:
            file.write(json.dumps(data, cls=NumpyJSONEncoder) + "\n")
        else:
            writer = csv.DictWriter(file, fieldnames=list(data.keys()))
            if is_new:
                writer.writeheader()
            writer.writerow(data)
        file.flush()

        self.write_counts[event_type] += 1

    def log_progress(
        self,
        try_index: int,
        flips: int,
        unsatisfied_count: int,
        total_count: int,
        noise_level: int,
    ):
        """
        Log a progress sample taken during one try.

        Args:
            try_index: 1-based try number
            flips: Flips made so far in this try
            unsatisfied_count: Currently unsatisfied clauses
            total_count: Total number of clauses
            noise_level: Noise level in effect
        """
        satisfied = total_count - unsatisfied_count
        data = {
            "try": try_index,
            "flips": flips,
            "unsatisfied_count": unsatisfied_count,
            "satisfied_count": satisfied,
            "total_count": total_count,
            "satisfaction_ratio": satisfied / total_count if total_count > 0 else 1.0,
            "noise_level": noise_level,
            "timestamp": time.time(),
        }
        self._write_event("progress", data)

    def log_try_result(
        self, try_index: int, flips: int, solved: bool, satisfied_count: int, runtime: float
    ):
        """Log the outcome of one try."""
        data = {
            "try": try_index,
            "flips": flips,
            "solved": solved,
            "satisfied_count": satisfied_count,
            "runtime": runtime,
            "timestamp": time.time(),
        }
        self._write_event("try_result", data)

    def log_exception(
        self, try_index: int, exception_type: str, exception_message: str, stack_trace: str
    ):
        """Log an exception raised during a try."""
        data = {
            "try": try_index,
            "exception_type": exception_type,
            "exception_message": exception_message,
            "stack_trace": stack_trace,
            "timestamp": time.time(),
        }
        self._write_event("exception", data)

    def close(self):
        """Close all open file handles."""
        for file in self.files.values():
            file.close()
        self.files = {}

    def finalize(self) -> str:
        """
        Close all files and write a metadata file describing the run.

        Returns:
            Path to the metadata file
        """
        self.close()

        self.metadata["end_time"] = datetime.now().isoformat()
        self.metadata["record_counts"] = self.write_counts

        metadata_path = os.path.join(self.output_dir, f"{self.run_name}_metadata.json")
        with open(metadata_path, "w") as f:
            json.dump(self.metadata, f, indent=2)

        return metadata_path


def create_trace_logger(
    run_name: str, output_dir: str = "traces", format_type: str = "json"
) -> SearchTraceLogger:
    """
    Create a trace logger with default settings.

    Args:
        run_name: Name of the run
        output_dir: Directory to save traces in
        format_type: Format to save traces in ("json" or "csv")

    Returns:
        SearchTraceLogger instance
    """
    return SearchTraceLogger(output_dir=output_dir, run_name=run_name, format_type=format_type)
