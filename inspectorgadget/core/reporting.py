"""
Reporting for InspectorGadget.
This module turns change records into diagnostic lines and hands them to log
output, the optional JSON-lines file and registered callbacks.
"""

import json
import logging
from typing import Callable, List, Optional

from inspectorgadget.core.records import ChangeRecord, ChangeSource

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "[InspectorGadget]"


def format_record(record: ChangeRecord, prefix: str = DEFAULT_PREFIX) -> str:
    """Render a record as a single diagnostic line."""
    if record.source == ChangeSource.POLL:
        return (f"{prefix} Accessibility text changed: '{record.new_label}' "
                f"on element: {record.element_description}")
    if record.previous_label is None:
        return f"{prefix} {record.control_type} set: '{record.new_label}'"
    return (f"{prefix} {record.control_type} text changed: "
            f"'{record.previous_label}' -> '{record.new_label}'")


class ChangeReporter:
    """Sink shared by the interceptor and the poller."""

    def __init__(self, output_file: Optional[str] = None, prefix: str = DEFAULT_PREFIX):
        self.output_file = output_file
        self.prefix = prefix
        self.callbacks: List[Callable[[ChangeRecord], None]] = []

    def add_callback(self, callback: Callable[[ChangeRecord], None]):
        self.callbacks.append(callback)

    def remove_callback(self, callback: Callable[[ChangeRecord], None]):
        if callback in self.callbacks:
            self.callbacks.remove(callback)

    def report(self, record: ChangeRecord):
        logger.info(format_record(record, self.prefix))

        if self.output_file:
            self._write_to_file(record)

        self._notify_callbacks(record)

    def _write_to_file(self, record: ChangeRecord):
        try:
            with open(self.output_file, 'a') as f:
                f.write(json.dumps(record.to_dict()) + "\n")
        except Exception as e:
            logger.error(f"Error writing to output file: {e}")

    def _notify_callbacks(self, record: ChangeRecord):
        for callback in list(self.callbacks):
            try:
                callback(record)
            except Exception as e:
                logger.error(f"Error in change callback: {e}")
