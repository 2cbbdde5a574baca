"""
Change records for InspectorGadget.
This module provides the ChangeRecord class emitted whenever a label change is detected.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Hashable, Optional


class ChangeSource(str, Enum):
    """Which observer detected the change."""
    INTERCEPTION = "interception"
    POLL = "poll"


@dataclass(frozen=True)
class ChangeRecord:
    """A single detected text change on one element."""
    element_identity: Hashable
    previous_label: Optional[str]
    new_label: str
    source: ChangeSource
    timestamp: float = field(default_factory=time.time)
    control_type: str = ""  # Class name of the intercepted control
    element_description: str = ""  # Description of the polled element

    def __str__(self):
        return (f"ChangeRecord({self.source.value}, {self.timestamp:.2f}, "
                f"{self.previous_label!r} -> {self.new_label!r})")

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to a serializable dictionary."""
        identity = self.element_identity
        if not isinstance(identity, (int, str)):
            identity = str(identity)
        return {
            "identity": identity,
            "previous": self.previous_label,
            "new": self.new_label,
            "source": self.source.value,
            "timestamp": self.timestamp,
            "control_type": self.control_type,
            "element": self.element_description,
        }
