from __future__ import annotations

from enum import Enum


class Severity(Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @classmethod
    def from_str(cls, value: "Severity | str") -> "Severity":
        """Parse a severity label (case-insensitive).

        Raises:
            ValueError: If the label is not one of LOW, MEDIUM, HIGH, CRITICAL.
        """
        if isinstance(value, cls):
            return value
        label = str(value).strip().upper()
        try:
            return cls[label]
        except KeyError:
            allowed = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown severity {value!r}; expected one of {allowed}") from None


class ResponseOutcome(Enum):
    SUCCESS = "success"
    ERROR = "error"
    # Any other status string the server may send (e.g. "fail", "partial")
    UNKNOWN = "unknown"
