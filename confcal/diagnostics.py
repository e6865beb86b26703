"""
Diagnostics sink for the normalization pipeline.

Normalization never prints; it records what it had to guess or drop here.
The caller decides whether to surface the entries through Log, aggregate
them, or discard them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from confcal.logging_helper import Log


class Severity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class DiagnosticEntry:
    severity: Severity
    message: str
    record: Optional[str] = None  # title or other human reference to the session

    def render(self) -> str:
        if self.record:
            return f"{self.record}: {self.message}"
        return self.message


@dataclass
class Diagnostics:
    entries: List[DiagnosticEntry] = field(default_factory=list)

    def add(self, severity: Severity, message: str, record: Optional[str] = None) -> None:
        self.entries.append(DiagnosticEntry(severity, message, record))

    def info(self, message: str, record: Optional[str] = None) -> None:
        self.add(Severity.INFO, message, record)

    def warn(self, message: str, record: Optional[str] = None) -> None:
        self.add(Severity.WARNING, message, record)

    def error(self, message: str, record: Optional[str] = None) -> None:
        self.add(Severity.ERROR, message, record)

    @property
    def warnings(self) -> List[DiagnosticEntry]:
        return [e for e in self.entries if e.severity is Severity.WARNING]

    @property
    def errors(self) -> List[DiagnosticEntry]:
        return [e for e in self.entries if e.severity is Severity.ERROR]

    def for_record(self, record: str) -> List[DiagnosticEntry]:
        return [e for e in self.entries if e.record == record]

    def __len__(self) -> int:
        return len(self.entries)

    def flush_to_log(self) -> int:
        """
        Write all collected entries through Log and clear the sink.

        Returns:
            Number of entries written
        """
        count = len(self.entries)
        for entry in self.entries:
            if entry.severity is Severity.ERROR:
                Log.error(entry.render())
            elif entry.severity is Severity.WARNING:
                Log.warn(entry.render())
            else:
                Log.info(entry.render())
        self.entries.clear()
        return count
