"""Data models for the jsondelta engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class Absent(Enum):
    """Marker stored in a delta for a key that was removed on the right."""
    ABSENT = "ABSENT"

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


class NoDiff(Enum):
    """Result of comparing two values that do not differ."""
    NO_DIFF = "NO_DIFF"

    def __repr__(self) -> str:
        return "NO_DIFF"

    def __bool__(self) -> bool:
        return False


ABSENT = Absent.ABSENT
NO_DIFF = NoDiff.NO_DIFF

PairingKey = Union[str, int]


@dataclass
class EngineConfig:
    """Global configuration for the diff engine."""
    max_depth: int = 100
    max_payload_size_mb: float = 50
    global_ignores: list[str] = field(default_factory=list)
    trace_rule_application: bool = False
    collect_statistics: bool = True


@dataclass(frozen=True)
class DiffOptions:
    """Options resolved from a configuration mapping for one level."""
    ignore_keys: frozenset = frozenset()
    omit_unchanged_entries: bool = True
    omit_unchanged_elements: bool = True
    ignore_missing: Optional[bool] = None
    unique_by: Any = None
    default: Optional[dict] = None
    children: dict = field(default_factory=dict)


@dataclass
class TraceEntry:
    """Trace entry for option application (when trace_rule_application=true)."""
    path: str
    rule: str
    action: str
    details: Optional[dict] = None

    def to_dict(self) -> dict:
        result = {
            "path": self.path,
            "rule": self.rule,
            "action": self.action,
        }
        if self.details:
            result["details"] = self.details
        return result


@dataclass
class ExecutionInfo:
    """Execution metadata."""
    duration_ms: int
    timestamp: str
    engine_version: str = "1.0.0"

    def to_dict(self) -> dict:
        return {
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
            "engine_version": self.engine_version,
        }


@dataclass
class Summary:
    """Counters collected while diffing."""
    entries_checked: int = 0
    entries_added: int = 0
    entries_changed: int = 0
    entries_removed: int = 0
    entries_ignored: int = 0
    elements_paired: int = 0

    def to_dict(self) -> dict:
        return {
            "entries_checked": self.entries_checked,
            "entries_added": self.entries_added,
            "entries_changed": self.entries_changed,
            "entries_removed": self.entries_removed,
            "entries_ignored": self.entries_ignored,
            "elements_paired": self.elements_paired,
        }


@dataclass
class DeltaReport:
    """Complete diff report."""
    has_changes: bool
    delta: Any
    execution: ExecutionInfo
    summary: Optional[Summary] = None
    trace: list[TraceEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        from .utils import to_jsonable

        result = {
            "has_changes": self.has_changes,
            "delta": to_jsonable(self.delta),
            "execution": self.execution.to_dict(),
        }
        if self.summary:
            result["summary"] = self.summary.to_dict()
        if self.trace:
            result["trace"] = [t.to_dict() for t in self.trace]
        return result


@dataclass
class ErrorResponse:
    """Error response structure."""
    success: bool = False
    error: Optional[dict] = None

    def to_dict(self) -> dict:
        result = {"success": self.success}
        if self.error:
            result["error"] = self.error
        return result
