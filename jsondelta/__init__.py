"""
jsondelta - Structural diff of JSON-like values

Compares two nested mappings/sequences and produces a minimal delta that
holds only what changed, with per-key configuration for ignored keys,
removals, unchanged entries and keyed pairing of sequence elements.
"""

from .engine import DeltaEngine, diff
from .models import (
    ABSENT,
    EngineConfig,
    DeltaReport,
    ErrorResponse,
    ExecutionInfo,
    Summary,
    TraceEntry,
)
from .exceptions import (
    JsonDeltaError,
    ConfigurationError,
    ConfigParseError,
    MaxDepthExceededError,
    PayloadSizeError,
)
from .utils import deep_equal, to_jsonable
from .runner import DeltaRunner

__version__ = "1.0.0"
__all__ = [
    # Engine
    "diff",
    "DeltaEngine",
    "EngineConfig",
    "ABSENT",
    # Reports
    "DeltaReport",
    "ErrorResponse",
    "ExecutionInfo",
    "Summary",
    "TraceEntry",
    # Errors
    "JsonDeltaError",
    "ConfigurationError",
    "ConfigParseError",
    "MaxDepthExceededError",
    "PayloadSizeError",
    # Helpers
    "deep_equal",
    "to_jsonable",
    # Runner
    "DeltaRunner",
]
