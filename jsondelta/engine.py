"""Main diff engine for jsondelta."""

from __future__ import annotations

import time
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Optional

from .models import (
    NO_DIFF,
    EngineConfig,
    DeltaReport,
    ExecutionInfo,
    ErrorResponse,
)
from .differ import Differ
from .jsonpath_utils import JSONPathMatcher
from .exceptions import (
    ConfigurationError,
    PayloadSizeError,
    MaxDepthExceededError,
)
from .utils import get_json_size_mb


class DeltaEngine:
    """
    Diff engine that runs the two stages of a comparison:

    1. Preparation: copy both inputs and drop global ignores
    2. Diffing: recursive comparison driven by the diff configuration
    """

    VERSION = "1.0.0"

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or EngineConfig()

    def diff(
        self,
        left: Any,
        right: Any,
        config: Optional[dict] = None
    ) -> Any:
        """
        Compute the delta between two values.

        Returns an empty mapping when nothing changed. Raises on invalid
        configuration, oversized payloads and excessive nesting.
        """
        delta, _, _ = self._run(left, right, config)
        return delta

    def compare(
        self,
        left: Any,
        right: Any,
        config: Optional[dict] = None
    ) -> DeltaReport | ErrorResponse:
        """
        Compare two values and describe the outcome in a report.

        Args:
            left: The original value
            right: The changed value
            config: Diff configuration (keys mirror the compared values)

        Returns:
            DeltaReport on success, ErrorResponse on configuration/processing errors
        """
        start_time = time.time()

        try:
            delta, has_changes, differ = self._run(left, right, config)

            duration_ms = int((time.time() - start_time) * 1000)

            return DeltaReport(
                has_changes=has_changes,
                delta=delta,
                execution=ExecutionInfo(
                    duration_ms=duration_ms,
                    timestamp=datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
                    engine_version=self.VERSION
                ),
                summary=differ.summary if self.config.collect_statistics else None,
                trace=differ.traces if self.config.trace_rule_application else []
            )

        except ConfigurationError as e:
            return self._create_error_response(
                "CONFIGURATION_ERROR",
                str(e),
                {"option": e.option, "path": e.path}
            )
        except PayloadSizeError as e:
            return self._create_error_response(
                "PAYLOAD_SIZE_ERROR",
                str(e),
                {"size_mb": e.size_mb, "limit_mb": e.limit_mb}
            )
        except MaxDepthExceededError as e:
            return self._create_error_response(
                "MAX_DEPTH_ERROR",
                str(e),
                {"depth": e.depth, "path": e.path}
            )
        except Exception as e:
            return self._create_error_response(
                "PROCESSING_ERROR",
                str(e),
                {"type": type(e).__name__}
            )

    def _run(
        self,
        left: Any,
        right: Any,
        config: Optional[dict]
    ) -> tuple[Any, bool, Differ]:
        """Prepare the inputs and diff them."""
        self._validate_inputs(left, right)

        left = self._prepare(left)
        right = self._prepare(right)

        differ = Differ(
            max_depth=self.config.max_depth,
            trace_rules=self.config.trace_rule_application
        )
        delta = differ.diff(left, right, config or {})

        if delta is NO_DIFF:
            return {}, False, differ
        return delta, True, differ

    def _prepare(self, value: Any) -> Any:
        """Copy a value and remove the global ignores from the copy."""
        value = deepcopy(value)
        if self.config.global_ignores:
            value = JSONPathMatcher.delete_paths(value, self.config.global_ignores)
        return value

    def _validate_inputs(self, left: Any, right: Any):
        """Check payload sizes."""
        left_size = get_json_size_mb(left)
        right_size = get_json_size_mb(right)

        if left_size > self.config.max_payload_size_mb:
            raise PayloadSizeError(left_size, self.config.max_payload_size_mb)
        if right_size > self.config.max_payload_size_mb:
            raise PayloadSizeError(right_size, self.config.max_payload_size_mb)

    def _create_error_response(
        self,
        code: str,
        message: str,
        details: dict
    ) -> ErrorResponse:
        """Create an error response."""
        return ErrorResponse(
            success=False,
            error={
                "code": code,
                "message": message,
                "details": details
            }
        )


def diff(
    left: Any,
    right: Any,
    config: Optional[dict] = None,
    engine_config: Optional[EngineConfig] = None
) -> Any:
    """
    Compute the structural difference between two values.

    Args:
        left: The original value
        right: The changed value
        config: Diff configuration; reserved options apply to the top level,
            any other key configures the top-level key of that name
        engine_config: Optional engine configuration

    Returns:
        The delta, or an empty mapping when nothing changed

    Raises:
        ConfigurationError: If a unique_by option is not a string or integer
    """
    engine = DeltaEngine(engine_config)
    return engine.diff(left, right, config)
