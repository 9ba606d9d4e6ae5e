"""File-based runner that diffs two YAML/JSON documents."""

from __future__ import annotations

import yaml
from pathlib import Path
from typing import Any, Optional

from .engine import DeltaEngine
from .models import EngineConfig, DeltaReport, ErrorResponse
from .exceptions import ConfigParseError


class DeltaRunner:
    """
    Runner that loads the compared documents and the diff configuration
    from files.

    Usage:
        runner = DeltaRunner("before.json", "after.json", "config.yaml")
        report = runner.run()

    Or as a one-liner:
        report = DeltaRunner.run_diff("before.json", "after.json", "config.yaml")
    """

    def __init__(
        self,
        left_path: str,
        right_path: str,
        config_path: Optional[str] = None,
        engine_config: Optional[EngineConfig] = None
    ):
        """
        Initialize the runner.

        Args:
            left_path: Path to the original YAML/JSON document
            right_path: Path to the changed YAML/JSON document
            config_path: Optional path to a YAML/JSON diff configuration
            engine_config: Optional engine configuration
        """
        self.left_path = Path(left_path)
        self.right_path = Path(right_path)
        self.config_path = Path(config_path) if config_path else None
        self.engine_config = engine_config or EngineConfig()
        self._config: Optional[dict] = None

    @property
    def config(self) -> dict:
        """Load and cache the diff configuration from file."""
        if self._config is None:
            if self.config_path is None:
                self._config = {}
            else:
                self._config = self._load_document(self.config_path) or {}
        return self._config

    @staticmethod
    def _load_document(path: Path) -> Any:
        """Load a YAML or JSON document."""
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        with open(path, 'r') as f:
            content = f.read()

        # JSON is valid YAML, so safe_load handles both
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            mark = getattr(e, 'problem_mark', None)
            raise ConfigParseError(
                f"Failed to parse {path}: {e}",
                line=mark.line + 1 if mark else None,
                column=mark.column + 1 if mark else None,
                reason=getattr(e, 'problem', None)
            )

    def run(self) -> DeltaReport | ErrorResponse:
        """
        Diff the two documents.

        Returns:
            DeltaReport on success, ErrorResponse on engine errors
        """
        left = self._load_document(self.left_path)
        right = self._load_document(self.right_path)

        engine = DeltaEngine(self.engine_config)
        return engine.compare(left, right, self.config)

    @classmethod
    def run_diff(
        cls,
        left_path: str,
        right_path: str,
        config_path: Optional[str] = None,
        engine_config: Optional[EngineConfig] = None
    ) -> DeltaReport | ErrorResponse:
        """
        Convenience class method to diff two files in one call.

        Example:
            report = DeltaRunner.run_diff("before.json", "after.json")
        """
        runner = cls(left_path, right_path, config_path, engine_config)
        return runner.run()
