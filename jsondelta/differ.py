"""Recursive structural diffing for the jsondelta engine."""

from __future__ import annotations

from typing import Any, Optional

from .models import ABSENT, NO_DIFF, Summary, TraceEntry
from .resolver import ConfigResolver
from .exceptions import MaxDepthExceededError
from .utils import (
    is_plain_mapping,
    is_sequence,
    deep_equal,
    freeze,
    build_path,
    build_keyed_path,
)


class Differ:
    """
    Computes the delta between two JSON-like values.

    Handles:
    - Mappings: added, removed (ABSENT) and changed keys only
    - Sequences without a pairing key: replaced as a whole when they differ
    - Sequences with a pairing key (unique_by): element-level deltas
    - Everything else: replaced by the right value when not deep-equal

    Every comparison returns either NO_DIFF or the delta value.
    """

    def __init__(self, max_depth: int = 100, trace_rules: bool = False):
        self.max_depth = max_depth
        self.trace_rules = trace_rules

        self.summary = Summary()
        self.traces: list[TraceEntry] = []

    def diff(
        self,
        left: Any,
        right: Any,
        config: Optional[dict] = None,
        path: str = "$",
        depth: int = 0
    ) -> Any:
        """
        Compare two values under a configuration.

        Args:
            left: The original value
            right: The changed value
            config: Configuration mapping for this level
            path: Current JSONPath
            depth: Current nesting depth

        Returns:
            NO_DIFF if the values match, the delta otherwise
        """
        if depth > self.max_depth:
            raise MaxDepthExceededError(self.max_depth, path)

        if is_sequence(left) and is_sequence(right):
            return self._diff_sequences(left, right, config, path, depth)
        if is_plain_mapping(left) and is_plain_mapping(right):
            return self._diff_mappings(left, right, config, path, depth)

        # Primitives and type mismatches are replaced whole
        return NO_DIFF if deep_equal(left, right) else right

    def _diff_mappings(
        self,
        left: dict,
        right: dict,
        config: Optional[dict],
        path: str,
        depth: int
    ) -> Any:
        """Compare two mappings key by key."""
        left = left or {}
        right = right or {}
        options = ConfigResolver.extract_options(config)

        keys = list(left.keys())
        keys.extend(key for key in right.keys() if key not in left)

        result = {}
        changed = False

        for key in keys:
            child_path = build_path(path, key)

            if key in options.ignore_keys:
                self.summary.entries_ignored += 1
                self._add_trace(child_path, 'ignore_keys', 'ignored')
                continue

            self.summary.entries_checked += 1
            child_config = ConfigResolver.child_config(options, key)

            if key not in right:
                if ConfigResolver.ignores_missing(options, child_config):
                    self._add_trace(child_path, 'ignore_missing', 'suppressed')
                    continue
                result[key] = ABSENT
                self.summary.entries_removed += 1
                changed = True
                continue

            if key not in left:
                result[key] = right[key]
                self.summary.entries_added += 1
                changed = True
                continue

            delta = self.diff(left[key], right[key], child_config, child_path, depth + 1)

            if delta is NO_DIFF:
                if not options.omit_unchanged_entries:
                    result[key] = right[key]
                    self._add_trace(child_path, 'omit_unchanged_entries', 'kept')
                continue

            result[key] = delta
            self.summary.entries_changed += 1
            if not deep_equal(delta, right[key]):
                changed = True

        # Entries kept by omit_unchanged_entries do not make a change
        if not changed and deep_equal(left, right):
            return NO_DIFF

        return result if result else NO_DIFF

    def _diff_sequences(
        self,
        left: list,
        right: list,
        config: Optional[dict],
        path: str,
        depth: int
    ) -> Any:
        """Compare two sequences, pairing elements when unique_by is set."""
        options = ConfigResolver.extract_options(config)
        unique_by = ConfigResolver.pairing_key(options, path)

        if unique_by is None:
            return NO_DIFF if deep_equal(left, right) else right

        element_config = ConfigResolver.element_config(options)
        self._add_trace(path, 'unique_by', 'paired', {'unique_by': unique_by})

        left_by_key = {}
        for item in left:
            if is_plain_mapping(item) and unique_by in item:
                left_by_key[freeze(item[unique_by])] = item

        result = []
        for index, right_item in enumerate(right):
            has_key = is_plain_mapping(right_item) and unique_by in right_item
            left_item = None

            if has_key:
                item_path = build_keyed_path(path, unique_by, right_item[unique_by])
                left_item = left_by_key.get(freeze(right_item[unique_by]))
                if left_item is not None:
                    self.summary.elements_paired += 1
            else:
                item_path = build_path(path, index)

            delta = self.diff(left_item, right_item, element_config, item_path, depth + 1)

            if delta is NO_DIFF:
                if not options.omit_unchanged_elements:
                    result.append(right_item)
                continue

            if has_key and is_plain_mapping(delta) and unique_by not in delta:
                delta = {unique_by: right_item[unique_by], **delta}
                self._add_trace(item_path, 'unique_by', 'injected',
                                {'unique_by': unique_by})

            result.append(delta)

        return result if result else NO_DIFF

    def _add_trace(
        self,
        path: str,
        rule: str,
        action: str,
        details: dict = None
    ):
        """Add a trace entry if tracing is enabled."""
        if self.trace_rules:
            self.traces.append(TraceEntry(
                path=path,
                rule=rule,
                action=action,
                details=details
            ))
