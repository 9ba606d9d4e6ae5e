"""Utility functions for the jsondelta engine."""

from __future__ import annotations

import re
import json
import math
from collections.abc import Mapping
from typing import Any

from .models import ABSENT


def get_json_size_mb(obj: Any) -> float:
    """Get the approximate size of a JSON object in megabytes."""
    json_str = json.dumps(obj, default=str)
    return len(json_str.encode('utf-8')) / (1024 * 1024)


def is_plain_mapping(value: Any) -> bool:
    """Check if a value is a mapping (and not a sequence)."""
    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    """Check if a value is an ordered sequence (strings are primitives)."""
    return isinstance(value, (list, tuple))


def deep_equal(left: Any, right: Any) -> bool:
    """
    Structural equality for JSON-like values.

    Mappings are equal when they have the same key sets and recursively
    equal values, regardless of key order. Sequences are equal when they
    have the same length and are pairwise equal, in order. Booleans never
    equal numbers, and NaN equals NaN.
    """
    if is_plain_mapping(left) and is_plain_mapping(right):
        if len(left) != len(right):
            return False
        for key, value in left.items():
            if key not in right or not deep_equal(value, right[key]):
                return False
        return True

    if is_sequence(left) and is_sequence(right):
        if len(left) != len(right):
            return False
        return all(deep_equal(a, b) for a, b in zip(left, right))

    if is_plain_mapping(left) or is_plain_mapping(right):
        return False
    if is_sequence(left) or is_sequence(right):
        return False

    if isinstance(left, bool) != isinstance(right, bool):
        return False

    if isinstance(left, float) and isinstance(right, float):
        if math.isnan(left) and math.isnan(right):
            return True

    return left == right


def freeze(value: Any) -> Any:
    """Return a hashable rendition of a JSON-like value."""
    if is_plain_mapping(value):
        return frozenset((key, freeze(item)) for key, item in value.items())
    if is_sequence(value):
        return tuple(freeze(item) for item in value)
    if isinstance(value, bool):
        # Keep True and 1 apart
        return (bool, value)
    return value


def build_path(parent_path: str, key: str | int) -> str:
    """Build a JSONPath from parent path and key."""
    if isinstance(key, int):
        return f"{parent_path}[{key}]"
    else:
        if re.match(r'^[a-zA-Z_][a-zA-Z0-9_]*$', str(key)):
            return f"{parent_path}.{key}"
        else:
            return f"{parent_path}['{key}']"


def build_keyed_path(parent_path: str, unique_by: str | int, key_value: Any) -> str:
    """Build a JSONPath filter expression addressing a paired element."""
    return f"{parent_path}[?(@.{unique_by}=={key_value!r})]"


def to_jsonable(delta: Any) -> Any:
    """Replace ABSENT markers with None so a delta can be dumped as JSON."""
    if delta is ABSENT:
        return None
    if is_plain_mapping(delta):
        return {key: to_jsonable(value) for key, value in delta.items()}
    if is_sequence(delta):
        return [to_jsonable(item) for item in delta]
    return delta
