"""JSONPath utilities for the jsondelta engine."""

from __future__ import annotations

from typing import Any

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError
from jsonpath_ng.jsonpath import Fields, Index

from .exceptions import ConfigurationError


class JSONPathMatcher:
    """Utility class for JSONPath matching and deletion."""

    # Cache for compiled JSONPath expressions
    _cache: dict = {}

    @classmethod
    def compile(cls, path: str):
        """Compile and cache a JSONPath expression."""
        if path not in cls._cache:
            try:
                cls._cache[path] = jsonpath_parse(path)
            except (JsonPathLexerError, JsonPathParserError) as e:
                raise ConfigurationError('global_ignores', f"invalid JSONPath expression '{path}': {e}")
        return cls._cache[path]

    @classmethod
    def delete_paths(cls, data: Any, paths: list[str]) -> Any:
        """
        Delete all nodes matching the given JSONPath expressions.

        Args:
            data: The data to modify (will be modified in place)
            paths: List of JSONPath expressions

        Returns:
            Modified data
        """
        for path in paths:
            data = cls._delete_path(data, path)
        return data

    @classmethod
    def _delete_path(cls, data: Any, path: str) -> Any:
        """Delete a single JSONPath from data."""
        expr = cls.compile(path)
        matches = expr.find(data)

        field_matches = []
        index_matches = []
        for match in matches:
            if match.context is None:
                # The root itself cannot be removed
                continue
            parent = match.context.value
            if isinstance(match.path, Fields) and isinstance(parent, dict):
                field_matches.extend((parent, name) for name in match.path.fields)
            elif isinstance(match.path, Index) and isinstance(parent, list):
                # jsonpath-ng 1.6 replaced Index.index with Index.indices
                indices = getattr(match.path, 'indices', None) or (match.path.index,)
                index_matches.extend((parent, index) for index in indices)

        for parent, name in field_matches:
            parent.pop(name, None)

        # Highest index first so earlier deletions do not shift later ones
        for parent, index in sorted(index_matches, key=lambda m: m[1], reverse=True):
            if 0 <= index < len(parent):
                del parent[index]

        return data
