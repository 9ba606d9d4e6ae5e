"""Configuration resolution for the jsondelta engine."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from .models import DiffOptions, PairingKey
from .exceptions import ConfigurationError


RESERVED_OPTIONS = frozenset({
    "ignore_keys",
    "omit_unchanged_entries",
    "omit_unchanged_elements",
    "ignore_missing",
    "unique_by",
    "default",
})


class ConfigResolver:
    """
    Splits a configuration mapping into the options of the current level
    and the overrides of its children.

    A configuration mapping mixes both: reserved option names apply to the
    level itself, every other entry is the configuration of the child key
    with that name. Malformed entries are treated as absent configuration.
    """

    @staticmethod
    def extract_options(config: Any) -> DiffOptions:
        """
        Extract the options of one level from a configuration mapping.

        Args:
            config: Configuration mapping (anything else counts as empty)

        Returns:
            DiffOptions for this level, with child overrides attached
        """
        if not isinstance(config, Mapping):
            return DiffOptions()

        ignore_keys = config.get('ignore_keys')
        if isinstance(ignore_keys, (list, tuple, set, frozenset)):
            # Only names can be keys; other entries are dropped
            ignore_keys = frozenset(
                key for key in ignore_keys if isinstance(key, (str, int))
            )
        else:
            ignore_keys = frozenset()

        ignore_missing = config.get('ignore_missing')
        if not isinstance(ignore_missing, bool):
            ignore_missing = None

        default = config.get('default')
        if not isinstance(default, Mapping):
            default = None

        children = {
            key: value
            for key, value in config.items()
            if key not in RESERVED_OPTIONS
        }

        return DiffOptions(
            ignore_keys=ignore_keys,
            omit_unchanged_entries=config.get('omit_unchanged_entries') is not False,
            omit_unchanged_elements=config.get('omit_unchanged_elements') is not False,
            ignore_missing=ignore_missing,
            unique_by=config.get('unique_by'),
            default=dict(default) if default is not None else None,
            children=children,
        )

    @staticmethod
    def child_config(options: DiffOptions, key: Any) -> dict:
        """
        Build the effective configuration of a child key.

        The enclosing `default` fragment is shallow-merged with the explicit
        override of the key; the override wins option by option.
        """
        override = options.children.get(key)
        if not isinstance(override, Mapping):
            override = {}

        if options.default is None:
            return dict(override)
        return {**options.default, **override}

    @staticmethod
    def element_config(options: DiffOptions) -> dict:
        """Build the configuration shared by every element of a paired sequence."""
        config = dict(options.children)
        if options.default is not None:
            config['default'] = options.default
        config['ignore_keys'] = list(options.ignore_keys)
        config['omit_unchanged_entries'] = options.omit_unchanged_entries
        if options.ignore_missing is not None:
            config['ignore_missing'] = options.ignore_missing
        return config

    @staticmethod
    def ignores_missing(options: DiffOptions, child_config: dict) -> bool:
        """Decide whether the removal of a child key is suppressed."""
        ignore_missing = child_config.get('ignore_missing')
        if isinstance(ignore_missing, bool):
            return ignore_missing
        return bool(options.ignore_missing)

    @staticmethod
    def pairing_key(options: DiffOptions, path: str) -> Optional[PairingKey]:
        """
        Resolve the pairing key of a sequence.

        Raises:
            ConfigurationError: If unique_by is neither a string nor an integer
        """
        unique_by = options.unique_by
        if unique_by is None:
            return None

        if isinstance(unique_by, bool) or not isinstance(unique_by, (str, int)):
            raise ConfigurationError(
                'unique_by',
                f"pairing key must be a string or integer, got {type(unique_by).__name__}",
                path,
            )
        return unique_by
