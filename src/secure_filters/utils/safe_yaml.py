"""YAML loading that refuses repeated mapping keys.

``yaml.safe_load()`` keeps the last of two equal keys, so a config with two
``aliases:`` blocks would register only one of them without complaint.
"""

from __future__ import annotations

from typing import IO, Union

import yaml


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects mappings with repeated keys."""


def _construct_unique_mapping(loader, node):
    loader.flatten_mapping(node)
    pairs = loader.construct_pairs(node)
    seen: set = set()
    for key, _value in pairs:
        if key in seen:
            raise ValueError(
                f"Duplicate YAML key: {key!r} "
                f"(line {node.start_mark.line + 1})"
            )
        seen.add(key)
    return dict(pairs)


_UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_unique_mapping,
)


def safe_yaml_load(stream: Union[str, IO[str]]) -> object:
    """Like ``yaml.safe_load()``, but raises ``ValueError`` on a repeated key."""
    return yaml.load(stream, Loader=_UniqueKeyLoader)
