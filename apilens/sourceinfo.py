"""Locating tokens in a YAML file by key path, with line numbers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

import yaml


@dataclass(frozen=True)
class SourceNode:
    """A located value; line and column are 1-based, 0 when not found."""

    value: str = ""
    line: int = 0
    column: int = 0


def _scalar_value(node: yaml.Node) -> str:
    return node.value if isinstance(node, yaml.ScalarNode) else ""


def _pairs(node: yaml.Node) -> Iterable[tuple[yaml.Node, yaml.Node]]:
    if isinstance(node, yaml.MappingNode):
        return node.value
    if isinstance(node, yaml.SequenceNode):
        items = node.value
        return zip(items[0::2], items[1::2])
    return ()


def _located(node: yaml.Node) -> SourceNode:
    return SourceNode(
        value=_scalar_value(node),
        line=node.start_mark.line + 1,
        column=node.start_mark.column + 1,
    )


def _find(node: yaml.Node, key_index: int, max_depth: int, keys: Sequence[str]) -> SourceNode:
    for key, value in _pairs(node):
        if key_index + 1 == max_depth and _scalar_value(value) == keys[max_depth]:
            return _located(value)
        if _scalar_value(key) != keys[key_index]:
            continue
        if isinstance(value, yaml.SequenceNode):
            index = int(keys[key_index + 1])
            if not 0 <= index < len(value.value):
                raise IndexError(f"sequence index {index} out of range")
            return _find(value.value[index], key_index + 2, max_depth, keys)
        return _find(value, key_index + 1, max_depth, keys)
    return SourceNode()


def find_node_in_text(text: str | bytes, keys: Sequence[str], token: str) -> SourceNode:
    """Find the node holding token at the end of the key path in YAML text."""
    root = yaml.compose(text, Loader=yaml.SafeLoader)
    if root is None:
        raise ValueError("document has no content")
    path = [*keys, token]
    return _find(root, 0, len(path) - 1, path)


def find_node(filename: str | Path, keys: Sequence[str], token: str) -> SourceNode:
    """Find the node holding token at the end of the key path in a YAML file."""
    return find_node_in_text(Path(filename).read_bytes(), keys, token)