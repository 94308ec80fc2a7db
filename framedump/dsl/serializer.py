"""Serializer for raw frame trees.

Renders a raw tree back into the dump format the parser reads, and
converts trees to/from plain dictionaries and JSON for tooling.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

from framedump.core.config import get_config
from framedump.core.types import LayoutAlgorithm, Severity, SplitAlign
from framedump.dsl.ast_nodes import RawFrameLeaf, RawFrameNode, RawFrameSplit
from framedump.dsl.validator import validate_tree


def dump_tree(node: RawFrameNode, hex_window_ids: bool | None = None) -> str:
    """Serialize a raw tree to its canonical single-line dump.

    Window ids are written in hex (``0x1400003``) unless ``hex_window_ids``
    is false; ``None`` defers to the global config. Raises ValueError if the
    tree fails validate_tree(), since its dump would not parse back.
    """
    if hex_window_ids is None:
        hex_window_ids = get_config().hex_window_ids

    errors = [e for e in validate_tree(node) if e.severity == Severity.ERROR.value]
    if errors:
        raise ValueError("Cannot dump invalid frame tree: " + "; ".join(map(str, errors)))

    return _dump_node(node, hex_window_ids)


def _dump_node(node: RawFrameNode, hex_window_ids: bool) -> str:
    if isinstance(node, RawFrameLeaf):
        selection = -1 if node.selection is None else node.selection
        parts = [f"{node.layout.value}:{selection}"]
        parts.extend(hex(w) if hex_window_ids else str(w) for w in node.windows)
        return "(clients " + " ".join(parts) + ")"

    first = _dump_node(node.first, hex_window_ids)
    second = _dump_node(node.second, hex_window_ids)
    args = f"{node.align.value}:{_format_fraction(node.fraction)}:{node.selection}"
    return f"(split {args} {first} {second})"


def _format_fraction(fraction: float) -> str:
    """Shortest round-tripping decimal, never in exponent notation."""
    return format(Decimal(repr(float(fraction))), "f")


def tree_to_dict(node: RawFrameNode) -> dict[str, Any]:
    """Convert a raw tree to a plain nested dictionary."""
    return node.to_dict()


def tree_from_dict(data: dict[str, Any]) -> RawFrameNode:
    """Reconstruct a raw tree from the output of tree_to_dict()."""
    if data["type"] == "leaf":
        return RawFrameLeaf(
            layout=LayoutAlgorithm(data["layout"]),
            windows=tuple(data.get("windows", [])),
            selection=data.get("selection"),
        )
    if data["type"] == "split":
        first, second = data["children"]
        return RawFrameSplit(
            align=SplitAlign(data["align"]),
            fraction=float(data["fraction"]),
            selection=int(data["selection"]),
            first=tree_from_dict(first),
            second=tree_from_dict(second),
        )
    raise ValueError(f"Unknown node type: {data['type']!r}")


def serialize_to_json(node: RawFrameNode, indent: int = 2) -> str:
    """Serialize a raw tree to a JSON string."""
    return json.dumps(tree_to_dict(node), indent=indent)


def deserialize_from_json(json_str: str) -> RawFrameNode:
    """Deserialize a raw tree from a JSON string."""
    return tree_from_dict(json.loads(json_str))
