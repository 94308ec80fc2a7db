"""Structural checks for raw frame trees.

Trees coming out of the parser already satisfy these; trees assembled by
hand (or loaded from JSON) may not. Checks:
- Split fraction within [0, 1]
- Split selection is 0 or 1
- Leaf selection within the window list
- Duplicate window ids (warning only)
"""

from __future__ import annotations

import math

from framedump.core.types import Severity, ValidationError
from framedump.dsl.ast_nodes import RawFrameLeaf, RawFrameNode, RawFrameSplit


def validate_tree(root: RawFrameNode) -> list[ValidationError]:
    """Run all structural checks on a raw tree.

    Returns a list of ValidationError objects (may be empty if valid).
    """
    errors: list[ValidationError] = []
    seen_windows: set[int] = set()
    _validate_node(root, "root", seen_windows, errors)
    return errors


def _validate_node(
    node: RawFrameNode, path: str, seen_windows: set[int], errors: list[ValidationError]
) -> None:
    if isinstance(node, RawFrameSplit):
        _validate_split(node, path, errors)
        _validate_node(node.first, f"{path}.first", seen_windows, errors)
        _validate_node(node.second, f"{path}.second", seen_windows, errors)
    elif isinstance(node, RawFrameLeaf):
        _validate_leaf(node, path, seen_windows, errors)
    else:
        errors.append(ValidationError(message=f"Not a frame node: {node!r}", path=path))


def _validate_split(node: RawFrameSplit, path: str, errors: list[ValidationError]) -> None:
    if math.isnan(node.fraction) or not 0.0 <= node.fraction <= 1.0:
        errors.append(
            ValidationError(
                message=f"Split fraction {node.fraction} is outside [0, 1]",
                path=path,
            )
        )
    if node.selection not in (0, 1):
        errors.append(
            ValidationError(
                message=f"Split selection must be 0 or 1, got {node.selection}",
                path=path,
            )
        )


def _validate_leaf(
    node: RawFrameLeaf, path: str, seen_windows: set[int], errors: list[ValidationError]
) -> None:
    if node.selection is not None and not 0 <= node.selection < len(node.windows):
        errors.append(
            ValidationError(
                message=(
                    f"Leaf selection {node.selection} is out of range "
                    f"for {len(node.windows)} window(s)"
                ),
                path=path,
            )
        )

    for window_id in node.windows:
        if window_id in seen_windows:
            errors.append(
                ValidationError(
                    message=f"Window {window_id:#x} appears more than once",
                    path=path,
                    severity=Severity.WARNING.value,
                )
            )
        seen_windows.add(window_id)
