"""Raw frame tree nodes produced by the parser.

A raw tree mirrors the frame layout described by a dump, already checked
against the window lookup but not yet applied to any live layout:

    RawFrameSplit
      -> first:  RawFrameSplit | RawFrameLeaf
      -> second: RawFrameSplit | RawFrameLeaf

Each split owns its two children exclusively; nodes are immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from framedump.core.types import LayoutAlgorithm, SplitAlign


# ---------------------------------------------------------------------------
# Leaf
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RawFrameLeaf:
    """A `(clients layout:selection window...)` frame holding windows."""

    layout: LayoutAlgorithm = LayoutAlgorithm.VERTICAL
    windows: tuple[int, ...] = field(default_factory=tuple)
    selection: int | None = None

    @property
    def selected_window(self) -> int | None:
        if self.selection is None:
            return None
        return self.windows[self.selection]

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "leaf",
            "layout": self.layout.value,
            "windows": list(self.windows),
            "selection": self.selection,
        }


# ---------------------------------------------------------------------------
# Split
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RawFrameSplit:
    """A `(split align:fraction:selection first second)` frame."""

    align: SplitAlign
    fraction: float
    selection: int
    first: RawFrameNode
    second: RawFrameNode

    @property
    def children(self) -> tuple[RawFrameNode, RawFrameNode]:
        return (self.first, self.second)

    @property
    def selected_child(self) -> RawFrameNode:
        return self.second if self.selection == 1 else self.first

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "split",
            "align": self.align.value,
            "fraction": self.fraction,
            "selection": self.selection,
            "children": [self.first.to_dict(), self.second.to_dict()],
        }


# Union of both node variants
RawFrameNode = RawFrameLeaf | RawFrameSplit


def collect_leaves(node: RawFrameNode) -> list[RawFrameLeaf]:
    """Return all leaves below ``node`` in left-to-right order."""
    if isinstance(node, RawFrameLeaf):
        return [node]
    return collect_leaves(node.first) + collect_leaves(node.second)
