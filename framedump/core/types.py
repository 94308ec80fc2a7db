"""Core data types for framedump.

Enums for the two node variants' tagged fields, the window lookup
capability injected into the parser, and the validation record used by
the tree checker.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class LayoutAlgorithm(str, Enum):
    """How a leaf frame arranges its windows."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    MAX = "max"
    GRID = "grid"


class SplitAlign(str, Enum):
    """Direction in which a split frame divides its area."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class Severity(str, Enum):
    """Validation severity levels."""

    WARNING = "warning"
    ERROR = "error"


# ---------------------------------------------------------------------------
# Window lookup
# ---------------------------------------------------------------------------


class WindowLookup(Protocol):
    """Read-only "is this window currently known" capability."""

    def __call__(self, window_id: int) -> bool: ...


def known_windows(window_ids: Iterable[int]) -> WindowLookup:
    """Build a lookup answering from a fixed collection of window ids.

    The ids are copied into a frozenset, so later changes to the caller's
    collection do not leak into a parse.
    """
    frozen = frozenset(window_ids)

    def is_known(window_id: int) -> bool:
        return window_id in frozen

    return is_known


def all_windows_known(window_id: int) -> bool:
    """Lookup that treats every window id as live."""
    return True


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationError:
    """A structural problem found in a raw frame tree."""

    message: str
    path: str = ""
    severity: str = Severity.ERROR.value

    def __str__(self) -> str:
        loc = self.path or "root"
        return f"[{self.severity}] {loc}: {self.message}"
