"""framedump core — shared enums, the window lookup capability, and configuration.

Import the most commonly used types from here for convenience:

    from framedump.core import LayoutAlgorithm, SplitAlign, known_windows
"""

from framedump.core.config import FrameDumpConfig, get_config, set_config
from framedump.core.types import (
    LayoutAlgorithm,
    Severity,
    SplitAlign,
    ValidationError,
    WindowLookup,
    all_windows_known,
    known_windows,
)

__all__ = [
    "FrameDumpConfig",
    "LayoutAlgorithm",
    "Severity",
    "SplitAlign",
    "ValidationError",
    "WindowLookup",
    "all_windows_known",
    "get_config",
    "known_windows",
    "set_config",
]
