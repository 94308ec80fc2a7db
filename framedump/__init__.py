"""framedump — a pure parser for tiling window manager layout dumps."""

__version__ = "0.1.0"
