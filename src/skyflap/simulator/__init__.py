"""Desktop window for SKYFLAP."""

from .window import GameWindow, WindowConfig

__all__ = ["GameWindow", "WindowConfig"]
