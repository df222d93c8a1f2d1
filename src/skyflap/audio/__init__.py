"""
SKYFLAP Audio System - chiptune sound cues.
"""

from .engine import AudioEngine, synthesize

__all__ = ["AudioEngine", "synthesize"]
