"""SKYFLAP - keep the bird airborne, dodge the pipes, grab the coins."""

__version__ = "0.1.0"
