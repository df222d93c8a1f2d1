"""Persistence collaborators for SKYFLAP."""

from .best_score import BestScoreStore, MemoryBestScoreStore, JsonBestScoreStore

__all__ = ["BestScoreStore", "MemoryBestScoreStore", "JsonBestScoreStore"]
