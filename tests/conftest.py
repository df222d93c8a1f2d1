"""Pytest configuration and fixtures for SKYFLAP tests."""

import random

import pytest

from skyflap.config.settings import GameSettings
from skyflap.core.events import EventBus, EventType
from skyflap.game.engine import SimulationEngine
from skyflap.storage.best_score import MemoryBestScoreStore


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def settings():
    return GameSettings()


@pytest.fixture
def event_bus():
    return EventBus(history_limit=1000)


@pytest.fixture
def store():
    return MemoryBestScoreStore()


@pytest.fixture
def engine(settings, store, seeded_rng, event_bus):
    """Engine in NOT_STARTED with deterministic randomness."""
    return SimulationEngine(
        settings=settings,
        store=store,
        rng=seeded_rng,
        event_bus=event_bus,
    )


@pytest.fixture
def running_engine(engine):
    """Engine after the first jump (RUNNING, tick 0)."""
    engine.on_jump()
    return engine


@pytest.fixture
def sound_cues(event_bus):
    """Return the sound cues emitted so far, oldest first."""
    def _cues():
        return [
            event.data["cue"]
            for event in event_bus.get_history(EventType.SOUND_PLAY, limit=1000)
        ]
    return _cues


@pytest.fixture
def hold_bird(settings):
    """Pin the bird mid-air and clear pipes so long runs stay alive."""
    def _hold(engine):
        engine.world.bird_y = settings.physics.start_y
        engine.world.bird_velocity = 0.0
        engine.world.obstacles = []
    return _hold
