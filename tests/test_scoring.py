"""Tests for best score persistence, the 69 celebration and determinism."""

import random

import pytest

from skyflap.config.settings import GameSettings
from skyflap.core.events import EventBus, SoundCue
from skyflap.core.state import Phase
from skyflap.game.engine import SimulationEngine
from skyflap.game.entities import ActivePowerUp, CoinTier, PowerUpKind, ScoreCoin
from skyflap.storage.best_score import MemoryBestScoreStore


def crash(engine):
    """Drive the bird into the floor."""
    engine.world.bird_y = 504.0
    engine.world.bird_velocity = 5.0
    engine.on_tick()
    assert engine.phase == Phase.GAME_OVER


class BrokenStore:
    def __init__(self, fail_read=False, fail_write=False):
        self.fail_read = fail_read
        self.fail_write = fail_write

    def read(self):
        if self.fail_read:
            raise OSError("disk unavailable")
        return 3

    def write(self, score):
        if self.fail_write:
            raise OSError("disk full")


def make_engine(store, seed=42):
    return SimulationEngine(
        settings=GameSettings(),
        store=store,
        rng=random.Random(seed),
        event_bus=EventBus(history_limit=1000),
    )


class TestBestScore:

    def test_best_score_loaded_at_startup(self):
        engine = make_engine(MemoryBestScoreStore(initial=10))
        assert engine.world.best_score == 10
        assert engine.get_snapshot().best_score == 10

    def test_new_best_written_once_on_game_over(self):
        store = MemoryBestScoreStore(initial=10)
        engine = make_engine(store)
        engine.on_jump()
        engine.world.score = 15

        crash(engine)

        assert engine.world.best_score == 15
        assert store.read() == 15
        assert store.writes == 1

    def test_lower_score_does_not_write(self):
        store = MemoryBestScoreStore(initial=10)
        engine = make_engine(store)
        engine.on_jump()
        engine.world.score = 5

        crash(engine)

        assert engine.world.best_score == 10
        assert store.writes == 0

    def test_best_survives_restart(self):
        engine = make_engine(MemoryBestScoreStore(initial=10))
        engine.on_jump()
        engine.world.score = 15
        crash(engine)

        engine.on_jump()
        engine.on_jump()

        assert engine.world.score == 0
        assert engine.world.best_score == 15

    def test_write_failure_still_reaches_game_over(self):
        engine = make_engine(BrokenStore(fail_write=True))
        engine.on_jump()
        engine.world.score = 7

        crash(engine)

        assert engine.world.best_score == 7

    def test_read_failure_falls_back_to_zero(self):
        engine = make_engine(BrokenStore(fail_read=True))
        assert engine.world.best_score == 0


class TestCelebration:

    def _collect(self, engine, tier=CoinTier.BRONZE):
        engine.world.score_coins = [ScoreCoin(x=60, y=260, tier=tier)]
        engine.on_tick()

    def test_exact_hit_fires_once_and_lasts_one_second(
        self, running_engine, sound_cues, hold_bird
    ):
        world = running_engine.world
        world.score = 68

        self._collect(running_engine)

        assert world.score == 69
        assert world.celebrating
        assert sound_cues().count(SoundCue.CELEBRATION) == 1

        for _ in range(59):
            hold_bird(running_engine)
            snapshot = running_engine.on_tick()
        assert snapshot.celebrating

        hold_bird(running_engine)
        snapshot = running_engine.on_tick()
        assert not snapshot.celebrating
        assert world.celebration_remaining == 0.0

    def test_second_hit_in_same_run_is_ignored(self, running_engine, sound_cues):
        world = running_engine.world
        world.score = 68
        self._collect(running_engine)

        world.score = 68
        world.bird_y, world.bird_velocity = 250.0, 0.0
        self._collect(running_engine)

        assert world.score == 69
        assert sound_cues().count(SoundCue.CELEBRATION) == 1

    def test_skipping_over_69_never_fires(self, running_engine, sound_cues):
        world = running_engine.world
        world.score = 68
        world.power_up = ActivePowerUp(PowerUpKind.DOUBLE_POINTS, 5.0)

        self._collect(running_engine)

        assert world.score == 70
        assert not world.celebrating
        assert SoundCue.CELEBRATION not in sound_cues()

    def test_guard_resets_on_new_run(self, running_engine, sound_cues):
        world = running_engine.world
        world.score = 68
        self._collect(running_engine)
        crash(running_engine)

        running_engine.on_jump()
        running_engine.on_jump()
        assert world.celebrated is False

        world.score = 68
        self._collect(running_engine)

        assert sound_cues().count(SoundCue.CELEBRATION) == 2

    def test_celebration_fades_during_game_over(self, running_engine):
        world = running_engine.world
        world.score = 68
        self._collect(running_engine)
        crash(running_engine)
        assert world.celebrating

        for _ in range(60):
            running_engine.on_tick()

        assert not world.celebrating


class TestDeterminism:

    @pytest.mark.parametrize("seed", [1, 2024])
    def test_same_seed_same_inputs_same_snapshots(self, seed):
        first = make_engine(MemoryBestScoreStore(), seed=seed)
        second = make_engine(MemoryBestScoreStore(), seed=seed)

        for tick in range(900):
            if tick % 18 == 0:
                first.on_jump()
                second.on_jump()
            assert first.on_tick() == second.on_tick()
