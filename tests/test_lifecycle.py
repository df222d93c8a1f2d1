"""Tests for the NOT_STARTED -> RUNNING -> GAME_OVER lifecycle."""

from skyflap.core.events import EventType, SoundCue
from skyflap.core.state import Phase
from skyflap.game.entities import ActivePowerUp, BonusCoin, Obstacle, PowerUpKind, ScoreCoin
from skyflap.game.spawner import SpawnerKind


class TestLifecycle:

    def test_engine_starts_not_started(self, engine):
        assert engine.phase == Phase.NOT_STARTED
        assert engine.get_snapshot().phase == Phase.NOT_STARTED

    def test_ticks_do_nothing_before_start(self, engine, settings):
        for _ in range(30):
            snapshot = engine.on_tick()
        assert snapshot.bird.y == settings.physics.start_y
        assert snapshot.bird.velocity == 0.0
        assert snapshot.obstacles == ()

    def test_first_jump_starts_run(self, engine, sound_cues, settings):
        engine.on_jump()

        assert engine.phase == Phase.RUNNING
        assert engine.world.bird_y == settings.physics.start_y
        assert engine.world.bird_velocity == 0.0
        assert engine.world.score == 0
        assert sound_cues() == [SoundCue.START]

    def test_start_clears_transient_state(self, engine):
        world = engine.world
        world.score = 12
        world.obstacles = [Obstacle(x=100, gap_top=100)]
        world.bonus_coins = [BonusCoin(x=100, y=100)]
        world.score_coins = [ScoreCoin(x=100, y=100)]
        world.power_up = ActivePowerUp(PowerUpKind.DOUBLE_POINTS, 5.0)
        world.celebrated = True

        engine.on_jump()

        assert world.score == 0
        assert world.obstacles == []
        assert world.bonus_coins == []
        assert world.score_coins == []
        assert world.power_up is None
        assert world.celebrated is False

    def test_start_arms_spawners(self, running_engine, settings):
        scheduler = running_engine.scheduler
        assert scheduler.next_fire(SpawnerKind.OBSTACLE) == settings.spawn.pipe_interval
        assert scheduler.is_armed(SpawnerKind.SCORE_COIN)
        assert scheduler.is_armed(SpawnerKind.BONUS_COIN)

    def test_jump_while_running_keeps_phase(self, running_engine):
        running_engine.on_jump()
        assert running_engine.phase == Phase.RUNNING

    def test_jump_in_game_over_returns_to_not_started(self, running_engine):
        running_engine.world.bird_y = 504
        running_engine.world.bird_velocity = 10
        running_engine.on_tick()
        assert running_engine.phase == Phase.GAME_OVER

        running_engine.on_jump()
        assert running_engine.phase == Phase.NOT_STARTED

        running_engine.on_jump()
        assert running_engine.phase == Phase.RUNNING
        assert running_engine.world.score == 0

    def test_phase_changes_are_published(self, engine, event_bus):
        engine.on_jump()

        changes = event_bus.get_history(EventType.PHASE_CHANGED)
        assert len(changes) == 1
        assert changes[0].data == {"from": Phase.NOT_STARTED, "to": Phase.RUNNING}


class TestBounds:

    def test_floor_ends_run_and_keeps_previous_position(self, running_engine, sound_cues):
        world = running_engine.world
        world.bird_y = 504.0
        world.bird_velocity = 5.0

        running_engine.on_tick()

        assert running_engine.phase == Phase.GAME_OVER
        assert world.bird_y == 504.0
        assert sound_cues()[-1] == SoundCue.GAME_OVER

    def test_ceiling_ends_run(self, running_engine):
        world = running_engine.world
        world.bird_y = -4.0
        world.bird_velocity = -5.0

        running_engine.on_tick()

        assert running_engine.phase == Phase.GAME_OVER
        assert world.bird_y == -4.0

    def test_margin_forgives_small_overshoot(self, running_engine, settings):
        world = running_engine.world
        world.bird_y = -2.0
        world.bird_velocity = -1.5  # -2 + (-1.0) = -3 stays inside -5

        running_engine.on_tick()

        assert running_engine.phase == Phase.RUNNING
        assert world.bird_y == -3.0

    def test_game_over_unarms_every_timer(self, running_engine):
        world = running_engine.world
        running_engine.power_up_timer.start(
            world, ActivePowerUp(PowerUpKind.SLOW_MOTION, 5.0), running_engine.now
        )
        world.bird_y = 504.0
        world.bird_velocity = 5.0

        running_engine.on_tick()

        for kind in SpawnerKind:
            assert not running_engine.scheduler.is_armed(kind)
        assert not running_engine.power_up_timer.armed

    def test_game_over_freezes_world(self, running_engine):
        world = running_engine.world
        world.bird_y = 504.0
        world.bird_velocity = 5.0
        running_engine.on_tick()
        world.obstacles = [Obstacle(x=200, gap_top=100)]

        for _ in range(200):
            running_engine.on_tick()

        assert world.obstacles[0].x == 200
        assert world.bird_y == 504.0
