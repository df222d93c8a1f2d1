"""Tests for hitboxes, pipe collisions and pass scoring."""

import pytest

from skyflap.core.events import SoundCue
from skyflap.core.state import Phase
from skyflap.game.collision import Box, bird_box, has_cleared, hits_obstacle, touches_coin
from skyflap.game.entities import ActivePowerUp, Obstacle, PowerUpKind, ScoreCoin


class TestBox:

    def test_inset_shrinks_every_side(self):
        box = Box.from_size(10, 20, 50, 50).inset(5)
        assert box == Box(15, 25, 55, 65)

    def test_touching_edges_do_not_intersect(self):
        a = Box(0, 0, 10, 10)
        assert not a.intersects(Box(10, 0, 20, 10))
        assert a.intersects(Box(9, 9, 20, 20))

    def test_shrunk_bird_stays_centred(self):
        box = bird_box(50, 250, 50, 30)
        assert box == Box(60, 260, 90, 290)


class TestHitboxes:

    def test_bird_inside_gap_is_safe(self):
        bird = Box.from_size(50, 250, 50, 50)
        obstacle = Obstacle(x=60, gap_top=240)
        assert not hits_obstacle(bird, obstacle, 60, 150, 5)

    def test_bird_above_gap_hits(self):
        bird = Box.from_size(50, 100, 50, 50)
        obstacle = Obstacle(x=60, gap_top=240)
        assert hits_obstacle(bird, obstacle, 60, 150, 5)

    def test_margin_forgives_grazing_the_pipe_lip(self):
        # Bird top is 3px above the gap, inside the 5px forgiveness
        bird = Box.from_size(50, 237, 50, 50)
        obstacle = Obstacle(x=60, gap_top=240)
        assert not hits_obstacle(bird, obstacle, 60, 150, 5)
        assert hits_obstacle(bird, obstacle, 60, 150, 0)

    def test_no_hit_without_horizontal_overlap(self):
        bird = Box.from_size(50, 0, 50, 50)
        obstacle = Obstacle(x=200, gap_top=240)
        assert not hits_obstacle(bird, obstacle, 60, 150, 5)

    def test_cleared_only_past_left_edge(self):
        assert not has_cleared(50, Obstacle(x=-10, gap_top=100), 60)
        assert has_cleared(50, Obstacle(x=-11, gap_top=100), 60)

    def test_coin_overlap(self):
        bird = Box.from_size(50, 250, 50, 50)
        assert touches_coin(bird, ScoreCoin(x=90, y=290), 30)
        assert not touches_coin(bird, ScoreCoin(x=100, y=250), 30)


class TestPipeCollision:

    def test_pipe_hit_ends_run(self, running_engine, sound_cues):
        running_engine.world.obstacles = [Obstacle(x=40, gap_top=300)]

        running_engine.on_tick()

        assert running_engine.phase == Phase.GAME_OVER
        assert sound_cues()[-1] == SoundCue.GAME_OVER

    def test_invincibility_ignores_pipe_hit(self, running_engine):
        world = running_engine.world
        world.power_up = ActivePowerUp(PowerUpKind.INVINCIBILITY, 5.0)
        world.obstacles = [Obstacle(x=40, gap_top=300)]

        for _ in range(5):
            running_engine.on_tick()

        assert running_engine.phase == Phase.RUNNING

    def test_size_reduction_shrinks_hitbox(self, running_engine):
        world = running_engine.world
        world.power_up = ActivePowerUp(PowerUpKind.SIZE_REDUCTION, 5.0)
        world.obstacles = [Obstacle(x=40, gap_top=265)]

        running_engine.on_tick()

        assert running_engine.phase == Phase.RUNNING
        assert running_engine.get_snapshot().bird.size == pytest.approx(30)

    def test_same_pipe_hits_full_size_bird(self, running_engine):
        running_engine.world.obstacles = [Obstacle(x=40, gap_top=265)]

        running_engine.on_tick()

        assert running_engine.phase == Phase.GAME_OVER

    def test_size_reduction_does_not_change_bounds(self, running_engine):
        world = running_engine.world
        world.power_up = ActivePowerUp(PowerUpKind.SIZE_REDUCTION, 5.0)
        world.bird_y = 504.0
        world.bird_velocity = 5.0

        running_engine.on_tick()

        assert running_engine.phase == Phase.GAME_OVER


class TestPassScoring:

    def test_pass_awards_one_point_once(self, running_engine, sound_cues):
        world = running_engine.world
        world.obstacles = [Obstacle(x=-12, gap_top=300)]

        running_engine.on_tick()
        running_engine.on_tick()

        assert world.obstacles[0].passed is True
        assert world.score == 1
        assert sound_cues().count(SoundCue.PIPE_PASS) == 1

    def test_double_points_pass(self, running_engine):
        world = running_engine.world
        world.power_up = ActivePowerUp(PowerUpKind.DOUBLE_POINTS, 5.0)
        world.obstacles = [Obstacle(x=-12, gap_top=300)]

        running_engine.on_tick()

        assert world.score == 2

    def test_not_passed_before_right_edge_crosses(self, running_engine):
        world = running_engine.world
        world.obstacles = [Obstacle(x=100, gap_top=100)]

        running_engine.on_tick()

        assert world.obstacles[0].passed is False
        assert world.score == 0

    def test_passed_flag_never_reverts(self, running_engine):
        world = running_engine.world
        obstacle = Obstacle(x=-5, gap_top=300)
        world.obstacles = [obstacle]
        history = []

        for _ in range(10):
            running_engine.on_tick()
            history.append(obstacle.passed)
            world.bird_y, world.bird_velocity = 250.0, 0.0

        assert history == sorted(history)
        assert history[-1] is True
        assert world.score == 1

    def test_shrunk_bird_scores_at_sprite_edge(self, running_engine):
        world = running_engine.world
        world.power_up = ActivePowerUp(PowerUpKind.SIZE_REDUCTION, 5.0)
        # Right edge lands on 52: past the shrunk hitbox (60) but not the sprite (50)
        world.obstacles = [Obstacle(x=-5, gap_top=300)]

        running_engine.on_tick()

        assert running_engine.phase == Phase.RUNNING
        assert world.obstacles[0].passed is False
        assert world.score == 0

        world.bird_y, world.bird_velocity = 250.0, 0.0
        running_engine.on_tick()

        assert world.obstacles[0].passed is True
        assert world.score == 1
