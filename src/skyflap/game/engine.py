"""
Simulation engine for SKYFLAP.

Advances the world one fixed logical tick at a time. Two stimuli drive
it: ``on_jump()`` and ``on_tick()``. Within a tick the order is fixed:

    1. bird physics and bounds
    2. scroll obstacles and coins
    3. pipe collisions and pass scoring
    4. coin pickups
    5. spawners
    6. power-up countdown

Sound cues and lifecycle changes are published on the EventBus; what
happens to them is up to the subscribers.
"""

import logging
import random
from typing import Optional

from skyflap.config.settings import GameSettings, get_settings
from skyflap.core.events import Event, EventBus, EventType, SoundCue, sound_event
from skyflap.core.state import Phase, PhaseMachine
from skyflap.game.collision import Box, bird_box, has_cleared, hits_obstacle, touches_coin
from skyflap.game.powerups import (
    TIME_EPSILON,
    PowerUpTimer,
    is_invincible,
    is_shrunk,
    points_multiplier,
    roll_power_up,
    speed_factor,
)
from skyflap.game.snapshot import BirdView, CoinView, ObstacleView, PowerUpView, Snapshot
from skyflap.game.spawner import EntityFactory, SpawnerKind, SpawnScheduler
from skyflap.game.world import World
from skyflap.storage.best_score import BestScoreStore, MemoryBestScoreStore

logger = logging.getLogger(__name__)


class SimulationEngine:
    """Owns the World and every timer that mutates it."""

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        store: Optional[BestScoreStore] = None,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.settings = settings or get_settings()
        self.rng = rng or random.Random(self.settings.seed)
        self.event_bus = event_bus or EventBus()
        self.store = store or MemoryBestScoreStore()

        self.phases = PhaseMachine()
        self.phases.add_listener(self._on_phase_changed)

        self.world = World(
            bird_y=self.settings.physics.start_y,
            best_score=self._read_best(),
        )
        self.scheduler = SpawnScheduler()
        self.factory = EntityFactory(self.settings, self.rng)
        self.power_up_timer = PowerUpTimer(
            step=self.settings.spawn.countdown_step,
            period=self.settings.spawn.countdown_period,
        )

    @property
    def phase(self) -> Phase:
        return self.phases.phase

    @property
    def now(self) -> float:
        """Seconds of simulated time since the run started."""
        return self.world.tick * self.settings.tick_seconds

    # Stimuli

    def on_jump(self) -> None:
        phase = self.phases.phase
        if phase == Phase.NOT_STARTED:
            self._start_run()
        elif phase == Phase.RUNNING:
            self.world.bird_velocity = self.settings.physics.jump_strength
        elif phase == Phase.GAME_OVER:
            self._restart()

    def on_tick(self) -> Snapshot:
        self._update_celebration(self.settings.tick_seconds)
        if self.phases.is_running:
            self._step()
        return self.get_snapshot()

    # Lifecycle

    def _start_run(self) -> None:
        self.world.reset_run(self.settings.physics.start_y)
        self._cancel_timers()
        self.phases.transition(Phase.RUNNING)

        self.scheduler.arm(SpawnerKind.OBSTACLE, self.factory.obstacle_interval(None))
        self.scheduler.arm(SpawnerKind.SCORE_COIN, self.factory.score_delay())
        self._sync_bonus_spawner(0.0)

        self._cue(SoundCue.START)

    def _restart(self) -> None:
        self.world.reset_run(self.settings.physics.start_y)
        self._cancel_timers()
        self.phases.transition(Phase.NOT_STARTED)

    def _end_run(self, reason: str) -> None:
        world = self.world
        self._cancel_timers()
        self.phases.transition(Phase.GAME_OVER)
        logger.info(f"Game over ({reason}) with score {world.score}")

        if world.score > world.best_score:
            world.best_score = world.score
            self._write_best(world.score)

        self._cue(SoundCue.GAME_OVER)

    def _cancel_timers(self) -> None:
        self.scheduler.clear()
        self.power_up_timer.cancel()

    # Tick

    def _step(self) -> None:
        self.world.tick += 1
        now = self.now

        if not self._update_bird():
            return
        self._advance_entities()
        if not self._check_obstacles():
            return
        self._collect_coins(now)
        self._run_spawners(now)
        self._update_power_up(now)

    def _update_bird(self) -> bool:
        """Apply gravity and move. Returns False if the bird left the board."""
        physics = self.settings.physics
        world = self.world

        previous_y = world.bird_y
        world.bird_velocity += physics.gravity
        new_y = previous_y + world.bird_velocity

        lower = -physics.hitbox_margin
        upper = self.settings.world.floor_y - physics.bird_size + physics.hitbox_margin
        if new_y < lower or new_y > upper:
            # Keep the last on-board position for display
            world.bird_y = previous_y
            self._end_run("bounds")
            return False

        world.bird_y = new_y
        return True

    def _advance_entities(self) -> None:
        board = self.settings.world
        world = self.world
        speed = board.pipe_speed * speed_factor(world.power_up)

        for obstacle in world.obstacles:
            obstacle.x -= speed
        for coin in world.bonus_coins:
            coin.x -= speed
        for coin in world.score_coins:
            coin.x -= speed

        world.obstacles = [o for o in world.obstacles if o.x > -board.pipe_width]
        world.bonus_coins = [c for c in world.bonus_coins if c.x > -board.coin_size]
        world.score_coins = [c for c in world.score_coins if c.x > -board.coin_size]

    def _check_obstacles(self) -> bool:
        """Pipe collisions and pass scoring. Returns False on game over."""
        board = self.settings.world
        world = self.world
        bird = self._bird_box()
        bird_left = self.settings.physics.bird_x

        for obstacle in world.obstacles:
            if hits_obstacle(
                bird, obstacle, board.pipe_width, board.pipe_gap,
                self.settings.physics.hitbox_margin,
            ):
                if not is_invincible(world.power_up):
                    self._end_run("pipe")
                    return False

            if not obstacle.passed and has_cleared(bird_left, obstacle, board.pipe_width):
                obstacle.passed = True
                self._award(points_multiplier(world.power_up))
                self._cue(SoundCue.PIPE_PASS)

        return True

    def _collect_coins(self, now: float) -> None:
        board = self.settings.world
        world = self.world

        bird = self._bird_box()
        for coin in list(world.bonus_coins):
            if touches_coin(bird, coin, board.coin_size):
                world.bonus_coins.remove(coin)
                power_up = roll_power_up(self.rng, self.settings.spawn)
                self.power_up_timer.start(world, power_up, now)
                self._emit(EventType.POWER_UP_STARTED, {
                    "kind": power_up.kind,
                    "duration": power_up.remaining,
                })
                self._cue(SoundCue.BONUS)

        # Size may have changed above
        bird = self._bird_box()
        for coin in list(world.score_coins):
            if touches_coin(bird, coin, board.coin_size):
                world.score_coins.remove(coin)
                self._award(coin.tier.points * points_multiplier(world.power_up))
                logger.debug(f"{coin.tier.name} coin collected")
                self._cue(SoundCue.BONUS)

    def _award(self, points: int) -> None:
        world = self.world
        world.score += points

        target = self.settings.spawn.celebration_score
        if not world.celebrated and world.score == target:
            world.celebrated = True
            world.celebration_remaining = self.settings.spawn.celebration_seconds
            logger.info(f"Score hit {target}!")
            self._cue(SoundCue.CELEBRATION)

    def _update_celebration(self, dt: float) -> None:
        world = self.world
        if world.celebration_remaining > 0:
            remaining = world.celebration_remaining - dt
            world.celebration_remaining = remaining if remaining > TIME_EPSILON else 0.0

    def _run_spawners(self, now: float) -> None:
        world = self.world

        for kind in self.scheduler.pop_due(now):
            if kind is SpawnerKind.OBSTACLE:
                world.obstacles.append(self.factory.obstacle())
                interval = self.factory.obstacle_interval(world.power_up)
                self.scheduler.arm(SpawnerKind.OBSTACLE, now + interval)
            elif kind is SpawnerKind.BONUS_COIN:
                if self._bonus_blocked():
                    continue
                world.bonus_coins.append(self.factory.bonus_coin())
                logger.debug("Bonus coin spawned")
            elif kind is SpawnerKind.SCORE_COIN:
                world.score_coins.append(self.factory.score_coin())
                self.scheduler.arm(SpawnerKind.SCORE_COIN, now + self.factory.score_delay())

        self._sync_bonus_spawner(now)

    def _bonus_blocked(self) -> bool:
        return self.world.power_up is not None or bool(self.world.bonus_coins)

    def _sync_bonus_spawner(self, now: float) -> None:
        """Arm the bonus spawner only while no power-up or bonus coin exists."""
        if self._bonus_blocked():
            self.scheduler.disarm(SpawnerKind.BONUS_COIN)
        elif not self.scheduler.is_armed(SpawnerKind.BONUS_COIN):
            self.scheduler.arm(SpawnerKind.BONUS_COIN, now + self.factory.bonus_delay())

    def _update_power_up(self, now: float) -> None:
        expired = self.power_up_timer.update(self.world, now)
        if expired is not None:
            self._emit(EventType.POWER_UP_ENDED, {"kind": expired.kind})

    # Helpers

    def _effective_bird_size(self) -> float:
        physics = self.settings.physics
        if is_shrunk(self.world.power_up):
            return physics.bird_size * physics.size_reduction_scale
        return physics.bird_size

    def _bird_box(self) -> Box:
        physics = self.settings.physics
        return bird_box(
            physics.bird_x,
            self.world.bird_y,
            physics.bird_size,
            self._effective_bird_size(),
        )

    def _read_best(self) -> int:
        try:
            return max(0, int(self.store.read()))
        except Exception as e:
            logger.error(f"Best score read failed: {e}")
            return 0

    def _write_best(self, score: int) -> None:
        try:
            self.store.write(score)
        except Exception as e:
            logger.error(f"Best score write failed: {e}")

    def _cue(self, cue: SoundCue) -> None:
        self.event_bus.emit(sound_event(cue))

    def _emit(self, event_type: EventType, data: dict) -> None:
        self.event_bus.emit(Event(event_type, data=data, source="engine"))

    def _on_phase_changed(self, old: Phase, new: Phase) -> None:
        self._emit(EventType.PHASE_CHANGED, {"from": old, "to": new})

    # Views

    def get_snapshot(self) -> Snapshot:
        world = self.world
        board = self.settings.world
        box = self._bird_box()

        power_up = None
        if world.power_up is not None:
            power_up = PowerUpView(world.power_up.kind, world.power_up.remaining)

        return Snapshot(
            phase=self.phases.phase,
            bird=BirdView(box.left, box.top, box.width, world.bird_velocity),
            obstacles=tuple(ObstacleView(o.x, o.gap_top, o.passed) for o in world.obstacles),
            bonus_coins=tuple(CoinView(c.x, c.y) for c in world.bonus_coins),
            score_coins=tuple(CoinView(c.x, c.y, c.tier) for c in world.score_coins),
            score=world.score,
            best_score=world.best_score,
            power_up=power_up,
            celebrating=world.celebrating,
            tick=world.tick,
            width=board.width,
            height=board.height,
            floor_y=board.floor_y,
            pipe_width=board.pipe_width,
            pipe_gap=board.pipe_gap,
            coin_size=board.coin_size,
        )
