"""
Game window using pygame.

Captures input, drives the engine at a fixed tick rate and draws each
snapshot. It holds no game state of its own.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass

from ..core.events import EventBus, EventType, Event, jump_event, tick_event
from ..core.state import Phase
from ..game.engine import SimulationEngine
from ..game.snapshot import Snapshot
from ..graphics.renderer import SnapshotRenderer
from ..audio.engine import AudioEngine

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Game window configuration."""
    title: str = "SKYFLAP"
    fps: int = 60
    scale: int = 1

    text_color: tuple[int, int, int] = (255, 255, 255)
    shadow_color: tuple[int, int, int] = (0, 0, 0)


class GameWindow:
    """
    Main game window.

    Keyboard Mapping:
        SPACE / click: Jump (start, flap, restart)
        M: Toggle mute
        S: Capture screenshot
        ESC / Q: Exit
    """

    def __init__(
        self,
        engine: SimulationEngine,
        event_bus: EventBus,
        audio: AudioEngine | None = None,
        config: WindowConfig | None = None,
    ) -> None:
        self.engine = engine
        self.event_bus = event_bus
        self.audio = audio
        self.config = config or WindowConfig()

        board = engine.settings.world
        self.renderer = SnapshotRenderer(board.width, board.height)

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0

        logger.info("GameWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        board = self.engine.settings.world
        self._screen = pygame.display.set_mode(
            (board.width * self.config.scale, board.height * self.config.scale),
            pygame.DOUBLEBUF,
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 24 * self.config.scale)
        self._big_font = pygame.font.SysFont(None, 56 * self.config.scale)

        logger.info(f"Pygame initialized: {self._screen.get_size()}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                self.event_bus.emit(jump_event(source="mouse"))

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key == pygame.K_SPACE:
            self.event_bus.emit(jump_event(source="keyboard"))
        elif key == pygame.K_m and self.audio:
            muted = self.audio.toggle_mute()
            logger.info(f"Muted: {muted}")
        elif key == pygame.K_s:
            self._capture_screenshot()

    def _render(self, snapshot: Snapshot) -> None:
        if not self._screen:
            return

        buffer = self.renderer.render(snapshot)
        surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
        if self.config.scale != 1:
            surface = pygame.transform.scale(surface, self._screen.get_size())
        self._screen.blit(surface, (0, 0))

        self._render_hud(snapshot)
        pygame.display.flip()

    def _render_hud(self, snapshot: Snapshot) -> None:
        width = self._screen.get_width()
        scale = self.config.scale

        self._blit_centered(self._big_font, str(snapshot.score), 20 * scale)
        best = self._font.render(f"BEST {snapshot.best_score}", True, self.config.text_color)
        self._screen.blit(best, (width - best.get_width() - 10 * scale, 10 * scale))

        if snapshot.power_up:
            info = snapshot.power_up.kind.info
            label = self._font.render(
                f"{info.label} {snapshot.power_up.remaining:.1f}s", True, info.color
            )
            self._screen.blit(label, (10 * scale, 10 * scale))

        if snapshot.celebrating:
            self._blit_centered(self._big_font, "NICE!", 120 * scale)

        if snapshot.phase == Phase.NOT_STARTED:
            self._blit_centered(self._font, "Click or press SPACE to start", 280 * scale)
        elif snapshot.phase == Phase.GAME_OVER:
            self._blit_centered(self._big_font, "Game Over!", 230 * scale)
            self._blit_centered(self._font, f"Score: {snapshot.score}", 280 * scale)
            self._blit_centered(self._font, "Click or press SPACE to restart", 310 * scale)

    def _blit_centered(self, font: pygame.font.Font, text: str, y: int) -> None:
        shadow = font.render(text, True, self.config.shadow_color)
        surf = font.render(text, True, self.config.text_color)
        x = (self._screen.get_width() - surf.get_width()) // 2
        self._screen.blit(shadow, (x + 2, y + 2))
        self._screen.blit(surf, (x, y))

    def _capture_screenshot(self) -> None:
        """Capture and save a screenshot."""
        if self._screen:
            filename = f"screenshot_{self._frame_count}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    async def run(self) -> None:
        """Main game loop: one engine tick per frame."""
        self._init_pygame()
        self._running = True

        logger.info("Game window started")

        while self._running:
            self._handle_events()

            snapshot = self.engine.on_tick()
            self.event_bus.emit(tick_event(self.engine.settings.tick_seconds, self._frame_count))

            self._render(snapshot)

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Game window stopped")
