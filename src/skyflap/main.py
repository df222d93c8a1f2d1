"""
Main entry point for SKYFLAP.

Wires the simulation engine to its collaborators (best-score file,
audio, window) and runs the game loop.
"""

import asyncio
import logging
import random
import sys
from typing import TYPE_CHECKING

from skyflap.config.settings import GameSettings, get_settings
from skyflap.core.events import Event, EventBus, EventType

if TYPE_CHECKING:
    from skyflap.simulator.window import WindowConfig


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def window_config(settings: GameSettings) -> "WindowConfig":
    """Window options; one frame per engine tick keeps game speed fixed."""
    from skyflap.simulator.window import WindowConfig

    return WindowConfig(
        title=settings.display.title,
        fps=settings.world.tick_rate,
        scale=settings.display.scale,
    )


async def run_game(settings: GameSettings) -> None:
    """Build the engine and its collaborators, then run the window."""
    from skyflap.audio.engine import AudioEngine
    from skyflap.game.engine import SimulationEngine
    from skyflap.simulator.window import GameWindow
    from skyflap.storage.best_score import JsonBestScoreStore

    logger = logging.getLogger(__name__)

    event_bus = EventBus()
    store = JsonBestScoreStore(settings.best_score_path)
    engine = SimulationEngine(
        settings=settings,
        store=store,
        rng=random.Random(settings.seed),
        event_bus=event_bus,
    )

    audio = AudioEngine()
    if audio.init():
        event_bus.subscribe(EventType.SOUND_PLAY, audio.handle_event)
    else:
        logger.warning("Audio disabled")

    def on_jump(event: Event) -> None:
        engine.on_jump()

    event_bus.subscribe(EventType.JUMP, on_jump)
    if settings.debug:
        event_bus.subscribe_all(
            lambda event: logger.debug(f"{event.source} -> {event.type}: {event.data}")
        )

    window = GameWindow(
        engine=engine,
        event_bus=event_bus,
        audio=audio,
        config=window_config(settings),
    )

    try:
        await window.run()
    finally:
        audio.cleanup()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("SKYFLAP starting...")

    try:
        asyncio.run(run_game(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("SKYFLAP stopped")


if __name__ == "__main__":
    main()
