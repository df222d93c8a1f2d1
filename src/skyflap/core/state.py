"""
Lifecycle state machine for a SKYFLAP session.

Phases:
    NOT_STARTED: Pre-round screen, waiting for the first jump
    RUNNING: Simulation is advancing
    GAME_OVER: Run ended, waiting for the restart jump
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Session phases."""
    NOT_STARTED = auto()
    RUNNING = auto()
    GAME_OVER = auto()


PhaseListener = Callable[[Phase, Phase], None]


class PhaseMachine:
    """
    Tracks the session phase and enforces valid transitions.

    Listeners are notified after each successful transition; a failing
    listener is logged and does not undo the transition.
    """

    VALID_TRANSITIONS: list[tuple[Phase, Phase]] = [
        (Phase.NOT_STARTED, Phase.RUNNING),
        (Phase.RUNNING, Phase.GAME_OVER),
        (Phase.GAME_OVER, Phase.NOT_STARTED),  # Restart
    ]

    def __init__(self, initial_phase: Phase = Phase.NOT_STARTED) -> None:
        self._phase = initial_phase
        self._listeners: list[PhaseListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"PhaseMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> Phase:
        """Get current phase."""
        return self._phase

    @property
    def is_running(self) -> bool:
        return self._phase == Phase.RUNNING

    def can_transition(self, to_phase: Phase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: Phase) -> bool:
        """
        Attempt to transition to a new phase.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid transition: {self._phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._phase
        self._phase = to_phase
        logger.info(f"Phase transition: {old_phase.name} -> {to_phase.name}")

        for listener in self._listeners:
            try:
                listener(old_phase, to_phase)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")

        return True

    def add_listener(self, callback: PhaseListener) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: PhaseListener) -> None:
        """Remove a phase change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)
