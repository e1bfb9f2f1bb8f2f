"""
State machine for the run lifecycle.

Phases:
    IDLE: Character select, no simulation running
    RUNNING: Simulation stepping once per frame
    GAME_OVER: Lives exhausted, waiting for an explicit retry
"""

from enum import Enum, auto
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


class RunPhase(Enum):
    """Run lifecycle phases."""
    IDLE = auto()
    RUNNING = auto()
    GAME_OVER = auto()


@dataclass
class PhaseContext:
    """Context data carried across phase changes."""
    character_id: str | None = None
    final_score: int = 0
    final_level: int = 1


class StateMachine:
    """
    Manages run phases and transitions.

    Only the transitions in VALID_TRANSITIONS are allowed; anything else
    is rejected and logged.
    """

    VALID_TRANSITIONS: list[tuple[RunPhase, RunPhase]] = [
        (RunPhase.IDLE, RunPhase.RUNNING),
        (RunPhase.RUNNING, RunPhase.GAME_OVER),
        (RunPhase.RUNNING, RunPhase.IDLE),  # Abort
        (RunPhase.GAME_OVER, RunPhase.IDLE),  # Retry
    ]

    def __init__(self, initial_phase: RunPhase = RunPhase.IDLE) -> None:
        self._phase = initial_phase
        self._context = PhaseContext()
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> RunPhase:
        """Get current phase."""
        return self._phase

    @property
    def context(self) -> PhaseContext:
        """Get current context."""
        return self._context

    def can_transition(self, to_phase: RunPhase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: RunPhase, **context_updates) -> bool:
        """
        Attempt to transition to a new phase.

        Args:
            to_phase: Target phase
            **context_updates: Updates to apply to context

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

        for key, value in context_updates.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

        logger.info(f"Phase transition: {old_phase.name} -> {to_phase.name}")
        return True

