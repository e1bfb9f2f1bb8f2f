"""Score-driven level staircase."""

import logging

from dungeon_dash.game.run_state import RunState

logger = logging.getLogger(__name__)


class ProgressionController:
    """Raises the level by one each time the score reaches ``level * threshold``.

    The background follows the level until the last background is reached.
    """

    def __init__(self, threshold: int = 10, background_count: int = 4) -> None:
        self.threshold = threshold
        self.background_count = background_count

    def update(self, state: RunState) -> bool:
        """Check the current threshold. Returns True if the level went up."""
        if state.score < state.level * self.threshold:
            return False

        state.level += 1
        state.background = min(state.level - 1, self.background_count - 1)
        logger.info(f"Level up: {state.level} (score={state.score})")
        return True
