"""Lives pool and post-hit invincibility."""

import logging

from dungeon_dash.game.run_state import RunState

logger = logging.getLogger(__name__)


class LivesTracker:
    """
    Owns every change to ``lives`` and ``invincibility`` on a run.

    Lives stay within [0, max_lives]. A hit grants a fixed invincibility
    window; while the window is open the timer counts down one per frame
    and hits are not processed. Reaching zero lives ends the run on the
    same frame.
    """

    def __init__(self, max_lives: int = 3, invincibility_frames: int = 120) -> None:
        self.max_lives = max_lives
        self.invincibility_frames = invincibility_frames

    def tick(self, state: RunState) -> bool:
        """Count the invincibility window down by one frame.

        Returns:
            True if the player was invincible this frame
        """
        if state.invincibility > 0:
            state.invincibility -= 1
            return True
        return False

    def take_hit(self, state: RunState) -> bool:
        """Lose a life and open the invincibility window.

        Returns:
            True if this hit ended the run
        """
        state.lives = max(0, state.lives - 1)
        state.invincibility = self.invincibility_frames
        logger.info(f"Hit! lives={state.lives}")

        if state.lives == 0:
            state.running = False
            logger.info(f"Game over at frame {state.frame}, score={state.score}")
            return True
        return False

    def restore(self, state: RunState) -> bool:
        """Gain a life unless already at the maximum."""
        if state.lives >= self.max_lives:
            return False
        state.lives += 1
        return True
