"""Session controls — pause, AI toggle, resets, and input translation.

Commands never touch ball or paddle kinematics directly. Held directions
land in a latest-intent slot per paddle; discrete commands are queued and
applied in arrival order right before the next tick.
"""

import logging
import random
from collections import deque

from pong_engine.types import Command, GameState, Intent
from pong_engine import court

logger = logging.getLogger(__name__)

_LEFT_INTENTS = {
    Command.LEFT_UP: Intent.UP,
    Command.LEFT_DOWN: Intent.DOWN,
    Command.LEFT_RELEASE: Intent.HOLD,
}

_RIGHT_INTENTS = {
    Command.RIGHT_UP: Intent.UP,
    Command.RIGHT_DOWN: Intent.DOWN,
    Command.RIGHT_RELEASE: Intent.HOLD,
}

# Right-paddle key presses hand control back to the human
_RIGHT_PRESSES = (Command.RIGHT_UP, Command.RIGHT_DOWN)

_DISCRETE = (Command.PAUSE_TOGGLE, Command.RESET, Command.AI_TOGGLE)


def toggle_pause(state: GameState) -> GameState:
    state.session.paused = not state.session.paused
    return state


def toggle_ai(state: GameState) -> GameState:
    state.session.ai_enabled = not state.session.ai_enabled
    return state


def _random_sign(rng) -> int:
    return 1 if rng.random() < 0.5 else -1


def reset_positions(state: GameState, rng=None) -> GameState:
    """Re-center both paddles and the ball and serve in a random direction.

    Each axis picks its sign independently with probability 1/2; the
    magnitudes are always BALL_SPEED_X and BALL_SPEED_Y. Scores are kept.
    """
    rng = rng or random
    for paddle in (state.left, state.right):
        paddle.y = court.PADDLE_START_Y
        paddle.vy = 0.0
    ball = state.ball
    ball.x = court.BALL_START_X
    ball.y = court.BALL_START_Y
    ball.vx = court.BALL_SPEED_X * _random_sign(rng)
    ball.vy = court.BALL_SPEED_Y * _random_sign(rng)
    logger.debug("Positions reset at tick %d, serve (%+.0f, %+.0f)", state.tick, ball.vx, ball.vy)
    return state


def reset_game(state: GameState, rng=None) -> GameState:
    """Zero both scores, then reset positions."""
    state.score.left = 0
    state.score.right = 0
    return reset_positions(state, rng)


def new_game(rng=None, ai_enabled: bool = False) -> GameState:
    """Create a fresh game with a randomized serve."""
    state = GameState()
    state.session.ai_enabled = ai_enabled
    return reset_positions(state, rng)


class InputState:
    """Latest held intent per paddle plus a queue of pending discrete commands."""

    def __init__(self):
        self.left = Intent.HOLD
        self.right = Intent.HOLD
        self.pending: deque = deque()

    def press(self, command) -> bool:
        """Record a command from the input collector.

        Returns False (and changes nothing) for anything that is not a
        known Command.
        """
        if not isinstance(command, Command):
            return False
        if command in _LEFT_INTENTS:
            self.left = _LEFT_INTENTS[command]
        elif command in _RIGHT_INTENTS:
            self.right = _RIGHT_INTENTS[command]
            if command in _RIGHT_PRESSES:
                self.pending.append(command)
        elif command in _DISCRETE:
            self.pending.append(command)
        return True

    def drain(self, state: GameState, rng=None) -> list[Command]:
        """Apply queued commands to `state` in arrival order."""
        applied = []
        while self.pending:
            command = self.pending.popleft()
            if command in _RIGHT_PRESSES:
                state.session.ai_enabled = False
            elif command is Command.PAUSE_TOGGLE:
                toggle_pause(state)
            elif command is Command.AI_TOGGLE:
                toggle_ai(state)
            elif command is Command.RESET:
                reset_game(state, rng)
                logger.info("Game reset at tick %d", state.tick)
            applied.append(command)
        return applied
