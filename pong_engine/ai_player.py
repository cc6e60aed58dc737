"""Paddle AI — single-axis ball tracking with a dead zone.

The right paddle can be driven by `track_ball` from inside the simulation.
`tracking_intent` expresses the same rule as an input intent so a scripted
player can stand in for a human on either side (headless runs, demos).
"""

from pong_engine.types import Intent
from pong_engine import court


def clamp_paddle(y: float) -> float:
    """Keep a paddle's top edge inside [0, HEIGHT - PADDLE_HEIGHT]."""
    return max(0.0, min(court.HEIGHT - court.PADDLE_HEIGHT, y))


def track_ball(paddle_y: float, ball_y: float) -> float:
    """Move the paddle one AI step toward the ball's vertical center.

    Args:
        paddle_y: Top edge of the paddle.
        ball_y: Top edge of the ball.

    Returns:
        The new, clamped paddle top edge.
    """
    center = paddle_y + court.PADDLE_HEIGHT / 2
    target = ball_y + court.BALL_SIZE / 2
    if center < target - court.AI_DEAD_ZONE:
        paddle_y += court.AI_SPEED
    elif center > target + court.AI_DEAD_ZONE:
        paddle_y -= court.AI_SPEED
    return clamp_paddle(paddle_y)


def tracking_intent(paddle_y: float, ball_y: float) -> Intent:
    """Intent a scripted player would hold to follow the ball."""
    center = paddle_y + court.PADDLE_HEIGHT / 2
    target = ball_y + court.BALL_SIZE / 2
    if center < target - court.AI_DEAD_ZONE:
        return Intent.DOWN
    if center > target + court.AI_DEAD_ZONE:
        return Intent.UP
    return Intent.HOLD
