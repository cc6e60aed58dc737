"""Fixed-timestep simulation — paddles, AI, ball flight, collisions, scoring."""

from typing import Union

from pong_engine.types import (
    BallState,
    GameState,
    Intent,
    PaddleHit,
    PaddleState,
    PointScored,
    WallBounce,
)
from pong_engine.ai_player import clamp_paddle, track_ball
from pong_engine.controls import reset_positions
from pong_engine import court

TickEvent = Union[WallBounce, PaddleHit, PointScored]

_INTENT_SPEED = {
    Intent.UP: -court.PADDLE_SPEED,
    Intent.DOWN: court.PADDLE_SPEED,
    Intent.HOLD: 0.0,
}


def _move_paddle(paddle: PaddleState, intent: Intent) -> None:
    paddle.vy = _INTENT_SPEED.get(intent, 0.0)
    paddle.y = clamp_paddle(paddle.y + paddle.vy)


def _move_ai_paddle(paddle: PaddleState, ball: BallState) -> None:
    new_y = track_ball(paddle.y, ball.y)
    paddle.vy = new_y - paddle.y
    paddle.y = new_y


def _check_walls(ball: BallState, tick: int) -> list[WallBounce]:
    """Reflect off the top or bottom wall. Top wins if both are breached."""
    if ball.y <= 0:
        ball.y = 0.0
        ball.vy = -ball.vy
        return [WallBounce(edge="top", x=ball.x, y=ball.y, tick=tick)]
    if ball.y + court.BALL_SIZE >= court.HEIGHT:
        ball.y = court.HEIGHT - court.BALL_SIZE
        ball.vy = -ball.vy
        return [WallBounce(edge="bottom", x=ball.x, y=ball.y, tick=tick)]
    return []


def _overlaps(ball: BallState, paddle: PaddleState) -> bool:
    return ball.y + court.BALL_SIZE >= paddle.y and ball.y <= paddle.y + court.PADDLE_HEIGHT


def _deflect(ball: BallState, paddle: PaddleState, direction: int) -> float:
    """Send the ball back along `direction` (+1 right, -1 left).

    vy depends only on where the ball struck the paddle; |vx| grows by
    ESCALATION. Returns the normalized impact offset.
    """
    offset = (ball.center_y - paddle.center) / (court.PADDLE_HEIGHT / 2)
    ball.vx = direction * abs(ball.vx)
    ball.vy = offset * court.DEFLECTION
    ball.vx *= court.ESCALATION
    return offset


def _check_left_paddle(ball: BallState, paddle: PaddleState, tick: int) -> list[PaddleHit]:
    face = court.LEFT_PADDLE_X + court.PADDLE_WIDTH
    if not (court.LEFT_PADDLE_X - court.BALL_SIZE <= ball.x <= face):
        return []
    if not _overlaps(ball, paddle):
        return []
    ball.x = face  # out of the band so the next tick can't hit again
    offset = _deflect(ball, paddle, 1)
    return [PaddleHit(side="left", offset=offset, vx=ball.vx, vy=ball.vy, tick=tick)]


def _check_right_paddle(ball: BallState, paddle: PaddleState, tick: int) -> list[PaddleHit]:
    face = court.RIGHT_PADDLE_X
    leading_edge = ball.x + court.BALL_SIZE
    if not (face <= leading_edge <= face + court.PADDLE_WIDTH + court.BALL_SIZE):
        return []
    if not _overlaps(ball, paddle):
        return []
    ball.x = face - court.BALL_SIZE
    offset = _deflect(ball, paddle, -1)
    return [PaddleHit(side="right", offset=offset, vx=ball.vx, vy=ball.vy, tick=tick)]


def _check_score(state: GameState, rng) -> list[PointScored]:
    """Award a point once the ball is fully past either side, then re-serve."""
    ball = state.ball
    if ball.x < -court.BALL_SIZE:
        scorer = "right"
        state.score.right += 1
    elif ball.x > court.WIDTH + court.BALL_SIZE:
        scorer = "left"
        state.score.left += 1
    else:
        return []

    event = PointScored(
        scorer=scorer,
        score_left=state.score.left,
        score_right=state.score.right,
        tick=state.tick,
        speed=abs(ball.vx),
    )
    reset_positions(state, rng)
    return [event]


def step(
    state: GameState,
    left_intent: Intent,
    right_intent: Intent,
    rng=None,
) -> tuple[GameState, list[TickEvent]]:
    """Advance the game by one tick.

    The input state is left untouched; a new GameState is returned together
    with the events that happened during the tick. While paused the result
    is an identical copy and no events are produced.

    Args:
        state: Game state before the tick.
        left_intent: Held intent for the left paddle.
        right_intent: Held intent for the right paddle, ignored while the
            AI drives it.
        rng: Source for the serve direction after a point (anything with a
            ``random()`` method). Defaults to the ``random`` module.
    """
    nxt = state.copy()
    if nxt.session.paused:
        return nxt, []

    nxt.tick += 1
    events: list[TickEvent] = []
    ball = nxt.ball

    _move_paddle(nxt.left, left_intent)
    if nxt.session.ai_enabled:
        _move_ai_paddle(nxt.right, ball)
    else:
        _move_paddle(nxt.right, right_intent)

    ball.x += ball.vx
    ball.y += ball.vy

    events.extend(_check_walls(ball, nxt.tick))
    events.extend(_check_left_paddle(ball, nxt.left, nxt.tick))
    events.extend(_check_right_paddle(ball, nxt.right, nxt.tick))
    events.extend(_check_score(nxt, rng))

    return nxt, events


def advance(
    state: GameState,
    left_intent: Intent,
    right_intent: Intent,
    rng=None,
) -> GameState:
    """Advance the game by one tick and return only the new state."""
    nxt, _ = step(state, left_intent, right_intent, rng)
    return nxt
