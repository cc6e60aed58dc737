"""Tests for the simulation step."""

import random
import pytest

from pong_engine.types import BallState, GameState, Intent, PaddleHit, PointScored, WallBounce
from pong_engine.physics import advance, step
from pong_engine import court


def _state(ball, left_y=210.0, right_y=210.0):
    state = GameState(ball=ball)
    state.left.y = left_y
    state.right.y = right_y
    return state


def test_free_flight_one_tick():
    """Ball at (390, 240) moving (4, 3) → (394, 243), velocity unchanged."""
    state = _state(BallState(x=390, y=240, vx=4, vy=3))
    nxt = advance(state, Intent.HOLD, Intent.HOLD)

    assert (nxt.ball.x, nxt.ball.y) == (394, 243)
    assert (nxt.ball.vx, nxt.ball.vy) == (4, 3)
    assert nxt.tick == 1


def test_advance_does_not_mutate_input():
    """The previous state must be left exactly as it was."""
    state = _state(BallState(x=390, y=240, vx=4, vy=3))
    before = state.copy()
    advance(state, Intent.UP, Intent.DOWN)
    assert state == before


def test_bottom_wall_reflection():
    """Ball breaching the bottom wall is clamped to it and bounced upward."""
    state = _state(BallState(x=400, y=483, vx=4, vy=3))
    nxt, events = step(state, Intent.HOLD, Intent.HOLD)

    assert nxt.ball.vy < 0
    assert nxt.ball.y + court.BALL_SIZE == court.HEIGHT
    assert [type(e) for e in events] == [WallBounce]
    assert events[0].edge == "bottom"


def test_top_wall_reflection():
    """Ball breaching the top wall is clamped to 0 and bounced downward."""
    state = _state(BallState(x=400, y=2, vx=4, vy=-3))
    nxt, events = step(state, Intent.HOLD, Intent.HOLD)

    assert nxt.ball.y == 0
    assert nxt.ball.vy == 3
    assert events[0].edge == "top"


def test_left_paddle_hit_scenario():
    """Paddle at y=210, ball reaching x=32 at y=245 with vx=-4.

    vx becomes 4 * 1.03 and vy = (252 - 250) / 40 * 5 = 0.25.
    """
    state = _state(BallState(x=36, y=245, vx=-4, vy=0))
    nxt, events = step(state, Intent.HOLD, Intent.HOLD)

    assert nxt.ball.x == court.LEFT_PADDLE_X + court.PADDLE_WIDTH
    assert nxt.ball.vx == pytest.approx(4.12)
    assert nxt.ball.vy == pytest.approx(0.25)
    hits = [e for e in events if isinstance(e, PaddleHit)]
    assert len(hits) == 1
    assert hits[0].side == "left"
    assert hits[0].offset == pytest.approx(0.05)


def test_left_paddle_hit_inside_band():
    """A ball already at the paddle face is still returned and snapped out."""
    state = _state(BallState(x=32, y=245, vx=-4, vy=0))
    nxt = advance(state, Intent.HOLD, Intent.HOLD)

    assert nxt.ball.x == 32
    assert nxt.ball.vx == pytest.approx(4.12)
    assert nxt.ball.vy == pytest.approx(0.25)


def test_right_paddle_hit_mirrors_left():
    """Right paddle returns the ball leftward with the same response."""
    state = _state(BallState(x=750, y=245, vx=4, vy=0))
    nxt, events = step(state, Intent.HOLD, Intent.HOLD)

    assert nxt.ball.x == court.RIGHT_PADDLE_X - court.BALL_SIZE
    assert nxt.ball.vx == pytest.approx(-4.12)
    assert nxt.ball.vy == pytest.approx(0.25)
    assert [e.side for e in events if isinstance(e, PaddleHit)] == ["right"]


def test_escalation_factor():
    """Each paddle hit multiplies |vx| by exactly 1.03."""
    state = _state(BallState(x=37, y=245, vx=-5, vy=0))
    nxt = advance(state, Intent.HOLD, Intent.HOLD)
    assert abs(nxt.ball.vx) == pytest.approx(5 * court.ESCALATION)


def test_deflection_is_linear_in_offset():
    """Outgoing vy is offset / half-height * 5, with no randomness."""
    results = []
    for ball_y in (203.0, 223.0, 243.0, 263.0, 283.0):
        state = _state(BallState(x=36, y=ball_y, vx=-4, vy=1.5))
        first = advance(state, Intent.HOLD, Intent.HOLD)
        second = advance(state, Intent.HOLD, Intent.HOLD)
        assert first.ball.vy == second.ball.vy

        expected = ((ball_y + 1.5 + court.BALL_SIZE / 2) - 250) / 40 * court.DEFLECTION
        assert first.ball.vy == pytest.approx(expected)
        results.append(first.ball.vy)

    diffs = [b - a for a, b in zip(results, results[1:])]
    assert all(d == pytest.approx(diffs[0]) for d in diffs)


def test_ball_misses_paddle():
    """A ball level with the paddle band but above the paddle passes by."""
    state = _state(BallState(x=30, y=100, vx=-4, vy=0), left_y=400)
    nxt, events = step(state, Intent.HOLD, Intent.HOLD)

    assert nxt.ball.vx == -4
    assert nxt.ball.x == 26
    assert not any(isinstance(e, PaddleHit) for e in events)


def test_no_second_hit_on_next_tick():
    """After a return the ball leaves the band instead of sticking."""
    state = _state(BallState(x=36, y=245, vx=-4, vy=0))
    once = advance(state, Intent.HOLD, Intent.HOLD)
    _, events = step(once, Intent.HOLD, Intent.HOLD)
    assert not any(isinstance(e, PaddleHit) for e in events)


def test_ball_exits_left_right_scores():
    """Ball fully past the left side → right +1, positions reset, left unchanged."""
    state = _state(BallState(x=-12, y=100, vx=-6, vy=2), left_y=0, right_y=420)
    state.score.left = 3
    state.score.right = 5
    nxt, events = step(state, Intent.HOLD, Intent.HOLD, rng=random.Random(7))

    assert nxt.score.right == 6
    assert nxt.score.left == 3
    assert (nxt.ball.x, nxt.ball.y) == (court.BALL_START_X, court.BALL_START_Y)
    assert abs(nxt.ball.vx) == court.BALL_SPEED_X
    assert abs(nxt.ball.vy) == court.BALL_SPEED_Y
    assert nxt.left.y == court.PADDLE_START_Y
    assert nxt.right.y == court.PADDLE_START_Y

    points = [e for e in events if isinstance(e, PointScored)]
    assert len(points) == 1
    assert points[0].scorer == "right"
    assert points[0].speed == 6


def test_ball_exits_right_left_scores():
    """Ball fully past the right side → left +1."""
    state = _state(BallState(x=812, y=100, vx=4, vy=2))
    nxt, events = step(state, Intent.HOLD, Intent.HOLD, rng=random.Random(7))

    assert nxt.score.left == 1
    assert nxt.score.right == 0
    assert [e.scorer for e in events if isinstance(e, PointScored)] == ["left"]


def test_ball_partially_out_does_not_score():
    """x between -BALL_SIZE and 0 is not yet a point."""
    state = _state(BallState(x=-6, y=100, vx=-4, vy=0))
    nxt = advance(state, Intent.HOLD, Intent.HOLD)
    assert nxt.score.right == 0
    assert nxt.ball.x == -10


def test_pause_is_idempotent():
    """Any number of paused ticks leaves the state unchanged."""
    state = _state(BallState(x=390, y=240, vx=4, vy=3))
    state.session.paused = True
    before = state.copy()

    current = state
    for _ in range(50):
        current, events = step(current, Intent.UP, Intent.DOWN)
        assert events == []

    assert current == before


def test_paddle_intents_move_and_clamp():
    """UP moves by -6 per tick, DOWN by +6, both stop at the walls."""
    state = _state(BallState(x=390, y=240, vx=0, vy=0), left_y=3, right_y=418)
    nxt = advance(state, Intent.UP, Intent.DOWN)

    assert nxt.left.y == 0
    assert nxt.right.y == court.HEIGHT - court.PADDLE_HEIGHT

    nxt = advance(_state(BallState(x=390, y=240, vx=0, vy=0)), Intent.UP, Intent.DOWN)
    assert nxt.left.y == 210 - court.PADDLE_SPEED
    assert nxt.right.y == 210 + court.PADDLE_SPEED


def test_paddles_stay_in_bounds():
    """Random intents for thousands of ticks never push a paddle out of court."""
    rng = random.Random(3)
    intents = list(Intent)
    state = _state(BallState(x=390, y=240, vx=4, vy=3))
    state.session.ai_enabled = False

    for i in range(3000):
        if i == 1500:
            state.session.ai_enabled = True
        state = advance(state, rng.choice(intents), rng.choice(intents), rng=rng)
        for paddle in (state.left, state.right):
            assert 0 <= paddle.y <= court.HEIGHT - court.PADDLE_HEIGHT


def test_ai_overrides_right_intent():
    """With AI on, the right paddle follows the ball and ignores its intent."""
    state = _state(BallState(x=390, y=400, vx=4, vy=0), right_y=100)
    state.session.ai_enabled = True
    nxt = advance(state, Intent.HOLD, Intent.UP)
    assert nxt.right.y == 100 + court.AI_SPEED
