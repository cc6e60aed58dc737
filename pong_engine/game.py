"""Game session — owns the live state, feeds it input, and runs headless games.

A session is the single writer of its GameState: input only lands in the
InputState, and the state only changes inside `tick()`. Renderers get
frozen Snapshots.

Headless runs drive the left paddle with a scripted tracker and the right
paddle with the built-in AI, and summarize every rally (serve to point).
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from pong_engine.types import GameState, Intent, PaddleHit, PointScored, Snapshot
from pong_engine.physics import TickEvent, step
from pong_engine.controls import InputState, new_game
from pong_engine.ai_player import tracking_intent

logger = logging.getLogger(__name__)

Policy = Callable[[Snapshot], Optional[Intent]]


class GameSession:
    """One running game: state, pending input, and the tick entry point."""

    def __init__(self, rng=None, ai_enabled: bool = False):
        self.rng = rng or random
        self.state = new_game(self.rng, ai_enabled=ai_enabled)
        self.input = InputState()

    def submit(self, command) -> bool:
        """Queue a command for the next tick. Unknown commands are ignored."""
        accepted = self.input.press(command)
        if not accepted:
            logger.debug("Ignoring unmapped command %r", command)
        return accepted

    def tick(self) -> tuple[Snapshot, list[TickEvent]]:
        """Apply pending commands, advance one tick, and return the result."""
        self.input.drain(self.state, self.rng)
        self.state, events = step(self.state, self.input.left, self.input.right, self.rng)
        for e in events:
            if isinstance(e, PointScored):
                logger.debug(
                    "Point to %s at tick %d (%d-%d)",
                    e.scorer, e.tick, e.score_left, e.score_right,
                )
        return self.state.snapshot(), events

    def snapshot(self) -> Snapshot:
        return self.state.snapshot()


@dataclass
class RallyResult:
    """One rally, from serve until a point is scored."""
    scorer: str           # "left" or "right"
    hits: int             # paddle hits during the rally
    duration_ticks: int
    top_speed: float      # largest |vx| reached


@dataclass
class SessionResult:
    """Outcome of a headless session."""
    final: GameState
    rallies: list         # list[RallyResult]
    speeds: list = field(default_factory=list)  # |vx| at every tick
    stats: dict = field(default_factory=dict)


def _apply_policy(session: GameSession, policy: Optional[Policy], side: str, snap: Snapshot) -> None:
    if policy is None:
        return
    intent = policy(snap)
    if intent is None:
        return
    if side == "left":
        session.input.left = intent
    else:
        session.input.right = intent


def iter_ticks(
    session: GameSession,
    ticks: int,
    left_policy: Optional[Policy] = None,
    right_policy: Optional[Policy] = None,
) -> Iterator[tuple[Snapshot, list[TickEvent]]]:
    """Drive a session for `ticks` ticks with scripted players.

    A policy sees the latest snapshot and returns the intent to hold for the
    next tick, or None to keep the current one. Yields after every tick, so
    `session.state` is the post-tick state while the caller handles it.
    """
    snap = session.snapshot()
    for _ in range(ticks):
        _apply_policy(session, left_policy, "left", snap)
        _apply_policy(session, right_policy, "right", snap)
        snap, events = session.tick()
        yield snap, events


def run_ticks(
    session: GameSession,
    ticks: int,
    left_policy: Optional[Policy] = None,
    right_policy: Optional[Policy] = None,
) -> list[tuple[Snapshot, list[TickEvent]]]:
    """Like `iter_ticks`, collected into a list."""
    return list(iter_ticks(session, ticks, left_policy, right_policy))


def left_tracker(snap: Snapshot) -> Intent:
    return tracking_intent(snap.left_y, snap.ball_y)


def right_tracker(snap: Snapshot) -> Intent:
    return tracking_intent(snap.right_y, snap.ball_y)


def simulate_session(ticks: int = 6000, seed: Optional[int] = None, ai_right: bool = True) -> SessionResult:
    """Play a headless session and collect rally statistics.

    The left paddle follows the ball at human paddle speed. The right paddle
    uses the built-in AI, or the same tracker as the left when `ai_right`
    is False.
    """
    rng = random.Random(seed)
    session = GameSession(rng=rng, ai_enabled=ai_right)
    right_policy = None if ai_right else right_tracker
    logger.info("Headless session: %d ticks, seed=%s, ai_right=%s", ticks, seed, ai_right)

    rallies: list[RallyResult] = []
    speeds: list[float] = []
    hits = 0
    rally_start = 0
    top_speed = abs(session.state.ball.vx)

    for snap, events in iter_ticks(session, ticks, left_tracker, right_policy):
        for e in events:
            if isinstance(e, PaddleHit):
                hits += 1
                top_speed = max(top_speed, abs(e.vx))
            elif isinstance(e, PointScored):
                rallies.append(RallyResult(
                    scorer=e.scorer,
                    hits=hits,
                    duration_ticks=e.tick - rally_start,
                    top_speed=top_speed,
                ))
                hits = 0
                rally_start = e.tick
                top_speed = abs(session.state.ball.vx)
        speeds.append(abs(session.state.ball.vx))

    final = session.state.copy()
    stats = _compute_session_stats(rallies, final, ticks)
    logger.info("Session finished %d-%d after %d rallies", final.score.left, final.score.right, len(rallies))

    return SessionResult(final=final, rallies=rallies, speeds=speeds, stats=stats)


def _compute_session_stats(rallies: list[RallyResult], final: GameState, ticks: int) -> dict:
    """Compute session statistics."""
    hit_counts = [r.hits for r in rallies]
    durations = [r.duration_ticks for r in rallies]

    return {
        "ticks": ticks,
        "score_left": final.score.left,
        "score_right": final.score.right,
        "total_rallies": len(rallies),
        "left_points": sum(1 for r in rallies if r.scorer == "left"),
        "right_points": sum(1 for r in rallies if r.scorer == "right"),
        "avg_rally_hits": round(sum(hit_counts) / max(len(hit_counts), 1), 1),
        "max_rally_hits": max(hit_counts) if hit_counts else 0,
        "avg_rally_ticks": round(sum(durations) / max(len(durations), 1), 1),
        "top_speed": round(max((r.top_speed for r in rallies), default=0.0), 2),
    }
