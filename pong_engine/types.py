"""Core data types for the Pong simulation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pong_engine import court


class Intent(Enum):
    """Directional command currently held for a paddle."""
    UP = "up"
    DOWN = "down"
    HOLD = "hold"


class Command(Enum):
    """Discrete input commands produced by the input collector."""
    LEFT_UP = "left_up"
    LEFT_DOWN = "left_down"
    LEFT_RELEASE = "left_release"
    RIGHT_UP = "right_up"
    RIGHT_DOWN = "right_down"
    RIGHT_RELEASE = "right_release"
    PAUSE_TOGGLE = "pause_toggle"
    RESET = "reset"
    AI_TOGGLE = "ai_toggle"


@dataclass
class PaddleState:
    """Vertical position and velocity of one paddle."""
    side: str  # "left" or "right"
    y: float = court.PADDLE_START_Y
    vy: float = 0.0

    @property
    def x(self) -> float:
        return court.LEFT_PADDLE_X if self.side == "left" else court.RIGHT_PADDLE_X

    @property
    def center(self) -> float:
        return self.y + court.PADDLE_HEIGHT / 2

    def copy(self) -> "PaddleState":
        return PaddleState(side=self.side, y=self.y, vy=self.vy)


@dataclass
class BallState:
    """Ball kinematics. (x, y) is the top-left corner of its bounding square."""
    x: float = court.BALL_START_X
    y: float = court.BALL_START_Y
    vx: float = court.BALL_SPEED_X
    vy: float = court.BALL_SPEED_Y

    @property
    def center_y(self) -> float:
        return self.y + court.BALL_SIZE / 2

    def speed(self) -> float:
        return (self.vx**2 + self.vy**2) ** 0.5

    def copy(self) -> "BallState":
        return BallState(x=self.x, y=self.y, vx=self.vx, vy=self.vy)


@dataclass
class ScoreState:
    left: int = 0
    right: int = 0

    def copy(self) -> "ScoreState":
        return ScoreState(left=self.left, right=self.right)


@dataclass
class SessionState:
    paused: bool = False
    ai_enabled: bool = False  # right paddle only

    def copy(self) -> "SessionState":
        return SessionState(paused=self.paused, ai_enabled=self.ai_enabled)


@dataclass
class GameState:
    """Everything the simulation owns. One instance per running session."""
    left: PaddleState = field(default_factory=lambda: PaddleState("left"))
    right: PaddleState = field(default_factory=lambda: PaddleState("right"))
    ball: BallState = field(default_factory=BallState)
    score: ScoreState = field(default_factory=ScoreState)
    session: SessionState = field(default_factory=SessionState)
    tick: int = 0

    def copy(self) -> "GameState":
        return GameState(
            left=self.left.copy(),
            right=self.right.copy(),
            ball=self.ball.copy(),
            score=self.score.copy(),
            session=self.session.copy(),
            tick=self.tick,
        )

    def snapshot(self) -> "Snapshot":
        return Snapshot(
            left_y=self.left.y,
            right_y=self.right.y,
            ball_x=self.ball.x,
            ball_y=self.ball.y,
            score_left=self.score.left,
            score_right=self.score.right,
            paused=self.session.paused,
            ai_enabled=self.session.ai_enabled,
            tick=self.tick,
        )


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a completed tick, handed to renderers."""
    left_y: float
    right_y: float
    ball_x: float
    ball_y: float
    score_left: int
    score_right: int
    paused: bool
    ai_enabled: bool = False
    tick: int = 0


@dataclass
class WallBounce:
    """Ball reflected off the top or bottom wall."""
    edge: str  # "top" or "bottom"
    x: float
    y: float
    tick: int


@dataclass
class PaddleHit:
    """Ball returned by a paddle."""
    side: str  # "left" or "right"
    offset: float  # normalized impact offset, -1 (top tip) .. +1 (bottom tip)
    vx: float  # post-hit velocity
    vy: float
    tick: int


@dataclass
class PointScored:
    """Ball left the court; `scorer` is the side that won the point."""
    scorer: str  # "left" or "right"
    score_left: int
    score_right: int
    tick: int
    speed: Optional[float] = None  # |vx| at the moment the ball left
