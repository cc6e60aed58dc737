"""Matplotlib analysis charts — rally speed, rally lengths, deflection profile, AI matchups."""

import os

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

from pong_engine.types import BallState, GameState, Intent
from pong_engine.physics import step
from pong_engine.game import simulate_session
from pong_engine import court


def _style_chart(ax, title):
    """Apply dark theme styling to chart."""
    ax.set_facecolor("#0f0f1a")
    ax.set_title(title, color="#e0e0e0", fontsize=13, fontweight="bold", pad=12)
    ax.tick_params(colors="#888888", labelsize=9)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.spines["bottom"].set_color("#333333")
    ax.spines["left"].set_color("#333333")
    ax.xaxis.label.set_color("#aaaaaa")
    ax.yaxis.label.set_color("#aaaaaa")


def _finish(fig, save_path):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def chart_speed_over_time(ticks=3000, seed=42, save_path=None):
    """Chart 1: Horizontal ball speed per tick.

    Saw-tooth: |vx| climbs by 3% on every paddle hit and drops back to the
    serve speed after each point.
    """
    result = simulate_session(ticks=ticks, seed=seed)
    speeds = np.array(result.speeds)
    t = np.arange(len(speeds)) * court.TICK_MS / 1000.0

    fig, ax = plt.subplots(figsize=(10, 4))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Ball Speed Escalation")

    ax.plot(t, speeds, color="#4ecdc4", linewidth=1.2)
    ax.axhline(y=court.BALL_SPEED_X, color="#e94560", linestyle="--", linewidth=1, alpha=0.7)
    ax.text(t[-1] if len(t) else 0, court.BALL_SPEED_X + 0.1, "Serve speed",
            color="#e94560", fontsize=9, ha="right")

    ax.set_xlabel("Time (s)")
    ax.set_ylabel("|vx| (units/tick)")
    ax.grid(True, alpha=0.15)
    return _finish(fig, save_path)


def chart_rally_length_distribution(n_sessions=3, ticks=6000, save_path=None):
    """Chart 2: Histogram of paddle hits per rally."""
    hits = []
    for seed in range(n_sessions):
        result = simulate_session(ticks=ticks, seed=seed)
        hits.extend(r.hits for r in result.rallies)

    fig, ax = plt.subplots(figsize=(8, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Rally Length Distribution")

    if hits:
        bins = np.arange(0, max(hits) + 2) - 0.5
        ax.hist(hits, bins=bins, color="#e94560", alpha=0.85, edgecolor="#0f0f1a")
        mean = float(np.mean(hits))
        ax.axvline(mean, color="#ffd93d", linestyle="--", linewidth=1.5)
        ax.text(mean, ax.get_ylim()[1] * 0.95, f"  mean {mean:.1f}", color="#ffd93d", fontsize=9)

    ax.set_xlabel("Paddle hits per rally")
    ax.set_ylabel("Rallies")
    ax.grid(True, alpha=0.15, axis="y")
    return _finish(fig, save_path)


def deflection_profile(samples=41):
    """Outgoing vy for impacts spread over the left paddle's height.

    Fires a flat ball (vy = 0) into a centered paddle at each offset and
    returns (offsets, vys) as numpy arrays.
    """
    paddle_y = court.PADDLE_START_Y
    face = court.LEFT_PADDLE_X + court.PADDLE_WIDTH
    lo = paddle_y - court.BALL_SIZE / 2
    hi = paddle_y + court.PADDLE_HEIGHT - court.BALL_SIZE / 2
    offsets, vys = [], []

    for ball_y in np.linspace(lo, hi, samples):
        state = GameState()
        state.left.y = paddle_y
        state.ball = BallState(x=face + court.BALL_SPEED_X, y=float(ball_y), vx=-court.BALL_SPEED_X, vy=0.0)
        nxt, _ = step(state, Intent.HOLD, Intent.HOLD)
        center_offset = (ball_y + court.BALL_SIZE / 2) - (paddle_y + court.PADDLE_HEIGHT / 2)
        offsets.append(center_offset)
        vys.append(nxt.ball.vy)

    return np.array(offsets), np.array(vys)


def chart_deflection_profile(save_path=None):
    """Chart 3: Outgoing vy against impact offset (linear by construction)."""
    offsets, vys = deflection_profile()

    fig, ax = plt.subplots(figsize=(7, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Paddle Deflection Profile")

    ax.plot(offsets, vys, color="#4ecdc4", marker="o", markersize=4, linewidth=1.5)
    ax.axhline(0, color="#333333", linewidth=1)
    ax.axvline(0, color="#333333", linewidth=1)

    ax.set_xlabel("Impact offset from paddle center (units)")
    ax.set_ylabel("Outgoing vy (units/tick)")
    ax.grid(True, alpha=0.15)
    return _finish(fig, save_path)


def chart_ai_matchup(n_sessions=5, ticks=6000, save_path=None):
    """Chart 4: Points won by a human-speed tracker against the built-in AI."""
    left_points, right_points = [], []
    for seed in range(n_sessions):
        result = simulate_session(ticks=ticks, seed=seed)
        left_points.append(result.stats["left_points"])
        right_points.append(result.stats["right_points"])

    fig, ax = plt.subplots(figsize=(8, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Tracker (left) vs Built-in AI (right)")

    x = np.arange(n_sessions)
    width = 0.35
    ax.bar(x - width / 2, left_points, width, color="#4ecdc4", label="Left tracker", alpha=0.85)
    ax.bar(x + width / 2, right_points, width, color="#e94560", label="Right AI", alpha=0.85)

    ax.set_xticks(x)
    ax.set_xticklabels([f"seed {s}" for s in range(n_sessions)])
    ax.set_ylabel("Points")
    ax.legend(facecolor="#1a1a2e", edgecolor="#333", labelcolor="#e0e0e0", fontsize=9)
    ax.grid(True, alpha=0.15, axis="y")
    return _finish(fig, save_path)


def generate_all_charts(output_dir="."):
    """Generate all analysis charts and save to output directory."""
    os.makedirs(output_dir, exist_ok=True)

    charts = [
        ("chart_speed_over_time.png", chart_speed_over_time),
        ("chart_rally_distribution.png", chart_rally_length_distribution),
        ("chart_deflection_profile.png", chart_deflection_profile),
        ("chart_ai_matchup.png", chart_ai_matchup),
    ]

    paths = []
    for name, chart in charts:
        path = os.path.join(output_dir, name)
        chart(save_path=path)
        paths.append(path)
        print(f"  Saved: {path}")

    plt.close("all")
    return paths
