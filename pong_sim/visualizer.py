"""Pygame front-end — window, key mapping, fixed-tick loop, drawing."""

try:
    import pygame
except ImportError:
    pygame = None

from pong_engine.types import Command, PaddleHit, PointScored, Snapshot
from pong_engine.game import GameSession
from pong_engine import court

FPS = 60

# Colors
BG_COLOR = (0, 0, 0)
CENTER_LINE = (64, 64, 64)
WHITE = (255, 255, 255)
TEXT_DIM = (136, 136, 136)
FLASH = (233, 69, 96)

HELP_LINES = [
    "W/S: left player",
    "Up/Down arrows: right player",
    "P: pause | R: reset | A: toggle AI (right)",
]


def key_bindings():
    """Key-down and key-up tables from pygame key codes to Commands."""
    press = {
        pygame.K_w: Command.LEFT_UP,
        pygame.K_s: Command.LEFT_DOWN,
        pygame.K_UP: Command.RIGHT_UP,
        pygame.K_DOWN: Command.RIGHT_DOWN,
        pygame.K_p: Command.PAUSE_TOGGLE,
        pygame.K_r: Command.RESET,
        pygame.K_a: Command.AI_TOGGLE,
    }
    release = {
        pygame.K_w: Command.LEFT_RELEASE,
        pygame.K_s: Command.LEFT_RELEASE,
        pygame.K_UP: Command.RIGHT_RELEASE,
        pygame.K_DOWN: Command.RIGHT_RELEASE,
    }
    return press, release


def _draw_court(surface):
    for y in range(0, court.HEIGHT, 20):
        pygame.draw.rect(surface, CENTER_LINE, (court.WIDTH // 2 - 2, y, 4, 12))


def _draw_scene(surface, snap: Snapshot, fonts, flash_frames: int):
    font_score, font_help, font_pause = fonts
    surface.fill(BG_COLOR)
    _draw_court(surface)

    pygame.draw.rect(
        surface, WHITE,
        (court.LEFT_PADDLE_X, int(snap.left_y), court.PADDLE_WIDTH, court.PADDLE_HEIGHT),
    )
    pygame.draw.rect(
        surface, WHITE,
        (court.RIGHT_PADDLE_X, int(snap.right_y), court.PADDLE_WIDTH, court.PADDLE_HEIGHT),
    )

    ball_color = FLASH if flash_frames > 0 else WHITE
    pygame.draw.ellipse(
        surface, ball_color,
        (int(snap.ball_x), int(snap.ball_y), court.BALL_SIZE, court.BALL_SIZE),
    )

    # Scores centered 50 units either side of the net
    left = font_score.render(str(snap.score_left), True, WHITE)
    right = font_score.render(str(snap.score_right), True, WHITE)
    surface.blit(left, (court.WIDTH // 2 - 50 - left.get_width() // 2, 20))
    surface.blit(right, (court.WIDTH // 2 + 50 - right.get_width() // 2, 20))

    y = court.HEIGHT - 16 * len(HELP_LINES) - 4
    for line in HELP_LINES:
        surface.blit(font_help.render(line, True, TEXT_DIM), (10, y))
        y += 16

    if snap.ai_enabled:
        tag = font_help.render("AI", True, TEXT_DIM)
        surface.blit(tag, (court.WIDTH - tag.get_width() - 10, 10))

    if snap.paused:
        msg = font_pause.render("PAUSED", True, WHITE)
        surface.blit(msg, (court.WIDTH // 2 - msg.get_width() // 2, court.HEIGHT // 2 - msg.get_height() // 2))


def run_visualizer(ai_enabled=False):
    """Open the game window and run until it is closed."""
    if pygame is None:
        print("ERROR: pygame is not installed. Run: pip install pygame")
        return

    pygame.init()
    screen = pygame.display.set_mode((court.WIDTH, court.HEIGHT))
    pygame.display.set_caption("Pong")
    clock = pygame.time.Clock()

    fonts = (
        pygame.font.SysFont("consolas", 36, bold=True),
        pygame.font.SysFont("sans", 14),
        pygame.font.SysFont("consolas", 48, bold=True),
    )

    press, release = key_bindings()
    session = GameSession(ai_enabled=ai_enabled)
    snap = session.snapshot()
    accumulator = 0.0
    flash_frames = 0

    running = True
    while running:
        accumulator += clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_ESCAPE, pygame.K_q):
                    running = False
                elif event.key in press:
                    session.submit(press[event.key])
            elif event.type == pygame.KEYUP and event.key in release:
                session.submit(release[event.key])

        # Fixed timestep; drop the backlog after a long stall
        ticks = 0
        while accumulator >= court.TICK_MS and ticks < court.MAX_TICKS_PER_FRAME:
            snap, events = session.tick()
            accumulator -= court.TICK_MS
            ticks += 1
            if any(isinstance(e, (PaddleHit, PointScored)) for e in events):
                flash_frames = 4
        if ticks == court.MAX_TICKS_PER_FRAME:
            accumulator = 0.0

        _draw_scene(screen, snap, fonts, flash_frames)
        flash_frames = max(0, flash_frames - 1)
        pygame.display.flip()

    pygame.quit()
