"""Court dimensions and fixed tuning constants.

All values in logical units (the renderer maps one unit to one pixel) and
ticks. Speeds are units per tick; one tick is TICK_MS milliseconds.
"""

# Playfield
WIDTH = 800
HEIGHT = 500

# Paddles
PADDLE_WIDTH = 12
PADDLE_HEIGHT = 80
PADDLE_MARGIN = 20  # gap between each paddle and its side wall
PADDLE_SPEED = 6.0

# Left paddle spans [20, 32], right paddle spans [768, 780]
LEFT_PADDLE_X = PADDLE_MARGIN
RIGHT_PADDLE_X = WIDTH - PADDLE_MARGIN - PADDLE_WIDTH

# Ball
BALL_SIZE = 14
BALL_SPEED_X = 4.0  # serve magnitudes, sign picked at random on every reset
BALL_SPEED_Y = 3.0

# Paddle response
DEFLECTION = 5.0  # vy at the very tip of the paddle
ESCALATION = 1.03  # |vx| multiplier per paddle hit

# Right-paddle AI
AI_SPEED = 4.0
AI_DEAD_ZONE = 10.0

# Fixed timestep
TICK_MS = 10
MAX_TICKS_PER_FRAME = 10  # catch-up cap after a stalled frame

# Starting positions
PADDLE_START_Y = (HEIGHT - PADDLE_HEIGHT) / 2
BALL_START_X = WIDTH / 2
BALL_START_Y = HEIGHT / 2
