"""Ball physics: speed override, edge reflection, contact with tracked objects."""

from game.types import Ball, Rect


def _signed(component: int, speed: int) -> int:
    # zero counts as moving in the positive direction
    return -speed if component < 0 else speed


def apply_speed(ball: Ball, speed: int) -> Ball:
    """Overwrite the velocity magnitude on both axes, keeping each sign.

    The speed slider is re-read every tick, so a change takes effect on the
    next move without altering the ball's direction.
    """
    ball.dx = _signed(ball.dx, speed)
    ball.dy = _signed(ball.dy, speed)
    return ball


def move(ball: Ball) -> Ball:
    """Advance one step and reflect velocity at the field edges.

    The edge test runs on the updated position, so the ball may overshoot
    an edge by up to one step before it turns around. There is no clamping.
    """
    ball.x += ball.dx
    ball.y += ball.dy

    if ball.x < ball.r or ball.x >= ball.width - ball.r:
        ball.dx = -ball.dx
    if ball.y < ball.r or ball.y >= ball.height - ball.r:
        ball.dy = -ball.dy

    return ball


def check_contact(ball: Ball, rects: list[Rect], contacted: bool = False) -> bool:
    """Bounce the ball back if it sits strictly inside any rectangle.

    Both velocity components are negated at most once per call, no matter
    how many rectangles contain the ball. Returns the new contact flag.
    A ball that stays inside a rectangle on the next tick bounces again,
    since the flag only lives for one tick.
    """
    for rect in rects:
        if contacted:
            break
        if rect.contains(ball.x, ball.y):
            ball.dx = -ball.dx
            ball.dy = -ball.dy
            contacted = True
    return contacted
