"""Shared collision geometry and mover physics.

Rectangles are represented as pymunk.BB. pymunk names the edges for a y-up
world, so in our y-down world ``bb.bottom`` is the numerically smaller edge
(the visual top) and ``bb.top`` is the visual bottom. Code outside this module
should use the helpers below instead of reading BB edges directly.

Player, Enemy and Boss do not share a base class. Each one owns the fields of
the Mover protocol and calls these functions, so landing and bounds logic has
a single implementation.
"""

from typing import Iterable, Protocol

import pymunk


class Rect(Protocol):
    """Anything with a world-space rectangle."""
    x: float
    y: float
    width: float
    height: float


class Mover(Rect, Protocol):
    """Entity subject to gravity and ground/platform collision."""
    vx: float
    vy: float
    on_ground: bool
    prev_y: float  # y before this tick's vertical move


def aabb(x: float, y: float, width: float, height: float) -> pymunk.BB:
    """Bounding box for a rectangle whose top-left corner is (x, y)."""
    return pymunk.BB(x, y, x + width, y + height)


def bounds_of(rect: Rect) -> pymunk.BB:
    return aabb(rect.x, rect.y, rect.width, rect.height)


def swept_bounds(mover: Mover) -> pymunk.BB:
    """Box covering everything the mover passed through vertically this tick."""
    top = min(mover.prev_y, mover.y)
    return aabb(mover.x, top, mover.width, abs(mover.y - mover.prev_y) + mover.height)


def overlaps(a: pymunk.BB, b: pymunk.BB) -> bool:
    """Strict AABB overlap test. Rectangles that only touch do not overlap.

    pymunk's BB.intersects() counts touching edges, which would make two
    enemies that were just pushed apart collide again on the next tick.
    """
    return (
        a.left < b.right
        and a.right > b.left
        and a.bottom < b.top
        and a.top > b.bottom
    )


def overlap_x(a: pymunk.BB, b: pymunk.BB) -> float:
    """Length of the horizontal overlap (negative when separated)."""
    return min(a.right, b.right) - max(a.left, b.left)


def top_of(bb: pymunk.BB) -> float:
    """Visual top edge (smallest y)."""
    return bb.bottom


def bottom_of(bb: pymunk.BB) -> float:
    """Visual bottom edge (largest y)."""
    return bb.top


def integrate(mover: Mover, gravity: float, dt_scale: float = 1.0) -> None:
    """Apply gravity and velocity for one tick.

    Records the pre-move y so landing checks can use where the mover was
    before the move, and clears on_ground; landing sets it again.
    """
    mover.prev_y = mover.y
    mover.on_ground = False
    mover.vy += gravity * dt_scale
    mover.y += mover.vy * dt_scale
    mover.x += mover.vx * dt_scale


def land_on_platforms(mover: Mover, platforms: Iterable[Rect]) -> bool:
    """Land the mover on the first platform its fall crossed this tick.

    A landing needs a descending mover (vy >= 0) whose pre-move bottom edge
    was at or above the platform top and whose current bottom edge is at or
    below it. Comparing against the pre-move bottom keeps fast falls from
    tunnelling through thin platforms.
    """
    if mover.vy < 0:
        return False

    prev_bottom = mover.prev_y + mover.height
    bottom = mover.y + mover.height
    for plat in platforms:
        if mover.x + mover.width <= plat.x or mover.x >= plat.x + plat.width:
            continue
        if prev_bottom <= plat.y <= bottom:
            mover.y = plat.y - mover.height
            mover.vy = 0.0
            mover.on_ground = True
            return True
    return False


def land_on_ground(mover: Mover, ground_y: float) -> bool:
    """Snap the mover onto the floor line if it reached or passed it."""
    if mover.y + mover.height >= ground_y:
        mover.y = ground_y - mover.height
        mover.vy = 0.0
        mover.on_ground = True
        return True
    return False


def clamp_to_world(mover: Rect, world_width: float) -> int:
    """Clamp x into [0, world_width - width].

    Returns:
        -1 if the left bound was hit, 1 for the right bound, 0 otherwise.
    """
    max_x = world_width - mover.width
    if mover.x < 0:
        mover.x = 0.0
        return -1
    if mover.x > max_x:
        mover.x = max_x
        return 1
    return 0
