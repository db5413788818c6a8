"""Rectangle geometry used by on-screen visibility and containment checks."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Optional, Sequence


@dataclass(frozen=True)
class Viewport:
    """Size of the visible window (or of the whole page)."""

    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    """An axis-aligned box in page coordinates (like ``DOMRect``)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def center_point(self) -> tuple[float, float]:
        return (self.left + self.width / 2, self.top + self.height / 2)

    def center_distance_to(self, other: Rect) -> float:
        (ax, ay), (bx, by) = self.center_point(), other.center_point()
        return math.hypot(ax - bx, ay - by)

    def minimum_edge_distance_to(self, other: Rect) -> float:
        """Shortest distance between the edges of two boxes (0 if they overlap)."""
        if self.right < other.left:
            dx = other.left - self.right
        elif self.left > other.right:
            dx = self.left - other.right
        else:
            dx = 0.0

        if self.bottom < other.top:
            dy = other.top - self.bottom
        elif self.top > other.bottom:
            dy = self.top - other.bottom
        else:
            dy = 0.0

        return math.hypot(dx, dy)

    def nominal_position_to(self, other: Rect) -> Literal["left", "right", "up", "down"]:
        """Where this box lies relative to *other*.

        Raises:
            ValueError: If the boxes intersect.
        """
        if self.right < other.left:
            return "left"
        if self.left > other.right:
            return "right"
        if self.bottom < other.top:
            return "up"
        if self.top > other.bottom:
            return "down"
        raise ValueError("rectangles are intersecting")

    def contains(self, other: Rect) -> bool:
        return (
            self.left <= other.left
            and self.top <= other.top
            and self.right >= other.right
            and self.bottom >= other.bottom
        )

    def _overlaps_box(self, width: float, height: float) -> bool:
        in_horizontal = (
            (0 <= self.left < width)
            or (0 < self.right <= width)
            or (self.left <= 0 and self.right >= width)
        )
        in_vertical = (
            (0 <= self.top < height)
            or (0 < self.bottom <= height)
            or (self.top <= 0 and self.bottom >= height)
        )
        return in_horizontal and in_vertical

    def is_in_viewport(self, viewport: Viewport) -> bool:
        """True if any part of the box is inside *viewport*."""
        return self._overlaps_box(viewport.width, viewport.height)

    def is_in_page(self, page: Viewport) -> bool:
        """True if any part of the box is inside the page body."""
        return self._overlaps_box(page.width, page.height)


def closest_to_upper_left(rects: Sequence[Rect]) -> Optional[int]:
    """Index of the box whose centre is nearest the origin, or ``None``."""
    best: Optional[int] = None
    best_distance = math.inf
    for i, rect in enumerate(rects):
        cx, cy = rect.center_point()
        distance = math.hypot(cx, cy)
        if distance < best_distance:
            best, best_distance = i, distance
    return best


def parse_bbox(value: Optional[str]) -> Optional[Rect]:
    """Parse a ``data-bbox`` value (``"x y w h"``, commas allowed).

    Returns ``None`` for a missing or malformed value.
    """
    if not value:
        return None
    parts = value.replace(",", " ").split()
    if len(parts) != 4:
        return None
    try:
        x, y, w, h = (float(p) for p in parts)
    except ValueError:
        return None
    return Rect(x, y, w, h)
