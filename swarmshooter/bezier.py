"""Cubic Bezier curves and paths sampled into waypoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from pygame.math import Vector2


@dataclass
class BezierCurve:
    """A cubic Bezier curve given by its four control points."""

    p0: Vector2
    p1: Vector2
    p2: Vector2
    p3: Vector2

    def __post_init__(self) -> None:
        self.p0 = Vector2(self.p0)
        self.p1 = Vector2(self.p1)
        self.p2 = Vector2(self.p2)
        self.p3 = Vector2(self.p3)

    def point_at(self, t: float) -> Vector2:
        """Return the point on the curve at parameter ``t`` in [0, 1]."""
        u = 1.0 - t
        return (
            self.p0 * (u * u * u)
            + self.p1 * (3.0 * u * u * t)
            + self.p2 * (3.0 * u * t * t)
            + self.p3 * (t * t * t)
        )


@dataclass
class BezierPath:
    """A chain of Bezier curves, each sampled a given number of times."""

    _segments: List[tuple] = field(default_factory=list)

    def add_curve(self, curve: BezierCurve, samples: int) -> None:
        """Append ``curve``, to be sampled in ``samples`` equal steps."""
        if samples < 1:
            raise ValueError("samples must be at least 1")
        self._segments.append((curve, samples))

    def sample(self) -> List[Vector2]:
        """Return the waypoints of every curve, each from t=0 to t=1 inclusive."""
        return [
            curve.point_at(step / samples)
            for curve, samples in self._segments
            for step in range(samples + 1)
        ]