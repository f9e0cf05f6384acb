"""
Half-line through the scene.

Points on the ray are origin + t * direction. Tracing only accepts hits
with t inside an open interval that starts just above zero.
"""

from __future__ import annotations
from .vec3 import Vec3, Point3


class Ray:
    """Origin plus direction. Directions built by the camera and the
    tracer are unit length, so t is a distance for those rays."""

    __slots__ = ('origin', 'direction')

    def __init__(self, origin: Point3, direction: Vec3):
        self.origin = origin
        self.direction = direction

    def at(self, t: float) -> Point3:
        """Point reached after travelling t along the direction."""
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"
