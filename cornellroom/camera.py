"""
Pinhole camera for the room.

The view plane sits one unit in front of the eye. Its size follows from
the vertical field of view and the image aspect ratio.
"""

from __future__ import annotations
import math
from .vec3 import Vec3, Point3
from .ray import Ray


class Camera:
    """Look-at pinhole camera.

    The basis (u right, v up, w backward) is fixed at construction; a
    camera is never moved after it is built.
    """

    def __init__(
        self,
        look_from: Point3,
        look_at: Point3,
        vup: Vec3 = Vec3(0, 1, 0),
        vfov: float = 90.0,
        aspect_ratio: float = 16.0 / 9.0
    ):
        """
        Args:
            look_from: Eye position
            look_at: Point at the center of the image
            vup: Approximate up direction, must not be parallel to the view
            vfov: Vertical field of view in degrees
            aspect_ratio: Image width divided by image height
        """
        plane_height = 2.0 * math.tan(math.radians(vfov) * 0.5)
        plane_width = plane_height * aspect_ratio

        self.w = (look_from - look_at).normalize()
        self.u = vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        self.origin = look_from
        self.horizontal = self.u * plane_width
        self.vertical = self.v * plane_height
        # Bottom-left corner of the view plane
        self.lower_left_corner = look_from - self.w - (self.horizontal + self.vertical) * 0.5

    def get_ray(self, s: float, t: float) -> Ray:
        """Primary ray through view plane coordinates (s, t).

        s runs left to right and t bottom to top, both over [0, 1].
        The returned direction is unit length.
        """
        target = self.lower_left_corner + self.horizontal * s + self.vertical * t
        return Ray(self.origin, (target - self.origin).normalize())

    def __repr__(self) -> str:
        return f"Camera(origin={self.origin}, forward={-self.w})"
