"""
Point light sources.

A point light has a position, a color and a scalar intensity. It has no
area, so it casts hard shadows. Irradiance falls off as
intensity / (4 * pi * distance^2).
"""

from __future__ import annotations
from dataclasses import dataclass
import math

from .vec3 import Vec3, Point3, Color


@dataclass(frozen=True)
class LightSample:
    """Geometry of a light as seen from a shading point."""
    direction: Vec3         # Unit direction from the point to the light
    distance: float         # Distance to the light
    distance_squared: float
    attenuation: float      # intensity / (4 * pi * distance^2)


class PointLight:
    """Isotropic emitter at a single position, giving hard-edged shadows."""

    __slots__ = ('position', 'color', 'intensity')

    def __init__(self, position: Point3, color: Color, intensity: float = 1.0):
        self.position = position
        self.color = color
        self.intensity = intensity

    def sample(self, hit_point: Point3) -> LightSample:
        """Direction, distance and falloff from hit_point to this light."""
        to_light = self.position - hit_point
        distance_squared = to_light.length_squared()
        distance = math.sqrt(distance_squared)

        return LightSample(
            direction=to_light / distance,
            distance=distance,
            distance_squared=distance_squared,
            attenuation=self.intensity / (4.0 * math.pi * distance_squared)
        )

    def __repr__(self) -> str:
        return f"PointLight(position={self.position}, color={self.color}, intensity={self.intensity})"
