"""
Surface materials.

A single Material type covers every surface in the room. Which shading
branch applies is decided by its flags:
- mirror: pure reflection scaled by mirror_strength
- transparent: refraction plus a fixed-fraction reflection, tinted by albedo
- neither: ambient + Lambertian diffuse + Phong highlight

If both flags are set, mirror takes precedence and transparency is ignored.

Materials are shared between primitives and treated as immutable while
rendering. To customize one instance, clone it and change the copy.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Optional

from .vec3 import Color


@dataclass
class Material:
    """Optical properties of a surface.

    Attributes:
        albedo: Base diffuse color (also tints light passing through glass)
        is_mirror: Reflect incoming light instead of shading
        mirror_strength: Multiplier applied to reflected light
        is_transparent: Refract and reflect as a dielectric
        ior: Index of refraction of the medium behind the surface
        transparency: Multiplier applied to refracted light
        reflection_factor: Fixed fraction of light treated as reflected at a
            dielectric interface (not angle dependent)
        phong_specular: Intensity of the Phong highlight (0 disables it)
        phong_power: Phong exponent, larger is a tighter highlight
    """
    albedo: Color = field(default_factory=lambda: Color(1.0, 1.0, 1.0))
    is_mirror: bool = False
    mirror_strength: float = 0.85
    is_transparent: bool = False
    ior: float = 1.5
    transparency: float = 0.98
    reflection_factor: float = 0.1
    phong_specular: float = 0.1
    phong_power: float = 50.0

    def clone(self, **changes) -> Material:
        """Return an independent copy, optionally with some fields changed."""
        return replace(self, **changes)

    def as_mirror(self, strength: float = 0.8, **changes) -> Material:
        """Return a mirror copy of this material."""
        return self.clone(is_mirror=True, mirror_strength=strength, **changes)

    def as_glass(
        self,
        ior: float = 1.1,
        transparency: float = 0.95,
        reflection_factor: float = 0.1,
        albedo: Optional[Color] = None
    ) -> Material:
        """Return a dielectric copy of this material."""
        return self.clone(
            is_transparent=True,
            ior=ior,
            transparency=transparency,
            reflection_factor=reflection_factor,
            albedo=albedo if albedo is not None else self.albedo
        )

    @property
    def is_diffuse(self) -> bool:
        return not self.is_mirror and not self.is_transparent
