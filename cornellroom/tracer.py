"""
Recursive ray evaluation - the heart of the ray tracer.

trace_ray finds the nearest surface along a ray and shades it according to
its material:
- Mirror: trace the reflected ray and scale it by the mirror strength
- Dielectric: blend a reflected and a refracted ray with a fixed fraction
- Diffuse: ambient + Lambertian + Phong from every unoccluded point light

Recursion is bounded by `depth`; a ray that runs out of depth or escapes the
scene contributes black. The index of refraction of the medium the ray is
travelling through is carried along so rays entering and leaving glass
bend correctly.
"""

from __future__ import annotations
import math
from typing import Sequence

from .vec3 import Color, BLACK
from .ray import Ray
from .shapes import Hittable, HitRecord
from .lights import PointLight

AMBIENT_IOR = 1.0
AMBIENT_FACTOR = 0.02

# Ray parameter range for scene queries; T_MIN rejects self-intersection
T_MIN = 1e-4
T_MAX = 1e30

# Offsets applied to secondary ray origins
MIRROR_OFFSET = 1e-4
DIELECTRIC_OFFSET = 1e-3
SHADOW_OFFSET = 1e-3


def trace_ray(
    ray: Ray,
    world: Hittable,
    lights: Sequence[PointLight],
    depth: int,
    medium_ior: float = AMBIENT_IOR
) -> Color:
    """Compute the linear color seen along a ray.

    Args:
        ray: The ray to trace
        world: The scene to trace against
        lights: Point lights illuminating the scene
        depth: Remaining recursion budget
        medium_ior: Index of refraction of the medium the ray travels in

    Returns:
        Linear RGB color for this ray
    """
    if depth <= 0:
        return BLACK

    hit = world.hit(ray, T_MIN, T_MAX)
    if hit is None:
        return BLACK

    material = hit.material
    if material.is_mirror:
        return _shade_mirror(ray, hit, world, lights, depth, medium_ior)
    if material.is_transparent:
        return _shade_dielectric(ray, hit, world, lights, depth, medium_ior)
    return shade_diffuse(ray, hit, world, lights)


def _shade_mirror(
    ray: Ray,
    hit: HitRecord,
    world: Hittable,
    lights: Sequence[PointLight],
    depth: int,
    medium_ior: float
) -> Color:
    # Pure reflectance, no local shading at the mirror itself
    reflected_dir = ray.direction.reflect(hit.normal).normalize()
    reflected_ray = Ray(hit.point + reflected_dir * MIRROR_OFFSET, reflected_dir)
    reflected = trace_ray(reflected_ray, world, lights, depth - 1, medium_ior)
    return reflected * hit.material.mirror_strength


def _shade_dielectric(
    ray: Ray,
    hit: HitRecord,
    world: Hittable,
    lights: Sequence[PointLight],
    depth: int,
    medium_ior: float
) -> Color:
    material = hit.material
    exiting = not hit.front_face
    if exiting:
        refraction_ratio = material.ior / medium_ior
        next_ior = AMBIENT_IOR
    else:
        refraction_ratio = medium_ior / material.ior
        next_ior = material.ior

    unit_direction = ray.direction.normalize()

    refracted = BLACK
    refracted_dir = unit_direction.refract(hit.normal, refraction_ratio)
    if refracted_dir is not None:
        refracted_ray = Ray(hit.point + refracted_dir * DIELECTRIC_OFFSET, refracted_dir)
        refracted = trace_ray(refracted_ray, world, lights, depth - 1, next_ior)
        refracted = refracted * material.transparency

    # The reflected part is traced even when refraction succeeds
    reflected_dir = unit_direction.reflect(hit.normal).normalize()
    reflected_ray = Ray(hit.point + reflected_dir * DIELECTRIC_OFFSET, reflected_dir)
    reflected = trace_ray(reflected_ray, world, lights, depth - 1, medium_ior)

    kr = material.reflection_factor
    surface = reflected * kr + refracted * (1.0 - kr)
    return surface * material.albedo


def shade_diffuse(
    ray: Ray,
    hit: HitRecord,
    world: Hittable,
    lights: Sequence[PointLight]
) -> Color:
    """Local illumination at a diffuse surface.

    Ambient term plus, for each light that is not occluded, a Lambertian
    term and an optional Phong highlight using the half vector.
    """
    material = hit.material
    point = hit.point
    normal = hit.normal

    color = material.albedo * AMBIENT_FACTOR
    view_dir = (-ray.direction).normalize()
    shadow_origin = point + normal * SHADOW_OFFSET

    for light in lights:
        sample = light.sample(point)

        shadow_ray = Ray(shadow_origin, sample.direction)
        if world.hit(shadow_ray, T_MIN, sample.distance - T_MIN) is not None:
            continue

        n_dot_l = max(0.0, normal.dot(sample.direction))
        color = color + material.albedo * light.color * (n_dot_l * sample.attenuation)

        if material.phong_specular > 0:
            half_vector = (sample.direction + view_dir).normalize()
            n_dot_h = max(0.0, normal.dot(half_vector))
            specular = material.phong_specular * math.pow(n_dot_h, material.phong_power)
            color = color + light.color * (specular * sample.attenuation)

    return color
