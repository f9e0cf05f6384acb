"""
Room geometry: spheres, axis-aligned rectangles and a flat object list.

Every primitive answers the same question through `hit`: the nearest
intersection with a ray inside an open t interval, or None. There is no
acceleration structure; the list tests every primitive in order.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional
import math

from .vec3 import Vec3, Point3
from .ray import Ray
from .materials import Material

# Ray direction components smaller than this are treated as parallel to a plane
PARALLEL_EPSILON = 1e-12


@dataclass(frozen=True)
class HitRecord:
    """Result of a successful intersection.

    `normal` is unit length and always faces the incoming ray.
    `front_face` tells whether the ray arrived on the side the primitive's
    outward normal points to.
    """
    t: float
    point: Point3
    normal: Vec3
    front_face: bool
    material: Material

    @classmethod
    def from_outward_normal(
        cls,
        ray: Ray,
        t: float,
        point: Point3,
        outward_normal: Vec3,
        material: Material
    ) -> HitRecord:
        """Orient the geometric normal against the ray and record which side was hit."""
        front_face = ray.direction.dot(outward_normal) < 0
        return cls(
            t=t,
            point=point,
            normal=outward_normal if front_face else -outward_normal,
            front_face=front_face,
            material=material
        )


class Hittable(ABC):
    """Anything a ray can intersect."""

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Nearest intersection with t_min <= t <= t_max, or None."""


class Sphere(Hittable):
    """Solid sphere; its outward normal points away from the center."""

    def __init__(self, center: Point3, radius: float, material: Optional[Material] = None):
        if radius <= 0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        self.center = center
        self.radius = radius
        self.material = material if material is not None else Material()

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Solve |O + tD - C|^2 = r^2 in half-b form, nearer root first."""
        to_origin = ray.origin - self.center
        a = ray.direction.length_squared()
        half_b = to_origin.dot(ray.direction)
        c = to_origin.length_squared() - self.radius * self.radius

        disc = half_b * half_b - a * c
        if disc < 0:
            return None

        root_disc = math.sqrt(disc)
        for t in ((-half_b - root_disc) / a, (-half_b + root_disc) / a):
            if t_min <= t <= t_max:
                point = ray.at(t)
                normal = (point - self.center) / self.radius
                return HitRecord.from_outward_normal(ray, t, point, normal, self.material)
        return None

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


class AxisAlignedRect(Hittable):
    """A rectangle lying in a plane perpendicular to one coordinate axis.

    Subclasses pick the plane by setting the axis indices: `normal_axis` is
    the axis the plane is perpendicular to, `axis_a` and `axis_b` are the
    two in-plane axes bounded by [a0, a1] and [b0, b1].
    """

    normal_axis: int = 2
    axis_a: int = 0
    axis_b: int = 1

    def __init__(
        self,
        a0: float,
        a1: float,
        b0: float,
        b1: float,
        k: float,
        material: Optional[Material] = None,
        flip_normal: bool = False
    ):
        """Create a rectangle.

        Args:
            a0, a1: Bounds along the first in-plane axis
            b0, b1: Bounds along the second in-plane axis
            k: Plane offset along the normal axis
            material: Material for shading (a default diffuse Material when omitted)
            flip_normal: Point the outward normal along the negative axis
        """
        self.a0 = a0
        self.a1 = a1
        self.b0 = b0
        self.b1 = b1
        self.k = k
        self.material = material if material is not None else Material()
        self.flip_normal = flip_normal

        components = [0.0, 0.0, 0.0]
        components[self.normal_axis] = -1.0 if flip_normal else 1.0
        self.outward_normal = Vec3(*components)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Intersect the ray with the rectangle's plane, then test the bounds.

        Rays parallel to the plane never hit, even when they lie in it.
        """
        direction_k = ray.direction[self.normal_axis]
        if abs(direction_k) < PARALLEL_EPSILON:
            return None

        t = (self.k - ray.origin[self.normal_axis]) / direction_k
        if t < t_min or t > t_max:
            return None

        a = ray.origin[self.axis_a] + t * ray.direction[self.axis_a]
        b = ray.origin[self.axis_b] + t * ray.direction[self.axis_b]
        if a < self.a0 or a > self.a1 or b < self.b0 or b > self.b1:
            return None

        return HitRecord.from_outward_normal(ray, t, ray.at(t), self.outward_normal, self.material)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.a0}, {self.a1}, {self.b0}, {self.b1}, "
            f"k={self.k}, flip_normal={self.flip_normal})"
        )


class XYRect(AxisAlignedRect):
    """Rectangle in the plane z = k, bounded by [x0, x1] x [y0, y1]."""

    normal_axis = 2
    axis_a = 0
    axis_b = 1


class XZRect(AxisAlignedRect):
    """Rectangle in the plane y = k, bounded by [x0, x1] x [z0, z1]."""

    normal_axis = 1
    axis_a = 0
    axis_b = 2


class YZRect(AxisAlignedRect):
    """Rectangle in the plane x = k, bounded by [y0, y1] x [z0, z1]."""

    normal_axis = 0
    axis_a = 1
    axis_b = 2


class HittableList(Hittable):
    """Ordered collection answering nearest-hit queries by linear scan.

    On equal t the object added first wins.
    """

    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: list[Hittable] = list(objects) if objects is not None else []

    def add(self, obj: Hittable) -> None:
        self.objects.append(obj)

    def clear(self) -> None:
        self.objects.clear()

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        nearest: Optional[HitRecord] = None
        for obj in self.objects:
            limit = t_max if nearest is None else nearest.t
            record = obj.hit(ray, t_min, limit)
            if record is not None and (nearest is None or record.t < nearest.t):
                nearest = record
        return nearest

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)


def add_hollow_box(
    world: HittableList,
    minimum: Point3,
    maximum: Point3,
    material: Optional[Material] = None
) -> None:
    """Append the six faces of an axis-aligned box to `world`.

    The box has no interior volume of its own. Faces are added as
    x-min, x-max, y-min, y-max, z-min, z-max, and each outward normal
    points away from the box.
    """
    if material is None:
        material = Material()
    x0, y0, z0 = minimum
    x1, y1, z1 = maximum

    world.add(YZRect(y0, y1, z0, z1, x0, material, flip_normal=True))
    world.add(YZRect(y0, y1, z0, z1, x1, material, flip_normal=False))
    world.add(XZRect(x0, x1, z0, z1, y0, material, flip_normal=True))
    world.add(XZRect(x0, x1, z0, z1, y1, material, flip_normal=False))
    world.add(XYRect(x0, x1, y0, y1, z0, material, flip_normal=True))
    world.add(XYRect(x0, x1, y0, y1, z1, material, flip_normal=False))
