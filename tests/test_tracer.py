"""Tests for recursive ray evaluation."""

import pytest
import math
from cornellroom.vec3 import Vec3, Point3, Color
from cornellroom.ray import Ray
from cornellroom.shapes import Sphere, XYRect, XZRect, YZRect, HittableList
from cornellroom.materials import Material
from cornellroom.lights import PointLight
from cornellroom.tracer import trace_ray, shade_diffuse, AMBIENT_FACTOR

WHITE_LIGHT = Color(1, 1, 1)


def is_black(color):
    return color.to_array().tolist() == [0.0, 0.0, 0.0]


class TestTerminalCases:
    """Test recursion cutoff and empty scenes."""

    def test_zero_depth_is_black(self):
        world = HittableList([XYRect(-1, 1, -1, 1, -1.0, Material())])
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))
        lights = [PointLight(Point3(0, 0, 0), WHITE_LIGHT, 10.0)]

        assert is_black(trace_ray(ray, world, lights, 0))
        assert is_black(trace_ray(ray, world, lights, -3))

    def test_miss_is_black(self):
        world = HittableList([Sphere(Point3(0, 0, -5), 1.0, Material())])
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, 1))
        lights = [PointLight(Point3(0, 0, 0), WHITE_LIGHT, 10.0)]

        assert is_black(trace_ray(ray, world, lights, 5))

    def test_no_lights_gives_ambient(self):
        albedo = Color(0.5, 0.25, 1.0)
        world = HittableList([XYRect(-1, 1, -1, 1, -1.0, Material(albedo=albedo))])
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))

        assert trace_ray(ray, world, [], 3) == albedo * AMBIENT_FACTOR

    def test_primitive_without_material_shades_as_diffuse(self):
        world = HittableList([Sphere(Point3(0, 0, -3), 1.0)])
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))

        assert trace_ray(ray, world, [], 3) == Material().albedo * AMBIENT_FACTOR


class TestDiffuseShading:
    """Test ambient, Lambertian and Phong terms and shadows."""

    def setup_method(self):
        self.albedo = Color(0.8, 0.5, 0.2)
        self.floor = XZRect(-2, 2, -2, 2, 0.0, Material(albedo=self.albedo, phong_specular=0.0))
        self.light = PointLight(Point3(0, 2, 0), WHITE_LIGHT, 20.0)
        self.ray = Ray(Point3(1, 1, 0), Vec3(-1, -1, 0).normalize())

    def test_unoccluded_light_adds_diffuse(self):
        world = HittableList([self.floor])
        hit = self.floor.hit(self.ray, 1e-4, 1e30)
        color = shade_diffuse(self.ray, hit, world, [self.light])

        ambient = self.albedo * AMBIENT_FACTOR
        for channel in range(3):
            assert color[channel] > ambient[channel]

    def test_lambert_term_value(self):
        world = HittableList([self.floor])
        hit = self.floor.hit(self.ray, 1e-4, 1e30)
        color = shade_diffuse(self.ray, hit, world, [self.light])

        # Light straight above, N.L = 1, distance 2
        attenuation = 20.0 / (4.0 * math.pi * 4.0)
        expected = self.albedo * AMBIENT_FACTOR + self.albedo * attenuation
        assert color == expected

    def test_occluded_light_contributes_nothing(self):
        blocker = Sphere(Point3(0, 1, 0), 0.3, Material())
        world = HittableList([self.floor, blocker])
        hit = self.floor.hit(self.ray, 1e-4, 1e30)
        color = shade_diffuse(self.ray, hit, world, [self.light])

        assert color == self.albedo * AMBIENT_FACTOR

    def test_occluder_beyond_light_does_not_shadow(self):
        beyond = Sphere(Point3(0, 3, 0), 0.3, Material())
        hit = self.floor.hit(self.ray, 1e-4, 1e30)

        lit = shade_diffuse(self.ray, hit, HittableList([self.floor]), [self.light])
        with_beyond = shade_diffuse(self.ray, hit, HittableList([self.floor, beyond]), [self.light])
        assert lit == with_beyond

    def test_light_behind_surface_adds_nothing(self):
        below = PointLight(Point3(0, -2, 0), WHITE_LIGHT, 20.0)
        world = HittableList([self.floor])
        hit = self.floor.hit(self.ray, 1e-4, 1e30)

        # The floor itself blocks a light below it
        color = shade_diffuse(self.ray, hit, world, [below])
        assert color == self.albedo * AMBIENT_FACTOR

    def test_phong_highlight_adds_light(self):
        shiny = XZRect(-2, 2, -2, 2, 0.0, Material(albedo=self.albedo, phong_specular=0.5, phong_power=10))
        matte_hit = self.floor.hit(self.ray, 1e-4, 1e30)
        shiny_hit = shiny.hit(self.ray, 1e-4, 1e30)

        matte = shade_diffuse(self.ray, matte_hit, HittableList([self.floor]), [self.light])
        glossy = shade_diffuse(self.ray, shiny_hit, HittableList([shiny]), [self.light])

        for channel in range(3):
            assert glossy[channel] > matte[channel]

    def test_lights_sum(self):
        world = HittableList([self.floor])
        hit = self.floor.hit(self.ray, 1e-4, 1e30)
        other = PointLight(Point3(1, 2, 1), Color(1, 0.98, 0.95), 10.0)

        ambient = self.albedo * AMBIENT_FACTOR
        one = shade_diffuse(self.ray, hit, world, [self.light])
        two = shade_diffuse(self.ray, hit, world, [other])
        both = shade_diffuse(self.ray, hit, world, [self.light, other])
        assert both == one + two - ambient


class TestMirror:
    """Test mirror reflection."""

    def setup_method(self):
        self.mirror = Material(is_mirror=True, mirror_strength=0.8)
        self.floor = XZRect(-1, 1, -1, 1, 0.0, self.mirror)
        self.wall = YZRect(0, 4, -1, 1, 2.0, Material(albedo=Color(0.2, 0.6, 0.9)), flip_normal=True)
        self.light = PointLight(Point3(1, 3, 0), WHITE_LIGHT, 20.0)
        self.ray = Ray(Point3(-1, 1, 0), Vec3(1, -1, 0).normalize())

    def test_reflection_into_nothing_is_black(self):
        world = HittableList([self.floor])
        color = trace_ray(self.ray, world, [self.light], 4)
        assert is_black(color)

    def test_reflection_is_scaled_diffuse(self):
        world = HittableList([self.floor, self.wall])
        color = trace_ray(self.ray, world, [self.light], 4)

        hit = self.floor.hit(self.ray, 1e-4, 1e30)
        reflected_dir = self.ray.direction.reflect(hit.normal).normalize()
        reflected = trace_ray(Ray(hit.point + reflected_dir * 1e-4, reflected_dir), world, [self.light], 3)

        assert reflected.length() > 0
        assert color == reflected * 0.8

    def test_reflection_needs_depth(self):
        world = HittableList([self.floor, self.wall])
        assert is_black(trace_ray(self.ray, world, [self.light], 1))
        assert not is_black(trace_ray(self.ray, world, [self.light], 2))

    def test_mirror_takes_precedence_over_transparency(self):
        both = Material(is_mirror=True, mirror_strength=0.8, is_transparent=True, ior=1.5)
        floor_both = XZRect(-1, 1, -1, 1, 0.0, both)

        mirror_only = trace_ray(self.ray, HittableList([self.floor, self.wall]), [self.light], 4)
        mixed = trace_ray(self.ray, HittableList([floor_both, self.wall]), [self.light], 4)
        assert mixed == mirror_only


class TestDielectric:
    """Test refraction with a fixed reflection fraction."""

    def setup_method(self):
        self.tint = Color(0.9, 0.8, 0.7)
        self.back = XYRect(-5, 5, -5, 5, -2.0, Material(albedo=Color(0.7, 0.7, 0.7)))
        self.light = PointLight(Point3(0.5, 0, -1), WHITE_LIGHT, 20.0)
        self.ray = Ray(Point3(0, 0, 1), Vec3(0, 0, -1))

    def _pane(self, reflection_factor):
        glass = Material(
            albedo=self.tint,
            is_transparent=True,
            ior=1.5,
            transparency=0.95,
            reflection_factor=reflection_factor
        )
        return XYRect(-1, 1, -1, 1, 0.0, glass)

    def _behind_pane(self, world):
        # Normal incidence: the refracted ray continues straight on
        straight = Ray(Point3(0, 0, -1e-3), Vec3(0, 0, -1))
        return trace_ray(straight, world, [self.light], 2, 1.5)

    def test_pure_refraction(self):
        world = HittableList([self._pane(0.0), self.back])
        color = trace_ray(self.ray, world, [self.light], 3)

        expected = self._behind_pane(world) * 0.95 * self.tint
        assert expected.length() > 0
        assert color == expected

    def test_blend_with_reflection_fraction(self):
        world = HittableList([self._pane(0.25), self.back])
        color = trace_ray(self.ray, world, [self.light], 3)

        # The reflected ray leaves the scene, so only the refracted share remains
        expected = self._behind_pane(world) * 0.95 * 0.75 * self.tint
        assert color == expected

    def test_pure_reflection_fraction(self):
        world = HittableList([self._pane(1.0), self.back])
        color = trace_ray(self.ray, world, [self.light], 3)
        assert is_black(color)

    def test_total_internal_reflection_keeps_reflection_only(self):
        glass = Material(albedo=self.tint, is_transparent=True, ior=1.5, reflection_factor=0.3)
        # Outward normal points away from the incoming ray: the ray is exiting
        pane = XYRect(-10, 10, -10, 10, 0.0, glass, flip_normal=True)
        wall = YZRect(-5, 5, 0, 5, 3.0, Material(albedo=Color(0.6, 0.6, 0.6)), flip_normal=True)
        below = XYRect(-10, 10, -10, 10, -1.0, Material(albedo=Color(1, 1, 1)))
        light = PointLight(Point3(2, 0, 2), WHITE_LIGHT, 20.0)
        world = HittableList([pane, wall, below])

        direction = Vec3(0.9, 0, -0.1).normalize()
        ray = Ray(Point3(0, 0, 0) - direction * 3.0, direction)
        color = trace_ray(ray, world, [light], 3)

        hit = pane.hit(ray, 1e-4, 1e30)
        assert hit.front_face is False
        reflected_dir = direction.reflect(hit.normal).normalize()
        reflected = trace_ray(Ray(hit.point + reflected_dir * 1e-3, reflected_dir), world, [light], 2)

        assert reflected.length() > 0
        assert color == reflected * 0.3 * self.tint

    def test_entering_uses_ratio_of_medium_to_material(self):
        # With matching indices the ray passes straight through even at an angle
        glass = Material(is_transparent=True, ior=1.5, transparency=1.0, reflection_factor=0.0)
        pane = XYRect(-10, 10, -10, 10, 0.0, glass)
        world = HittableList([pane, self.back])
        direction = Vec3(0.3, 0, -1).normalize()
        ray = Ray(Point3(0, 0, 0) - direction, direction)

        color = trace_ray(ray, world, [self.light], 3, medium_ior=1.5)
        hit = pane.hit(ray, 1e-4, 1e30)
        straight = trace_ray(Ray(hit.point + direction * 1e-3, direction), world, [self.light], 2)
        assert color == straight

    def test_exiting_uses_ratio_of_material_to_medium(self):
        # A flipped pane is seen from its back side: the ray leaves glass of index 1.5 into air
        glass = Material(is_transparent=True, ior=1.5, transparency=1.0, reflection_factor=0.0)
        pane = XYRect(-10, 10, -10, 10, 0.0, glass, flip_normal=True)
        world = HittableList([pane, self.back])
        direction = Vec3(0.3, 0, -1).normalize()
        ray = Ray(Point3(0, 0, 0) - direction, direction)

        color = trace_ray(ray, world, [self.light], 3, medium_ior=1.0)

        hit = pane.hit(ray, 1e-4, 1e30)
        assert hit.front_face is False
        bent = direction.refract(hit.normal, 1.5 / 1.0)
        # Leaving the denser side bends away from the normal
        assert abs(bent.x) > abs(direction.x)

        expected = trace_ray(Ray(hit.point + bent * 1e-3, bent), world, [self.light], 2, 1.0)
        assert expected.length() > 0
        assert color == expected

    def test_exit_returns_to_ambient_medium(self):
        glass = Material(is_transparent=True, ior=1.5, transparency=1.0, reflection_factor=0.0)
        exit_pane = XYRect(-10, 10, -10, 10, 0.0, glass, flip_normal=True)
        entry_pane = XYRect(-10, 10, -10, 10, -0.5, glass)
        light = PointLight(Point3(1, 1, -1.5), WHITE_LIGHT, 20.0)
        world = HittableList([exit_pane, entry_pane, self.back])
        direction = Vec3(0.3, 0, -1).normalize()
        ray = Ray(Point3(0, 0, 0) - direction, direction)

        color = trace_ray(ray, world, [light], 3, medium_ior=1.5)

        # Matching indices on the way out: no bending at the first pane
        exit_hit = exit_pane.hit(ray, 1e-4, 1e30)
        assert exit_hit.front_face is False
        after_exit = Ray(exit_hit.point + direction * 1e-3, direction)

        # The second pane is entered from air, so the ray bends again
        entry_hit = entry_pane.hit(after_exit, 1e-4, 1e30)
        assert entry_hit.front_face is True
        bent = direction.refract(entry_hit.normal, 1.0 / 1.5)
        assert abs(bent.x) < abs(direction.x)

        expected = trace_ray(Ray(entry_hit.point + bent * 1e-3, bent), world, [light], 1, 1.5)
        straight = trace_ray(Ray(entry_hit.point + direction * 1e-3, direction), world, [light], 1, 1.5)
        assert expected.length() > 0
        assert expected != straight
        assert color == expected
