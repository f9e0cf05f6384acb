"""
Cornell room scene assembly.

Builds the room, its four objects, the lights and the camera from a
RenderOptions record. The room spans x [-1, 1], y [0, 2], z [-1, 1]; the
camera sits just inside the front wall looking toward the back.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List

from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .shapes import HittableList, Sphere, XYRect, XZRect, YZRect, add_hollow_box
from .materials import Material
from .lights import PointLight
from .options import RenderOptions, MirrorWall, SecondLightPlacement

X0, X1 = -1.0, 1.0
Y0, Y1 = 0.0, 2.0
Z0, Z1 = -1.0, 1.0

PRIMARY_LIGHT_INTENSITY = 20.0

WHITE_WALL = Material(albedo=Color(0.8, 0.8, 0.8), phong_specular=0.08, phong_power=40)
RED_WALL = Material(albedo=Color(0.85, 0.2, 0.2), phong_specular=0.05, phong_power=40)
GREEN_WALL = Material(albedo=Color(0.2, 0.85, 0.2), phong_specular=0.05, phong_power=40)
BLUE_WALL = Material(albedo=Color(0.2, 0.2, 0.85), phong_specular=0.05, phong_power=40)

SPHERE_BASE = Material(albedo=Color(0.75, 0.75, 0.75), phong_specular=0.12, phong_power=80)
CUBE_BASE = Material(albedo=Color(0.75, 0.75, 0.2), phong_specular=0.10, phong_power=60)
GLASS_TINT = Color(0.9, 0.9, 0.9)

SECOND_LIGHT_POSITIONS = {
    SecondLightPlacement.FLOOR: Point3(0.0, Y0 + 0.05, 0.0),
    SecondLightPlacement.RIGHT: Point3(X1 - 0.05, (Y0 + Y1) * 0.5, 0.0),
    SecondLightPlacement.LEFT: Point3(X0 + 0.05, (Y0 + Y1) * 0.5, 0.0),
    SecondLightPlacement.BACK: Point3(0.0, (Y0 + Y1) * 0.5, Z0 + 0.05),
    SecondLightPlacement.FRONT: Point3(0.0, (Y0 + Y1) * 0.5, Z1 - 0.05),
}


@dataclass
class CornellScene:
    """Everything the renderer needs to draw the room."""
    world: HittableList
    camera: Camera
    lights: List[PointLight]


def _wall_material(base: Material, wall: MirrorWall, options: RenderOptions) -> Material:
    if options.mirror_wall is not wall:
        return base
    return base.as_mirror(strength=0.92, phong_specular=0.0, phong_power=1)


def _object_material(base: Material, mirror: bool, glass: bool) -> Material:
    material = base.clone()
    if mirror:
        material = material.as_mirror(strength=0.8, reflection_factor=1.0)
    if glass:
        material = material.as_glass(albedo=GLASS_TINT)
    return material


def build_cornell_room(options: RenderOptions) -> CornellScene:
    """Build the Cornell room described by the options.

    Args:
        options: Render options selecting mirrors, glass and lights

    Returns:
        CornellScene with the world, a camera matching the image aspect
        ratio and one or two lights
    """
    world = HittableList()

    # Walls; normals face into the room
    world.add(YZRect(Y0, Y1, Z0, Z1, X0, _wall_material(RED_WALL, MirrorWall.LEFT, options), flip_normal=False))
    world.add(YZRect(Y0, Y1, Z0, Z1, X1, _wall_material(GREEN_WALL, MirrorWall.RIGHT, options), flip_normal=True))
    world.add(XZRect(X0, X1, Z0, Z1, Y0, _wall_material(WHITE_WALL, MirrorWall.FLOOR, options), flip_normal=False))
    world.add(XZRect(X0, X1, Z0, Z1, Y1, _wall_material(WHITE_WALL, MirrorWall.CEILING, options), flip_normal=True))
    world.add(XYRect(X0, X1, Y0, Y1, Z0, _wall_material(BLUE_WALL, MirrorWall.BACK, options), flip_normal=False))
    world.add(XYRect(X0, X1, Y0, Y1, Z1, _wall_material(WHITE_WALL, MirrorWall.FRONT, options), flip_normal=True))

    left_sphere = _object_material(SPHERE_BASE, mirror=options.mirror_spheres, glass=False)
    right_sphere = _object_material(SPHERE_BASE, mirror=False, glass=options.transparent_spheres)
    world.add(Sphere(Point3(-0.45, 0.35, -0.15), 0.35, left_sphere))
    world.add(Sphere(Point3(0.45, 0.30, 0.25), 0.30, right_sphere))

    left_cube = _object_material(CUBE_BASE, mirror=options.mirror_cubes, glass=False)
    right_cube = _object_material(CUBE_BASE, mirror=False, glass=options.transparent_cubes)
    add_hollow_box(world, Point3(-0.85, 0.0, -0.85), Point3(-0.35, 0.90, -0.35), left_cube)
    add_hollow_box(world, Point3(0.10, 0.0, -0.75), Point3(0.65, 0.60, -0.20), right_cube)

    lights = [PointLight(Point3(0.0, 1.85, 0.0), Color(1.0, 1.0, 1.0), PRIMARY_LIGHT_INTENSITY)]
    if options.second_light is not SecondLightPlacement.NONE:
        lights.append(PointLight(
            SECOND_LIGHT_POSITIONS[options.second_light],
            Color(1.0, 0.98, 0.95),
            PRIMARY_LIGHT_INTENSITY * 0.5
        ))

    camera = Camera(
        look_from=Point3(0.0, 0.8, 0.95),
        look_at=Point3(0.0, 1.0, -0.7),
        vup=Vec3(0, 1, 0),
        vfov=70,
        aspect_ratio=options.aspect_ratio
    )

    return CornellScene(world=world, camera=camera, lights=lights)
