"""
CornellRoom - A Python Whitted-style Ray Tracer

Renders a Cornell-box style room with:
- Spheres and hollow boxes built from axis-aligned rectangles
- Point lights with hard shadows
- Lambertian + Phong shading
- Mirror reflection
- Dielectric refraction with a fixed reflection fraction
- Row-parallel rendering with antialiasing
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .shapes import (
    HitRecord, Hittable, Sphere, AxisAlignedRect, XYRect, XZRect, YZRect,
    HittableList, add_hollow_box
)
from .materials import Material
from .lights import PointLight, LightSample
from .camera import Camera
from .tracer import trace_ray, shade_diffuse
from .options import RenderOptions, MirrorWall, SecondLightPlacement
from .scene import CornellScene, build_cornell_room
from .options_parser import OptionsParseError, load_options, parse_options
from .renderer import Renderer, RenderCancelledError, render, save_image
from .tonemapping import apply_gamma, to_srgb8, color_to_rgb8
