"""
Render options for the Cornell room.

RenderOptions is owned by the caller and only read by the renderer.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union


class MirrorWall(Enum):
    """Which wall of the room, if any, is turned into a mirror."""
    NONE = 'none'
    LEFT = 'left'
    RIGHT = 'right'
    FLOOR = 'floor'
    CEILING = 'ceiling'
    BACK = 'back'
    FRONT = 'front'


class SecondLightPlacement(Enum):
    """Where the optional second light is placed."""
    NONE = 'none'
    RIGHT = 'right'
    LEFT = 'left'
    FLOOR = 'floor'
    BACK = 'back'
    FRONT = 'front'


def _coerce_enum(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    choices = ', '.join(member.value for member in enum_cls)
    raise ValueError(f"Invalid {enum_cls.__name__} '{value}', expected one of: {choices}")


@dataclass
class RenderOptions:
    """Configuration for a Cornell room render.

    samples_per_pixel and max_depth below 1 are treated as 1 by the renderer.
    """
    width: int = 1024
    height: int = 768
    samples_per_pixel: int = 1
    max_depth: int = 4

    mirror_spheres: bool = False
    mirror_cubes: bool = False
    transparent_spheres: bool = False
    transparent_cubes: bool = False

    mirror_wall: Union[MirrorWall, str] = MirrorWall.NONE
    second_light: Union[SecondLightPlacement, str] = SecondLightPlacement.NONE

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Image size must be at least 1x1, got {self.width}x{self.height}")
        self.mirror_wall = _coerce_enum(MirrorWall, self.mirror_wall)
        self.second_light = _coerce_enum(SecondLightPlacement, self.second_light)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height
