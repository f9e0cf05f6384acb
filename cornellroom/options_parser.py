"""
Render option file parser.

Reads RenderOptions from a YAML or JSON mapping.

Example options file:
```yaml
width: 640
height: 480
samples: 4
max_depth: 5

mirror_spheres: true
transparent_cubes: true
mirror_wall: back
second_light: floor
```
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict
import json

import yaml

from .options import RenderOptions


class OptionsParseError(Exception):
    """Error during option file parsing."""
    pass


_INT_KEYS = {
    'width': 'width',
    'height': 'height',
    'samples': 'samples_per_pixel',
    'samples_per_pixel': 'samples_per_pixel',
    'max_depth': 'max_depth',
    'depth': 'max_depth',
}

_BOOL_KEYS = (
    'mirror_spheres',
    'mirror_cubes',
    'transparent_spheres',
    'transparent_cubes',
)

_ENUM_KEYS = {
    'mirror_wall': 'mirror_wall',
    'second_light': 'second_light',
    'second_light_placement': 'second_light',
}


def load_options(filepath: str) -> RenderOptions:
    """Load render options from a file.

    Args:
        filepath: Path to a YAML (.yaml/.yml) or JSON (.json) file

    Returns:
        Parsed RenderOptions
    """
    path = Path(filepath)
    if not path.exists():
        raise OptionsParseError(f"Options file not found: {filepath}")

    content = path.read_text()

    try:
        if path.suffix == '.json':
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise OptionsParseError(f"Cannot read options file {filepath}: {e}") from e

    if data is None:
        data = {}
    return parse_options(data)


def parse_options(data: Dict[str, Any]) -> RenderOptions:
    """Parse render options from a dictionary.

    Args:
        data: Options mapping; missing keys keep their defaults

    Returns:
        Parsed RenderOptions
    """
    if not isinstance(data, dict):
        raise OptionsParseError(f"Options must be a mapping, got {type(data).__name__}")

    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        if key in _INT_KEYS:
            kwargs[_INT_KEYS[key]] = _parse_int(key, value)
        elif key in _BOOL_KEYS:
            kwargs[key] = _parse_bool(key, value)
        elif key in _ENUM_KEYS:
            kwargs[_ENUM_KEYS[key]] = 'none' if value is None else str(value)
        else:
            raise OptionsParseError(f"Unknown option: {key}")

    try:
        return RenderOptions(**kwargs)
    except ValueError as e:
        raise OptionsParseError(str(e)) from e


def _parse_int(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise OptionsParseError(f"Option '{key}' must be an integer, got {value!r}")
    try:
        return int(value)
    except ValueError:
        raise OptionsParseError(f"Option '{key}' must be an integer, got {value!r}")


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ('true', 'yes', 'on', '1'):
        return True
    if isinstance(value, str) and value.lower() in ('false', 'no', 'off', '0'):
        return False
    raise OptionsParseError(f"Option '{key}' must be a boolean, got {value!r}")
