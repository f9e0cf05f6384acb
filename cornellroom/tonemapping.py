"""
Conversion of linear-light color to displayable 8-bit values.

Linear radiance is clamped to [0, 1], gamma encoded with an exponent of
1/2.2 and quantized as floor(255.999 * v).
"""

from __future__ import annotations
from typing import Tuple
import numpy as np

from .vec3 import Color

DISPLAY_GAMMA = 2.2


def apply_gamma(image: np.ndarray, gamma: float = DISPLAY_GAMMA) -> np.ndarray:
    """Apply gamma correction to linear values.

    Args:
        image: Linear values of any shape, typically (H, W, 3) or (W, 3)
        gamma: Gamma value (2.2 for display)

    Returns:
        Gamma-corrected values in [0, 1]
    """
    return np.power(np.clip(image, 0.0, 1.0), 1.0 / gamma)


def to_srgb8(linear: np.ndarray, gamma: float = DISPLAY_GAMMA) -> np.ndarray:
    """Convert linear RGB values to gamma-encoded 8-bit values.

    Args:
        linear: Linear RGB array, last axis holds the channels

    Returns:
        uint8 array with the same shape
    """
    linear = np.nan_to_num(np.asarray(linear, dtype=np.float64), nan=0.0)
    encoded = apply_gamma(linear, gamma)
    return np.floor(255.999 * encoded).astype(np.uint8)


def color_to_rgb8(color: Color, gamma: float = DISPLAY_GAMMA) -> Tuple[int, int, int]:
    """Convert a single linear Color to an (r, g, b) byte triple."""
    r, g, b = to_srgb8(color.to_array(), gamma)
    return int(r), int(g), int(b)
