"""
Three-component vector used for points, directions and linear RGB.

Vectors are values: no operation modifies its operands, and a Vec3
exposes no way to change its components after construction.
"""

from __future__ import annotations
import math
from typing import Optional, Union
import numpy as np

# Below this length a vector is treated as zero when normalizing
NORMALIZE_EPSILON = 1e-12

Operand = Union['Vec3', float]


def _raw(value: Operand):
    return value._data if isinstance(value, Vec3) else value


class Vec3:
    """Immutable 3D vector backed by a float64 numpy array.

    Multiplying two vectors is component-wise, which is how colors are
    filtered by albedo and light color.
    """

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = np.array((x, y, z), dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vec3:
        """Wrap an array of three floats without copying it."""
        vec = object.__new__(cls)
        vec._data = np.asarray(arr, dtype=np.float64)
        return vec

    x = property(lambda self: float(self._data[0]))
    y = property(lambda self: float(self._data[1]))
    z = property(lambda self: float(self._data[2]))

    # Channel names when the vector holds a color
    r = x
    g = y
    b = z

    def __repr__(self) -> str:
        return f"Vec3({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.allclose(self._data, other._data))

    __hash__ = None

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __iter__(self):
        return iter(self._data.tolist())

    def __neg__(self) -> Vec3:
        return Vec3.from_array(-self._data)

    def __add__(self, other: Operand) -> Vec3:
        return Vec3.from_array(self._data + _raw(other))

    __radd__ = __add__

    def __sub__(self, other: Operand) -> Vec3:
        return Vec3.from_array(self._data - _raw(other))

    def __mul__(self, other: Operand) -> Vec3:
        return Vec3.from_array(self._data * _raw(other))

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3.from_array(self._data / scalar)

    def dot(self, other: Vec3) -> float:
        return float(self._data @ other._data)

    def cross(self, other: Vec3) -> Vec3:
        ax, ay, az = self._data
        bx, by, bz = other._data
        return Vec3(ay * bz - az * by, az * bx - ax * bz, ax * by - ay * bx)

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> Vec3:
        """Unit vector with the same direction.

        A vector no longer than NORMALIZE_EPSILON comes back as the zero
        vector, so the result never contains NaN.
        """
        length = self.length()
        if length <= NORMALIZE_EPSILON:
            return Vec3()
        return Vec3.from_array(self._data / length)

    def reflect(self, normal: Vec3) -> Vec3:
        """Mirror this direction about a unit normal: d - 2 (d.n) n."""
        return self - normal * (2.0 * self.dot(normal))

    def refract(self, normal: Vec3, eta_ratio: float) -> Optional[Vec3]:
        """Bend this unit direction through a surface by Snell's law.

        Args:
            normal: Unit normal facing against this direction
            eta_ratio: Index of the incident side over index of the far side

        Returns:
            Unit refracted direction, or None on total internal reflection
        """
        cos_i = min(-self.dot(normal), 1.0)
        tangential = (self + normal * cos_i) * eta_ratio
        k = 1.0 - tangential.length_squared()
        if k < 0:
            return None
        return tangential - normal * math.sqrt(k)

    def to_array(self) -> np.ndarray:
        """Copy of the components as a numpy array."""
        return self._data.copy()


Point3 = Vec3
Color = Vec3

BLACK = Color(0.0, 0.0, 0.0)
