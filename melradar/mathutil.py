"""Vector, rotator and interpolation helpers used by the simulation."""

from __future__ import annotations

import math
from dataclasses import dataclass

_SMALL_NUMBER = 1e-8
_KINDA_SMALL_NUMBER = 1e-4


@dataclass(frozen=True)
class Vec3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scale: float) -> Vec3:
        return Vec3(self.x * scale, self.y * scale, self.z * scale)

    __rmul__ = __mul__

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def size(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.size_squared())

    def size_squared(self) -> float:
        """Squared Euclidean length."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def safe_normal(self) -> Vec3:
        """Unit vector in the same direction, or the zero vector if too short."""
        squared = self.size_squared()
        if squared == 1.0:
            return self
        if squared < _SMALL_NUMBER:
            return Vec3()
        return self * (1.0 / math.sqrt(squared))

    def dot(self, other: Vec3) -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def dist(self, other: Vec3) -> float:
        """Distance between two points."""
        return (self - other).size()

    def lerp(self, other: Vec3, alpha: float) -> Vec3:
        """Linear interpolation from this vector towards ``other``."""
        return self + (other - self) * alpha

    def rotation(self) -> Rotator:
        """Rotator whose forward vector points along this vector."""
        yaw = math.degrees(math.atan2(self.y, self.x))
        pitch = math.degrees(math.atan2(self.z, math.hypot(self.x, self.y)))
        return Rotator(pitch, yaw, 0.0)

    def with_z(self, z: float) -> Vec3:
        """Copy of this vector with a different Z component."""
        return Vec3(self.x, self.y, z)


def _normalize_axis(angle: float) -> float:
    wrapped = angle % 360.0
    return wrapped - 360.0 if wrapped > 180.0 else wrapped


@dataclass(frozen=True)
class Rotator:
    """Pitch, yaw and roll in degrees."""

    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0

    def __add__(self, other: Rotator) -> Rotator:
        return Rotator(self.pitch + other.pitch, self.yaw + other.yaw, self.roll + other.roll)

    def __sub__(self, other: Rotator) -> Rotator:
        return Rotator(self.pitch - other.pitch, self.yaw - other.yaw, self.roll - other.roll)

    def __mul__(self, scale: float) -> Rotator:
        return Rotator(self.pitch * scale, self.yaw * scale, self.roll * scale)

    __rmul__ = __mul__

    def normalized(self) -> Rotator:
        """Each axis wrapped into (-180, 180]."""
        return Rotator(
            _normalize_axis(self.pitch), _normalize_axis(self.yaw), _normalize_axis(self.roll)
        )

    def is_nearly_zero(self, tolerance: float = _KINDA_SMALL_NUMBER) -> bool:
        """True if every normalized axis is within ``tolerance`` of zero."""
        return all(
            abs(_normalize_axis(angle)) <= tolerance
            for angle in (self.pitch, self.yaw, self.roll)
        )

    def forward_vector(self) -> Vec3:
        """Unit vector this rotation points along."""
        pitch = math.radians(self.pitch)
        yaw = math.radians(self.yaw)
        cos_pitch = math.cos(pitch)
        return Vec3(cos_pitch * math.cos(yaw), cos_pitch * math.sin(yaw), math.sin(pitch))


def smooth_step(a: float, b: float, x: float) -> float:
    """Hermite interpolation of ``x`` between ``a`` and ``b``, in [0, 1]."""
    if x < a:
        return 0.0
    if x >= b:
        return 1.0
    fraction = (x - a) / (b - a)
    return fraction * fraction * (3.0 - 2.0 * fraction)


def rinterp_to(current: Rotator, target: Rotator, delta_time: float, speed: float) -> Rotator:
    """Move ``current`` towards ``target`` along the shortest path of each axis."""
    if delta_time == 0.0 or current == target:
        return current
    if speed <= 0.0:
        return target
    delta = (target - current).normalized()
    if delta.is_nearly_zero():
        return target
    step = clamp(speed * delta_time, 0.0, 1.0)
    return (current + delta * step).normalized()


def clamp(value: float, low: float, high: float) -> float:
    """Limit ``value`` to the range [low, high]."""
    if value < low:
        return low
    if value > high:
        return high
    return value