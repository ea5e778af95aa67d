"""Isometric camera that follows a target, zooms and shakes on hits."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Vec3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> "Vec3":
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    def lerp(self, other: "Vec3", t: float) -> "Vec3":
        return self + (other - self) * t

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)


ISO_OFFSET = Vec3(10.0, 10.0, 10.0)
CAMERA_LERP_SPEED = 8.0
LIGHT_HEIGHT = 2.5
MIN_SCALE = 0.005
MAX_SCALE = 0.02
ZOOM_STEP = 0.0005
DAMAGE_TRAUMA = 0.4
TRAUMA_DECAY = 1.5
SHAKE_AMPLITUDE = 0.3


@dataclass
class CameraRig:
    """Orthographic isometric camera, its follow light and its shake state."""

    base_look_at: Vec3 = field(default_factory=Vec3)
    camera_position: Vec3 = ISO_OFFSET
    camera_look_at: Vec3 = field(default_factory=Vec3)
    scale: float = 0.01
    trauma: float = 0.0
    light_position: Vec3 = Vec3(0.0, 2.0, 0.0)

    def follow(self, target: Vec3, dt: float) -> Vec3:
        """Ease the unshaken look-at point towards the target; return the camera position."""
        t = min(CAMERA_LERP_SPEED * dt, 1.0)
        look_at = self.base_look_at.lerp(target, t)
        self.base_look_at = look_at
        self.camera_look_at = look_at
        self.camera_position = look_at + ISO_OFFSET
        return self.camera_position

    def update_light(self, target: Vec3) -> Vec3:
        self.light_position = target + Vec3(0.0, LIGHT_HEIGHT, 0.0)
        return self.light_position

    def zoom(self, scroll_y: float) -> float:
        """Apply one scroll event; return the new projection scale."""
        self.scale = min(max(self.scale - scroll_y * ZOOM_STEP, MIN_SCALE), MAX_SCALE)
        return self.scale

    def add_damage_trauma(self) -> float:
        self.trauma = min(self.trauma + DAMAGE_TRAUMA, 1.0)
        return self.trauma

    def apply_shake(self, dt: float, elapsed: float) -> Vec3 | None:
        """Decay trauma and offset the camera; return its position, or None when still."""
        self.trauma = max(self.trauma - dt * TRAUMA_DECAY, 0.0)
        if self.trauma <= 0.0:
            return None
        amount = self.trauma * self.trauma
        offset = Vec3(
            math.sin(elapsed * 37.0) * amount * SHAKE_AMPLITUDE,
            0.0,
            math.cos(elapsed * 47.0) * amount * SHAKE_AMPLITUDE,
        )
        self.camera_position = self.base_look_at + ISO_OFFSET + offset
        return self.camera_position