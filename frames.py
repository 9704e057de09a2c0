"""
Scene frame → Ursina frame — Layer 2
Pure conversions between the scene description and Ursina/Panda3D conventions.

Scene data is right-handed (camera looks down -Z) in radians; Ursina is
left-handed in degrees. Flipping Z also flips the sense of every rotation.
"""

import math
from typing import Tuple


def to_entity_position(p) -> Tuple[float, float, float]:
    return float(p[0]), float(p[1]), -float(p[2])


def to_entity_rotation(r) -> Tuple[float, float, float]:
    return tuple(-math.degrees(float(a)) for a in r)


def hex_color(value: int, intensity: float = 1.0) -> Tuple[float, float, float, float]:
    """0xRRGGBB → (r, g, b, 1) in 0..1, rgb scaled by intensity."""
    r = ((value >> 16) & 0xFF) / 255.0
    g = ((value >> 8) & 0xFF) / 255.0
    b = (value & 0xFF) / 255.0
    return r * intensity, g * intensity, b * intensity, 1.0


def horizontal_fov(vertical_fov: float, aspect_ratio: float) -> float:
    """Ursina's camera.fov is horizontal; scene cameras are specified vertically."""
    half = math.radians(vertical_fov) / 2
    return math.degrees(2 * math.atan(math.tan(half) * aspect_ratio))


def drag_delta(velocity, aspect_ratio: float) -> Tuple[float, float]:
    """
    Ursina mouse.velocity → orbit drag in viewport-height units, y downward.
    velocity.x is already in height units; velocity.y is divided by the
    aspect ratio, so it is scaled back.
    """
    return float(velocity[0]), -float(velocity[1]) * aspect_ratio
