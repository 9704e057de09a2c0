"""
Orbit camera controls — Layer 2
Rotate/zoom around a fixed target with inertia. Pure numpy, renderer-free.

Spherical convention (scene frame, +Y up):
  phi   = polar angle from +Y
  theta = azimuth, atan2(x, z)
"""

import math

import numpy as np

EPS = 1e-6


def to_spherical(offset) -> tuple:
    x, y, z = (float(v) for v in offset)
    radius = math.sqrt(x * x + y * y + z * z)
    if radius == 0.0:
        return 0.0, 0.0, 0.0
    theta = math.atan2(x, z)
    phi = math.acos(max(-1.0, min(1.0, y / radius)))
    return radius, theta, phi


def from_spherical(radius: float, theta: float, phi: float) -> np.ndarray:
    sin_phi = math.sin(phi)
    return np.array([
        radius * sin_phi * math.sin(theta),
        radius * math.cos(phi),
        radius * sin_phi * math.cos(theta),
    ])


class OrbitControls:
    """Camera orbit state. Input queues deltas; update() applies them."""

    def __init__(self, position, target=(0.0, 0.0, 0.0),
                 enable_damping: bool = True, damping_factor: float = 0.05,
                 rotate_speed: float = 1.0, zoom_speed: float = 1.0,
                 min_distance: float = 0.0, max_distance: float = math.inf):
        self.position = np.array(position, dtype=float)
        self.target = np.array(target, dtype=float)
        self.enable_damping = enable_damping
        self.damping_factor = damping_factor
        self.rotate_speed = rotate_speed
        self.zoom_speed = zoom_speed
        self.min_distance = min_distance
        self.max_distance = max_distance

        self.delta_theta = 0.0
        self.delta_phi = 0.0
        self.scale = 1.0
        self.update()

    # ── Input ─────────────────────────────────────────────────────────────────

    def rotate_left(self, angle: float) -> None:
        self.delta_theta -= angle

    def rotate_up(self, angle: float) -> None:
        self.delta_phi -= angle

    def drag(self, dx: float, dy: float) -> None:
        """
        Pointer drag, in units of viewport height (dy positive = downward).
        A drag across the full height turns the camera once around.
        """
        self.rotate_left(2 * math.pi * dx * self.rotate_speed)
        self.rotate_up(2 * math.pi * dy * self.rotate_speed)

    @property
    def zoom_scale(self) -> float:
        return 0.95 ** self.zoom_speed

    def dolly_in(self, steps: int = 1) -> None:
        self.scale *= self.zoom_scale ** steps

    def dolly_out(self, steps: int = 1) -> None:
        self.scale /= self.zoom_scale ** steps

    # ── Per frame ─────────────────────────────────────────────────────────────

    @property
    def is_settled(self) -> bool:
        return abs(self.delta_theta) < EPS and abs(self.delta_phi) < EPS and self.scale == 1.0

    def update(self) -> bool:
        """Advance one frame. Returns True when the camera position changed."""
        radius, theta, phi = to_spherical(self.position - self.target)

        if self.enable_damping:
            theta += self.delta_theta * self.damping_factor
            phi += self.delta_phi * self.damping_factor
        else:
            theta += self.delta_theta
            phi += self.delta_phi

        phi = max(EPS, min(math.pi - EPS, phi))
        radius = max(self.min_distance, min(self.max_distance, radius * self.scale))

        new_position = self.target + from_spherical(radius, theta, phi)

        if self.enable_damping:
            self.delta_theta *= 1 - self.damping_factor
            self.delta_phi *= 1 - self.damping_factor
        else:
            self.delta_theta = 0.0
            self.delta_phi = 0.0
        self.scale = 1.0

        changed = bool(np.linalg.norm(new_position - self.position) > EPS)
        self.position = new_position
        return changed
