"""
Orbit Controls Tests — damping decay, rotation, zoom and pole clamping.
"""

import sys
import os
import math
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from orbit import OrbitControls, from_spherical, to_spherical


def make(**kw):
    return OrbitControls((0.0, 4.0, 8.0), (0.0, 0.0, 0.0), **kw)


class TestSpherical:

    def test_round_trip_point(self):
        p = np.array([1.0, 2.0, -3.0])
        np.testing.assert_allclose(from_spherical(*to_spherical(p)), p, atol=1e-12)

    def test_zero_offset(self):
        assert to_spherical((0, 0, 0)) == (0.0, 0.0, 0.0)


class TestIdle:

    def test_construction_keeps_camera(self):
        c = make()
        np.testing.assert_allclose(c.position, [0.0, 4.0, 8.0], atol=1e-9)

    def test_update_without_input_is_still(self):
        c = make()
        assert c.update() is False
        assert c.is_settled


class TestDamping:

    def test_first_frame_applies_damping_fraction(self):
        c = make()
        _, theta0, _ = to_spherical(c.position)
        c.rotate_left(0.4)
        c.update()
        _, theta1, _ = to_spherical(c.position)
        assert theta1 - theta0 == pytest.approx(-0.4 * 0.05)
        assert c.delta_theta == pytest.approx(-0.4 * 0.95)

    def test_motion_decelerates_and_converges(self):
        c = make()
        c.drag(0.1, 0.0)
        total = -2 * math.pi * 0.1
        steps, prev = [], to_spherical(c.position)[1]
        for _ in range(1000):
            c.update()
            theta = to_spherical(c.position)[1]
            steps.append(abs(theta - prev))
            prev = theta
        assert all(b <= a + 1e-12 for a, b in zip(steps, steps[1:]))
        assert prev == pytest.approx(total, abs=1e-6)
        assert c.is_settled

    def test_without_damping_delta_applies_at_once(self):
        c = make(enable_damping=False)
        c.rotate_left(0.3)
        c.update()
        assert to_spherical(c.position)[1] == pytest.approx(-0.3)
        assert c.delta_theta == 0.0

    def test_rotation_keeps_distance(self):
        c = make()
        r0 = np.linalg.norm(c.position)
        c.drag(0.25, 0.1)
        for _ in range(200):
            c.update()
        assert np.linalg.norm(c.position) == pytest.approx(r0)


class TestPolarClamp:

    @pytest.mark.parametrize("dy", [-5.0, 5.0])
    def test_never_crosses_pole(self, dy):
        c = make(enable_damping=False)
        c.drag(0.0, dy)
        c.update()
        _, _, phi = to_spherical(c.position)
        assert 0.0 < phi < math.pi

    def test_drag_down_raises_camera(self):
        c = make(enable_damping=False)
        y0 = c.position[1]
        c.drag(0.0, 0.05)
        c.update()
        assert c.position[1] > y0


class TestZoom:

    def test_dolly_in_shrinks_radius(self):
        c = make()
        r0 = np.linalg.norm(c.position)
        c.dolly_in()
        c.update()
        assert np.linalg.norm(c.position) == pytest.approx(r0 * 0.95)
        assert c.scale == 1.0

    def test_dolly_out_grows_radius(self):
        c = make()
        r0 = np.linalg.norm(c.position)
        c.dolly_out(2)
        c.update()
        assert np.linalg.norm(c.position) == pytest.approx(r0 / 0.95 ** 2)

    def test_distance_limits(self):
        c = make(max_distance=9.0)
        for _ in range(10):
            c.dolly_out()
            c.update()
        assert np.linalg.norm(c.position) == pytest.approx(9.0)
