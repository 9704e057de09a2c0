"""
Frame Tests — scene-to-Ursina position/rotation/color conversion, camera fov
and mouse drag normalization. Headless: no Ursina import.
"""

import sys
import os
import math
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import config
from frames import (
    drag_delta, hex_color, horizontal_fov, to_entity_position, to_entity_rotation,
)
from orbit import OrbitControls
from render_loop import RenderLoop
from scene import build_chalk, build_cue


class TestPosition:

    def test_z_is_negated(self):
        assert to_entity_position((1, 2, 3)) == (1.0, 2.0, -3.0)

    def test_accepts_numpy(self):
        cue = build_cue()
        x, y, z = to_entity_position(cue.position)
        assert (x, y) == (pytest.approx(cue.position[0]), pytest.approx(cue.position[1]))
        assert z == pytest.approx(-cue.position[2])


class TestRotation:

    def test_radians_become_negated_degrees(self):
        rx, ry, rz = to_entity_rotation((0.0, math.pi / 2, -math.pi))
        assert rx == pytest.approx(0.0)
        assert ry == pytest.approx(-90.0)
        assert rz == pytest.approx(180.0)

    def test_cue_tilt(self):
        _, _, rz = to_entity_rotation(build_cue().rotation)
        assert rz == pytest.approx(-math.degrees(math.pi / 1.99))
        assert rz == pytest.approx(-90.45, abs=0.01)

    def test_chalk_after_spinning(self):
        chalk = build_chalk(None)
        loop = RenderLoop(chalk, OrbitControls(config.CAMERA_POSITION))
        loop.frame(2500.0)
        rx, ry, rz = to_entity_rotation(chalk.rotation)
        assert ry == pytest.approx(-math.degrees(2.5))
        assert rx == pytest.approx(0.0) and rz == pytest.approx(0.0)


class TestHexColor:

    def test_white(self):
        assert hex_color(0xFFFFFF) == (1.0, 1.0, 1.0, 1.0)

    def test_channel_order(self):
        r, g, b, a = hex_color(0x336699)
        assert (r, g, b) == (pytest.approx(0x33 / 255), pytest.approx(0x66 / 255),
                             pytest.approx(0x99 / 255))
        assert a == 1.0

    @pytest.mark.parametrize("value,intensity", [
        config.POINT_LIGHT[:2],
        config.AMBIENT_LIGHT,
    ])
    def test_intensity_scales_rgb_not_alpha(self, value, intensity):
        base = hex_color(value)
        scaled = hex_color(value, intensity)
        for b, s in zip(base[:3], scaled[:3]):
            assert s == pytest.approx(b * intensity)
        assert scaled[3] == 1.0

    def test_point_light_tint(self):
        r, g, b, _ = hex_color(0xFFDDAA, 1.2)
        assert r == pytest.approx(1.2)
        assert g == pytest.approx(0xDD / 255 * 1.2)
        assert b == pytest.approx(0xAA / 255 * 1.2)


class TestFieldOfView:

    def test_vertical_fov_preserved_at_window_aspect(self):
        aspect = config.WINDOW_SIZE[0] / config.WINDOW_SIZE[1]
        assert aspect == pytest.approx(1.6)
        h = horizontal_fov(config.CAMERA_FOV, aspect)
        vertical = math.degrees(2 * math.atan(math.tan(math.radians(h) / 2) / aspect))
        assert vertical == pytest.approx(75.0)
        assert h > 75.0

    def test_square_window_unchanged(self):
        assert horizontal_fov(75.0, 1.0) == pytest.approx(75.0)

    def test_portrait_window_narrows(self):
        assert horizontal_fov(75.0, 0.5) < 75.0


class TestDragDelta:

    def test_y_is_flipped_and_rescaled(self):
        dx, dy = drag_delta((0.1, -0.2, 0.0), 1.6)
        assert dx == pytest.approx(0.1)
        assert dy == pytest.approx(0.32)

    def test_full_height_drag_is_one_unit(self):
        # Ursina reports y in height / aspect units; a bottom-to-top drag sums to 1 / aspect
        aspect = 1.6
        steps = [(0.0, 1.0 / aspect / 4, 0.0)] * 4
        total = sum(drag_delta(v, aspect)[1] for v in steps)
        assert total == pytest.approx(-1.0)

    def test_x_not_scaled(self):
        dx, _ = drag_delta((0.25, 0.0, 0.0), 2.0)
        assert dx == pytest.approx(0.25)
