"""
Render Loop Tests — chalk spin law, controls update and render ordering.
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from orbit import OrbitControls
from render_loop import RenderLoop
from scene import build_chalk


def make_loop(render=None):
    chalk = build_chalk(None)
    controls = OrbitControls((0.0, 4.0, 8.0))
    return RenderLoop(chalk, controls, render), chalk, controls


class TestSpin:

    def test_angle_equals_seconds_over_1000_frames(self):
        loop, chalk, _ = make_loop()
        step_ms = 1000.0 / 60.0
        for i in range(1, 1001):
            loop.frame(i * step_ms)
            assert chalk.rotation[1] == pytest.approx(i * step_ms * 0.001)
        assert loop.frames == 1000
        assert loop.time == pytest.approx(1000 * step_ms / 1000.0)

    def test_only_y_rotation_changes(self):
        loop, chalk, _ = make_loop()
        pos = chalk.position.copy()
        loop.frame(2500.0)
        np.testing.assert_array_equal(chalk.rotation, [0.0, 2.5, 0.0])
        np.testing.assert_array_equal(chalk.position, pos)


class TestFrame:

    def test_controls_updated_each_frame(self):
        loop, _, controls = make_loop()
        controls.rotate_left(1.0)
        loop.frame(16.0)
        assert controls.delta_theta == pytest.approx(-0.95)
        loop.frame(32.0)
        assert controls.delta_theta == pytest.approx(-0.95 ** 2)

    def test_render_called_after_update(self):
        calls = []
        loop, chalk, _ = make_loop(render=lambda: calls.append(chalk.rotation[1]))
        loop.run([0.0, 500.0, 1000.0])
        assert calls == [0.0, 0.5, 1.0]

    def test_render_errors_propagate(self):
        def boom():
            raise RuntimeError("lost context")
        loop, _, _ = make_loop(render=boom)
        with pytest.raises(RuntimeError):
            loop.frame(0.0)
