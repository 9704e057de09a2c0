"""
Asset Pack Tests — placeholder textures drawn with PIL.
"""

import sys
import os
import pytest
from PIL import Image

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import config
from textures import (
    ball_color, make_ball_texture, make_skybox_face, write_asset_pack,
)


class TestBallTextures:

    def test_stripes_share_solid_colors(self):
        assert ball_color(9) == ball_color(1)
        assert ball_color(15) == ball_color(7)

    @pytest.mark.parametrize("n", [0, 16])
    def test_unknown_ball(self, n):
        with pytest.raises(ValueError):
            ball_color(n)

    def test_solid_fills_the_map(self):
        img = make_ball_texture(3, size=64)
        assert img.size == (128, 64)
        assert img.getpixel((0, 0)) == ball_color(3)

    def test_stripe_band(self):
        img = make_ball_texture(11, size=64)
        assert img.getpixel((0, 32)) == ball_color(11)
        assert img.getpixel((0, 2)) != ball_color(11)


def test_skybox_ground_face():
    assert make_skybox_face(3, size=8).getpixel((4, 4)) == (70, 60, 50)


class TestAssetPack:

    def test_writes_every_requested_texture(self, tmp_path):
        written = write_asset_pack(tmp_path)
        # felt + chalk + 6 sky + 15 balls
        assert len(written) == 23
        for face in config.SKYBOX_FACES:
            assert (tmp_path / face).is_file()
        with Image.open(tmp_path / "textures" / "ball-8.jpg") as img:
            assert img.size == (512, 256)

    def test_existing_files_kept_unless_forced(self, tmp_path):
        write_asset_pack(tmp_path)
        assert write_asset_pack(tmp_path) == []
        assert len(write_asset_pack(tmp_path, force=True)) == 23
