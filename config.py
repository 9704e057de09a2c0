"""Application settings: window, camera, controls, lights and asset paths."""

import math
import os
from pathlib import Path

WINDOW_TITLE = "Pool Table Scene"
WINDOW_SIZE = (1280, 800)

# Asset root (textures/, models/); override with POOL_SCENE_ASSETS
ASSET_DIR = Path(os.environ.get("POOL_SCENE_ASSETS", Path(__file__).parent / "assets"))

# Camera
CAMERA_FOV = 75
CAMERA_NEAR = 0.1
CAMERA_FAR = 100
CAMERA_POSITION = (0.0, 4.0, 8.0)
CAMERA_TARGET = (0.0, 0.0, 0.0)

# Orbit controls
ENABLE_DAMPING = True
DAMPING_FACTOR = 0.05
ROTATE_SPEED = 1.0
ZOOM_SPEED = 1.0

# Lights: (color, intensity, position)
DIRECTIONAL_LIGHT = (0xFFFFFF, 3.0, (-1.0, 2.0, 4.0))
AMBIENT_LIGHT = (0x404040, 1.5)
POINT_LIGHT = (0xFFDDAA, 1.2, (0.0, 5.0, 0.0))
POINT_LIGHT_DISTANCE = 20.0

# Skybox faces, cube-map order
SKYBOX_FACES = [
    "textures/pos-x.jpg",
    "textures/neg-x.jpg",
    "textures/pos-y.jpg",
    "textures/neg-y.jpg",
    "textures/pos-z.jpg",
    "textures/neg-z.jpg",
]
SKYBOX_SIZE = 90.0  # stays inside CAMERA_FAR

FELT_TEXTURE = "textures/pool_table_felt.jpg"
CHALK_TEXTURE = "textures/chalk.jpg"
BALL_TEXTURE_DIR = "textures"

FLY_MODEL = "models/Fly.glb"
FLY_SCALE = 0.5
FLY_POSITION = (8.5, 0.0, 0.0)
FLY_ROTATION_Y = math.pi / 9

# Loading bar (ui units)
LOADING_BAR_SIZE = (0.6, 0.03)
