"""
Pool Table Layout — Layer 1
Fixed table dimensions and the triangular ball rack, in scene units.

Scene frame: right-handed, +Y up, camera looking down -Z.
"""

from dataclasses import dataclass
from typing import Iterator, List, Tuple

import numpy as np

# ──────────────────────────────────────────────
# Table
# ──────────────────────────────────────────────
TABLE_WIDTH: float = 10.0
TABLE_HEIGHT: float = 0.5
TABLE_DEPTH: float = 5.0
TABLE_POSITION = (0.0, -1.0, 0.0)

LEG_SIZE = (0.3, 2.0, 0.3)
LEG_OFFSETS = [
    (-4.5, -2.0, -2.2),
    (4.5, -2.0, -2.2),
    (-4.5, -2.0, 2.2),
    (4.5, -2.0, 2.2),
]

BORDER_THICKNESS: float = 0.3
BORDER_HEIGHT: float = 0.3
BORDER_Y: float = -0.7

POCKET_RADIUS: float = 0.25
POCKET_DROP: float = 0.11  # pockets sit slightly below the rail line
POCKET_POSITIONS = [
    # corners
    (-5.0, -0.55, -2.5),
    (5.0, -0.55, -2.5),
    (-5.0, -0.55, 2.5),
    (5.0, -0.55, 2.5),
    # middles
    (0.0, -0.55, -2.5),
    (0.0, -0.55, 2.5),
]

# ──────────────────────────────────────────────
# Balls
# ──────────────────────────────────────────────
BALL_RADIUS: float = 0.3
BALL_Y: float = -0.35
BALL_COUNT: int = 15
RACK_ROWS: int = 5
RACK_SPACING: float = 0.6
RACK_START_X: float = -1.5
RACK_START_Z: float = 0.5

# Raw rack coordinates are swapped and shifted into the table frame
RACK_SHIFT_X: float = -1.3
RACK_SHIFT_Z: float = -1.5

BALL_TEXTURES = [f"ball-{n}.jpg" for n in range(1, BALL_COUNT + 1)]

CUE_BALL_POSITION = (1.5, BALL_Y, 0.0)


@dataclass(frozen=True)
class RackSlot:
    """One placed ball of the rack."""
    index: int
    row: int
    col: int
    raw_x: float
    raw_z: float
    x: float
    z: float


def rack_transform(raw_x: float, raw_z: float) -> Tuple[float, float]:
    """Map raw rack coordinates to scene (x, z)."""
    return -raw_z + RACK_SHIFT_X, -raw_x + RACK_SHIFT_Z


def rack_slots(count: int = BALL_COUNT, rows: int = RACK_ROWS,
               spacing: float = RACK_SPACING, start_x: float = RACK_START_X,
               start_z: float = RACK_START_Z) -> Iterator[RackSlot]:
    """
    Enumerate rack slots in row-major, left-to-right order.

    Row r holds r + 1 balls and is centered on start_x. Enumeration stops
    after `count` placements even when `rows` allows more slots.
    """
    index = 0
    for row in range(rows):
        balls_in_row = row + 1
        offset_x = start_x - (balls_in_row - 1) * spacing / 2
        for col in range(balls_in_row):
            if index >= count:
                return
            raw_x = offset_x + col * spacing
            raw_z = start_z + row * spacing
            x, z = rack_transform(raw_x, raw_z)
            yield RackSlot(index, row, col, raw_x, raw_z, x, z)
            index += 1


def rack_positions(count: int = BALL_COUNT, y: float = BALL_Y, **kwargs) -> np.ndarray:
    """Return an (n, 3) array of ball centers in scene coordinates."""
    slots = list(rack_slots(count=count, **kwargs))
    out = np.zeros((len(slots), 3))
    for slot in slots:
        out[slot.index] = (slot.x, y, slot.z)
    return out


# ──────────────────────────────────────────────
# Borders / pockets
# ──────────────────────────────────────────────

def border_walls(table_width: float = TABLE_WIDTH, table_depth: float = TABLE_DEPTH,
                 thickness: float = BORDER_THICKNESS, height: float = BORDER_HEIGHT,
                 y: float = BORDER_Y) -> List[Tuple[str, Tuple[float, float, float], np.ndarray]]:
    """
    Return (name, size, position) for the four rails.

    Left/right rails run the full depth plus both corner overlaps;
    front/back rails span the table width only.
    """
    side = (thickness, height, table_depth + thickness * 2)
    end = (table_width, height, thickness)
    hx = table_width / 2 + thickness / 2
    hz = table_depth / 2 + thickness / 2
    return [
        ("border_left", side, np.array([-hx, y, 0.0])),
        ("border_right", side, np.array([hx, y, 0.0])),
        ("border_front", end, np.array([0.0, y, -hz])),
        ("border_back", end, np.array([0.0, y, hz])),
    ]


def pocket_positions(drop: float = POCKET_DROP) -> np.ndarray:
    """Pocket centers, lowered by `drop` below the authored rail positions."""
    pts = np.array(POCKET_POSITIONS, dtype=float)
    pts[:, 1] -= drop
    return pts
