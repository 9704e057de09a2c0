"""
Placeholder asset pack (PIL)
Draws felt, chalk, skybox faces and numbered pool-ball textures so the scene
has something to show before real artwork is dropped into the asset dir.
"""

import random
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

import config
import layout

# Standard pool colors for balls 1-8 (9-15 reuse 1-7 as stripes)
BALL_COLORS = {
    1: (250, 200, 20),   # yellow
    2: (20, 60, 200),    # blue
    3: (220, 30, 30),    # red
    4: (110, 40, 150),   # purple
    5: (250, 120, 20),   # orange
    6: (20, 130, 60),    # green
    7: (130, 30, 30),    # maroon
    8: (15, 15, 15),     # black
}

# Skybox gradient (zenith, horizon) and ground color
_SKY = ((110, 160, 220), (210, 225, 240))
_GROUND = (70, 60, 50)


def ball_color(number: int):
    if not 1 <= number <= layout.BALL_COUNT:
        raise ValueError(f"ball_color: no ball numbered {number}")
    return BALL_COLORS[number if number <= 8 else number - 8]


def make_ball_texture(number: int, size: int = 256) -> Image.Image:
    """
    Equirectangular ball texture: solids fill the map, stripes (9-15) get a
    colored band around the equator. A white disc with the number sits front
    and back so it shows from either side.
    """
    base = ball_color(number)
    w, h = size * 2, size
    img = Image.new("RGB", (w, h), (245, 245, 240) if number > 8 else base)
    draw = ImageDraw.Draw(img)
    if number > 8:
        draw.rectangle([0, h // 4, w, h * 3 // 4], fill=base)

    font = ImageFont.load_default()
    r = h // 6
    for cx in (w // 4, w * 3 // 4):
        cy = h // 2
        draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=(250, 250, 250))
        text = str(number)
        left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
        draw.text((cx - (right - left) / 2, cy - (bottom - top) / 2), text,
                  fill=(10, 10, 10), font=font)
    return img


def make_felt_texture(size: int = 512, seed: int = 7) -> Image.Image:
    """Green cloth with a little speckle noise."""
    img = Image.new("RGB", (size, size), (20, 110, 50))
    draw = ImageDraw.Draw(img)
    rng = random.Random(seed)
    for _ in range(size * 8):
        x, y = rng.randrange(size), rng.randrange(size)
        shade = rng.randint(-18, 18)
        draw.point((x, y), fill=(20 + shade // 2, 110 + shade, 50 + shade // 2))
    return img


def make_chalk_texture(size: int = 128) -> Image.Image:
    img = Image.new("RGB", (size, size), (40, 110, 200))
    draw = ImageDraw.Draw(img)
    m = size // 8
    draw.rectangle([m, m, size - m, size - m], outline=(225, 235, 250), width=max(1, size // 32))
    return img


def make_skybox_face(index: int, size: int = 256) -> Image.Image:
    """Vertical sky gradient on the side faces, flat sky above, ground below."""
    if index == 2:
        return Image.new("RGB", (size, size), _SKY[0])
    if index == 3:
        return Image.new("RGB", (size, size), _GROUND)
    top, bottom = _SKY
    img = Image.new("RGB", (size, size))
    draw = ImageDraw.Draw(img)
    for y in range(size):
        t = y / (size - 1)
        draw.line([(0, y), (size, y)],
                  fill=tuple(int(a + (b - a) * t) for a, b in zip(top, bottom)))
    return img


def write_asset_pack(dest, force: bool = False) -> list:
    """Write every texture the scene requests under `dest`. Returns written paths."""
    dest = Path(dest)
    jobs = [(config.FELT_TEXTURE, make_felt_texture),
            (config.CHALK_TEXTURE, make_chalk_texture)]
    for i, face in enumerate(config.SKYBOX_FACES):
        jobs.append((face, lambda i=i: make_skybox_face(i)))
    for n, name in enumerate(layout.BALL_TEXTURES, start=1):
        jobs.append((f"{config.BALL_TEXTURE_DIR}/{name}", lambda n=n: make_ball_texture(n)))

    written = []
    for rel, make in jobs:
        path = dest / rel
        if path.exists() and not force:
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        make().save(path, quality=92)
        written.append(path)
    return written
