"""
Pool Table Scene -- static 3D table, rack, cue and props (3-Tier Architecture)
Layer 3: Ursina rendering / input handling.
Layer 2: scene.py (PoolScene), loading.py, orbit.py, render_loop.py, frames.py
Layer 1: layout.py, geometry.py

Left-drag to orbit the camera, mouse wheel to zoom.
Run scripts/make_assets.py first if the asset dir is empty.
"""

from ursina import (
    Ursina, Entity, Mesh, Texture, Vec3, Vec4, camera, color, mouse, window,
)
from ursina.lights import AmbientLight, DirectionalLight, PointLight
from ursina.shaders import lit_with_shadows_shader, unlit_shader
from panda3d.core import ClockObject, Filename, Loader as PandaLoader, NodePath
from panda3d.core import Texture as PandaTexture

import config
import frames
from geometry import tapered_cylinder
from loading import AssetLoader, LoadingManager
from render_loop import RenderLoop
from scene import BoxGeometry, CylinderGeometry, PoolScene, SphereGeometry


# ──────────────────────────────────────────
# Scene frame → Ursina frame (see frames.py)
# ──────────────────────────────────────────

def to_entity_position(p):
    return Vec3(*frames.to_entity_position(p))


def to_entity_rotation(r):
    return Vec3(*frames.to_entity_rotation(r))


def hex_color(value: int, intensity: float = 1.0):
    return Vec4(*frames.hex_color(value, intensity))


def _read_model(path):
    """Worker-thread model fetch through the Panda3D loader (glTF via panda3d-gltf)."""
    node = PandaLoader.get_global_ptr().load_sync(Filename.from_os_specific(str(path)))
    if node is None:
        raise IOError(f"could not read model file {path}")
    return NodePath(node)


def _make_texture(image, color_space="srgb"):
    tex = Texture(image)
    if color_space == "srgb":
        tex._texture.set_format(PandaTexture.F_srgb_alpha)
    return tex


# ──────────────────────────────────────────
# Ursina App
# ──────────────────────────────────────────

app = Ursina(borderless=False, title=config.WINDOW_TITLE, size=config.WINDOW_SIZE)

# ── Camera ────────────────────────────────────────────────────────────────────
camera.fov = frames.horizontal_fov(config.CAMERA_FOV, window.aspect_ratio)
camera.clip_plane_near = config.CAMERA_NEAR
camera.clip_plane_far = config.CAMERA_FAR


# ──────────────────────────────────────────
# Loading bar UI
# ──────────────────────────────────────────

class LoadingBar:
    """Centered progress bar; fill width tracks loaded / total."""

    def __init__(self):
        w, h = config.LOADING_BAR_SIZE
        self.root = Entity(parent=camera.ui, z=-0.1)
        Entity(parent=self.root, model="quad", color=color.rgba(0, 0, 0, 0.7),
               scale=(w + 0.02, h + 0.02), z=0.01)
        self.fill = Entity(parent=self.root, model="quad", color=color.white,
                           origin=(-0.5, 0), position=(-w / 2, 0),
                           scale=(0.0001, h))
        self.width = w

    def set_fraction(self, fraction: float):
        self.fill.scale_x = max(0.0001, self.width * fraction)

    def hide(self):
        self.root.enabled = False


loading_bar = LoadingBar()

manager = LoadingManager(
    on_load=loading_bar.hide,
    on_progress=lambda url, loaded, total: loading_bar.set_fraction(loaded / total),
)
loader = AssetLoader(config.ASSET_DIR, manager, fetchers={"model": _read_model})
# Skybox is fetched outside the progress bar
skybox_loader = AssetLoader(config.ASSET_DIR, executor=loader.executor)

pool_scene = PoolScene(loader, skybox_loader).build()


# ──────────────────────────────────────────
# Skybox
# ──────────────────────────────────────────

# (position, rotation) per face in cube-map order, Ursina frame, facing inward
_SKYBOX_FACES = [
    ((0.5, 0, 0), (0, 90, 0)),     # pos-x
    ((-0.5, 0, 0), (0, -90, 0)),   # neg-x
    ((0, 0.5, 0), (-90, 0, 0)),    # pos-y
    ((0, -0.5, 0), (90, 0, 0)),    # neg-y
    ((0, 0, -0.5), (0, 180, 0)),   # pos-z
    ((0, 0, 0.5), (0, 0, 0)),      # neg-z
]


class SkyBox(Entity):
    """Six inward-facing quads that follow the camera."""

    def __init__(self, background):
        super().__init__(scale=background.size)
        self.faces = []
        for handle, (pos, rot) in zip(background.faces, _SKYBOX_FACES):
            face = Entity(parent=self, model="quad", position=pos, rotation=rot,
                          shader=unlit_shader, double_sided=True, color=color.white)
            handle.then(lambda img, face=face: setattr(face, "texture", _make_texture(img)))
            self.faces.append(face)


skybox = SkyBox(pool_scene.graph.background) if pool_scene.graph.background else None


# ──────────────────────────────────────────
# Node → entity
# ──────────────────────────────────────────

entities: dict = {}


def _spawn_light(node):
    tint = hex_color(node.color, node.intensity)
    if node.light_type == "directional":
        light = DirectionalLight(position=to_entity_position(node.position))
        light.look_at(Vec3(0, 0, 0))
    elif node.light_type == "ambient":
        light = AmbientLight()
    elif node.light_type == "point":
        light = PointLight(position=to_entity_position(node.position))
        if node.distance > 0:
            light._light.set_max_distance(node.distance)
    else:
        raise ValueError(f"_spawn_light: unknown light type '{node.light_type}'")
    light.color = tint
    return light


def _mesh_model(geo):
    if isinstance(geo, BoxGeometry):
        return "cube", Vec3(geo.width, geo.height, geo.depth)
    if isinstance(geo, SphereGeometry):
        return "sphere", Vec3(geo.radius * 2, geo.radius * 2, geo.radius * 2)
    if isinstance(geo, CylinderGeometry):
        verts, tris, norms, uvs = tapered_cylinder(
            geo.radius_top, geo.radius_bottom, geo.height, geo.radial_segments).as_lists()
        return Mesh(vertices=verts, triangles=tris, normals=norms, uvs=uvs), Vec3(1, 1, 1)
    raise ValueError(f"_mesh_model: unsupported geometry {geo!r}")


def _spawn_mesh(node):
    model, size = _mesh_model(node.geometry)
    mat = node.material
    ent = Entity(
        model=model,
        color=color.white if mat.texture is not None else hex_color(mat.color),
        shader=lit_with_shadows_shader,
        scale=Vec3(*(s * k for s, k in zip(size, node.scale))),
        position=to_entity_position(node.position),
        rotation=to_entity_rotation(node.rotation),
        double_sided=isinstance(node.geometry, CylinderGeometry),
    )
    if mat.texture is not None:
        mat.texture.then(lambda img: setattr(ent, "texture", _make_texture(img, mat.color_space)))
    return ent


def _spawn_model(node):
    ent = Entity(
        position=to_entity_position(node.position),
        rotation=to_entity_rotation(node.rotation),
        scale=Vec3(*node.scale),
    )
    node.model.reparent_to(ent)
    return ent


_SPAWNERS = {"light": _spawn_light, "mesh": _spawn_mesh, "model": _spawn_model}


def _handle_scene_event(ev):
    if ev["type"] == "add_node":
        node = ev["node"]
        entities[node.name] = _SPAWNERS[node.kind](node)


def _flush_scene_events():
    for ev in pool_scene.pending_events:
        _handle_scene_event(ev)
    pool_scene.pending_events.clear()


_flush_scene_events()
chalk_entity = entities["chalk"]

render_loop = RenderLoop(pool_scene.chalk, pool_scene.controls)
_clock = ClockObject.get_global_clock()


def _sync_camera():
    controls = pool_scene.controls
    camera.position = to_entity_position(controls.position)
    camera.look_at(to_entity_position(controls.target))


_sync_camera()


# ──────────────────────────────────────────
# Input handler
# ──────────────────────────────────────────

def input(key):
    if key == "scroll up":
        pool_scene.controls.dolly_in()
    elif key == "scroll down":
        pool_scene.controls.dolly_out()


# ──────────────────────────────────────────
# Update loop
# ──────────────────────────────────────────

def update():
    # ── Asset arrivals (textures bind, fly model appends) ────────────────────
    pool_scene.poll()
    _flush_scene_events()

    # ── Orbit drag ────────────────────────────────────────────────────────────
    if mouse.left:
        pool_scene.controls.drag(*frames.drag_delta(mouse.velocity, window.aspect_ratio))

    # ── Frame step: chalk spin + controls update ─────────────────────────────
    render_loop.frame(_clock.get_frame_time() * 1000.0)

    chalk_entity.rotation = to_entity_rotation(pool_scene.chalk.rotation)
    _sync_camera()
    if skybox is not None:
        skybox.position = camera.world_position


# ──────────────────────────────────────────
# Run
# ──────────────────────────────────────────

if __name__ == "__main__":
    app.run()
