"""
PoolScene — Layer 2 (Scene Description)

Owns the scene graph, camera spec, orbit controls and the asset loaders.
Builds every node as plain data; Layer 3 (main.py / Ursina) turns nodes into
entities by consuming:
  scene.pending_events  : [{"type": "add_node", "node": ...}, ...]

Startup order: bootstrap → lights → assets → geometry → rack.
Nodes are only ever appended; the chalk rotation is the one per-frame write.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Union

import numpy as np

import config
import layout
from loading import AssetHandle, AssetLoader
from orbit import OrbitControls


# ── Geometry descriptors ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class BoxGeometry:
    width: float
    height: float
    depth: float


@dataclass(frozen=True)
class SphereGeometry:
    radius: float
    width_segments: int = 32
    height_segments: int = 16


@dataclass(frozen=True)
class CylinderGeometry:
    radius_top: float
    radius_bottom: float
    height: float
    radial_segments: int = 32


Geometry = Union[BoxGeometry, SphereGeometry, CylinderGeometry]


@dataclass(frozen=True)
class Material:
    color: int = 0xFFFFFF
    texture: Optional[AssetHandle] = None
    color_space: str = "srgb"


# ── Nodes ─────────────────────────────────────────────────────────────────────

def _vec3(value) -> np.ndarray:
    return np.array(value, dtype=float)


@dataclass(eq=False)
class MeshNode:
    name: str
    geometry: Geometry
    material: Material
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self):
        self.position = _vec3(self.position)
        self.rotation = _vec3(self.rotation)
        self.scale = _vec3(self.scale)

    kind = "mesh"


@dataclass(eq=False)
class LightNode:
    name: str
    light_type: str      # "directional" | "ambient" | "point"
    color: int
    intensity: float
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    distance: float = 0.0  # 0 = unlimited range

    def __post_init__(self):
        self.position = _vec3(self.position)

    kind = "light"


@dataclass(eq=False)
class ModelNode:
    name: str
    model: object        # renderer-specific loaded sub-scene
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self):
        self.position = _vec3(self.position)
        self.rotation = _vec3(self.rotation)
        self.scale = _vec3(self.scale)

    kind = "model"


Node = Union[MeshNode, LightNode, ModelNode]


@dataclass(frozen=True)
class CameraSpec:
    position: tuple = config.CAMERA_POSITION
    target: tuple = config.CAMERA_TARGET
    fov: float = config.CAMERA_FOV
    near: float = config.CAMERA_NEAR
    far: float = config.CAMERA_FAR


@dataclass
class SkyboxSpec:
    faces: List[AssetHandle]
    size: float = config.SKYBOX_SIZE


class SceneGraph:
    """Ordered, append-only collection of nodes plus one background."""

    def __init__(self):
        self.nodes: List[Node] = []
        self.background: Optional[SkyboxSpec] = None
        self._by_name = {}

    def add(self, node: Node) -> Node:
        if node.name in self._by_name:
            raise ValueError(f"SceneGraph.add: node '{node.name}' already present")
        self.nodes.append(node)
        self._by_name[node.name] = node
        return node

    def get(self, name: str) -> Node:
        return self._by_name[name]

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)

    def describe(self) -> List[dict]:
        rows = []
        for node in self.nodes:
            pos = getattr(node, "position", None)
            rows.append({
                "kind": node.kind,
                "name": node.name,
                "position": tuple(round(float(v), 4) for v in pos) if pos is not None else None,
            })
        return rows


# ──────────────────────────────────────────
# Node builders (pure: return nodes, never touch the graph)
# ──────────────────────────────────────────

def build_lights() -> List[LightNode]:
    d_color, d_intensity, d_pos = config.DIRECTIONAL_LIGHT
    a_color, a_intensity = config.AMBIENT_LIGHT
    p_color, p_intensity, p_pos = config.POINT_LIGHT
    return [
        LightNode("directional_light", "directional", d_color, d_intensity, d_pos),
        LightNode("ambient_light", "ambient", a_color, a_intensity),
        LightNode("point_light", "point", p_color, p_intensity, p_pos,
                  distance=config.POINT_LIGHT_DISTANCE),
    ]


def build_table(felt: Optional[AssetHandle]) -> MeshNode:
    return MeshNode(
        "table",
        BoxGeometry(layout.TABLE_WIDTH, layout.TABLE_HEIGHT, layout.TABLE_DEPTH),
        Material(texture=felt),
        position=layout.TABLE_POSITION,
    )


LEG_COLOR = 0x654321
CUE_COLOR = 0x8B4513
CUE_BALL_COLOR = 0xFFFFFF
BORDER_COLOR = 0x5C4033
POCKET_COLOR = 0x000000

CUE_TILT = math.pi / 1.99
CUE_POSITION = (5.0, -0.5, 0.0)
CHALK_SIZE = 0.5
CHALK_POSITION = (4.0, -0.5, -1.5)


def build_legs() -> List[MeshNode]:
    geo = BoxGeometry(*layout.LEG_SIZE)
    mat = Material(color=LEG_COLOR)
    return [MeshNode(f"leg_{i}", geo, mat, position=offset)
            for i, offset in enumerate(layout.LEG_OFFSETS)]


def build_rack(textures: List[Optional[AssetHandle]], **layout_kwargs) -> List[MeshNode]:
    """One textured sphere per rack slot, numbered in placement order."""
    geo = SphereGeometry(layout.BALL_RADIUS, 32, 16)
    positions = layout.rack_positions(count=len(textures), **layout_kwargs)
    return [
        MeshNode(f"ball_{i + 1}", geo, Material(texture=textures[i]), position=pos)
        for i, pos in enumerate(positions)
    ]


def build_cue() -> MeshNode:
    return MeshNode(
        "cue",
        CylinderGeometry(0.05, 0.1, 6.0, 32),
        Material(color=CUE_COLOR),
        position=CUE_POSITION,
        rotation=(0.0, 0.0, CUE_TILT),
    )


def build_chalk(texture: Optional[AssetHandle]) -> MeshNode:
    return MeshNode(
        "chalk",
        BoxGeometry(CHALK_SIZE, CHALK_SIZE, CHALK_SIZE),
        Material(texture=texture),
        position=CHALK_POSITION,
    )


def build_cue_ball() -> MeshNode:
    return MeshNode(
        "cue_ball",
        SphereGeometry(layout.BALL_RADIUS, 32, 16),
        Material(color=CUE_BALL_COLOR),
        position=layout.CUE_BALL_POSITION,
    )


def build_borders() -> List[MeshNode]:
    mat = Material(color=BORDER_COLOR)
    return [MeshNode(name, BoxGeometry(*size), mat, position=pos)
            for name, size, pos in layout.border_walls()]


def build_pockets() -> List[MeshNode]:
    geo = SphereGeometry(layout.POCKET_RADIUS, 16, 16)
    mat = Material(color=POCKET_COLOR)
    return [MeshNode(f"pocket_{i}", geo, mat, position=pos)
            for i, pos in enumerate(layout.pocket_positions())]


def build_fly(model) -> ModelNode:
    return ModelNode(
        "fly", model,
        position=config.FLY_POSITION,
        rotation=(0.0, config.FLY_ROTATION_Y, 0.0),
        scale=(config.FLY_SCALE,) * 3,
    )


# ──────────────────────────────────────────
# PoolScene
# ──────────────────────────────────────────

class PoolScene:
    """Application context: scene graph + camera + controls + loaders."""

    def __init__(self, loader: AssetLoader, skybox_loader: Optional[AssetLoader] = None,
                 load_model: bool = True):
        self.loader = loader
        self.skybox_loader = skybox_loader
        self.load_model = load_model

        self.graph = SceneGraph()
        self.camera = CameraSpec()
        self.controls: Optional[OrbitControls] = None
        self.chalk: Optional[MeshNode] = None
        self.pending_events: List[dict] = []

    def _add(self, node: Node) -> Node:
        self.graph.add(node)
        self.pending_events.append({"type": "add_node", "node": node})
        return node

    def _add_all(self, nodes) -> None:
        for node in nodes:
            self._add(node)

    # ── Startup sequence ──────────────────────────────────────────────────────

    def build(self) -> "PoolScene":
        self.bootstrap()
        self._add_all(build_lights())
        felt, chalk_tex, ball_textures = self.request_textures()
        self._add(build_table(felt))
        self._add_all(build_legs())
        self._add_all(build_rack(ball_textures))
        self._add(build_cue())
        self.chalk = self._add(build_chalk(chalk_tex))
        if self.load_model:
            self.request_model()
        self._add(build_cue_ball())
        self._add_all(build_borders())
        self._add_all(build_pockets())
        print(f"[SCENE] composed {len(self.graph)} nodes, "
              f"{self.loader.outstanding} assets outstanding")
        return self

    def bootstrap(self) -> None:
        self.controls = OrbitControls(
            self.camera.position, self.camera.target,
            enable_damping=config.ENABLE_DAMPING,
            damping_factor=config.DAMPING_FACTOR,
            rotate_speed=config.ROTATE_SPEED,
            zoom_speed=config.ZOOM_SPEED,
        )
        if self.skybox_loader is not None:
            faces = [self.skybox_loader.load(path) for path in config.SKYBOX_FACES]
            self.graph.background = SkyboxSpec(faces)

    def request_textures(self):
        felt = self.loader.load(config.FELT_TEXTURE)
        balls = [self.loader.load(f"{config.BALL_TEXTURE_DIR}/{name}")
                 for name in layout.BALL_TEXTURES]
        chalk = self.loader.load(config.CHALK_TEXTURE)
        return felt, chalk, balls

    def request_model(self) -> AssetHandle:
        handle = self.loader.load(config.FLY_MODEL, kind="model")
        handle.then(lambda model: self._add(build_fly(model)))
        return handle

    def poll(self) -> int:
        settled = self.loader.poll()
        if self.skybox_loader is not None:
            settled += self.skybox_loader.poll()
        return settled
