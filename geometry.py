"""
Procedural mesh data — Layer 1
numpy vertex/triangle arrays for shapes the renderer has no built-in model for.
"""

from dataclasses import dataclass

import numpy as np


@dataclass
class MeshData:
    vertices: np.ndarray   # (n, 3) float
    triangles: np.ndarray  # (m, 3) int
    normals: np.ndarray    # (n, 3) float
    uvs: np.ndarray        # (n, 2) float

    def as_lists(self):
        """Plain Python lists, as expected by renderer mesh constructors."""
        return (
            [tuple(v) for v in self.vertices.tolist()],
            [tuple(t) for t in self.triangles.tolist()],
            [tuple(n) for n in self.normals.tolist()],
            [tuple(u) for u in self.uvs.tolist()],
        )


def tapered_cylinder(radius_top: float, radius_bottom: float, height: float,
                     radial_segments: int = 32, capped: bool = True) -> MeshData:
    """
    Build a (possibly tapered) cylinder centered on the origin, axis +Y.

    The side is a ring strip of radial_segments + 1 columns so the texture
    seam gets its own vertices. Caps are triangle fans around a center vertex.
    """
    if radial_segments < 3:
        raise ValueError(f"tapered_cylinder: need at least 3 segments, got {radial_segments}")
    if height <= 0:
        raise ValueError(f"tapered_cylinder: height must be positive, got {height}")

    half = height / 2.0
    theta = np.linspace(0.0, 2.0 * np.pi, radial_segments + 1)
    sin_t, cos_t = np.sin(theta), np.cos(theta)

    # Side normals lean outward by the taper slope
    slope = (radius_bottom - radius_top) / height
    side_n = np.stack([sin_t, np.full_like(theta, slope), cos_t], axis=1)
    side_n /= np.linalg.norm(side_n, axis=1, keepdims=True)

    top = np.stack([radius_top * sin_t, np.full_like(theta, half), radius_top * cos_t], axis=1)
    bot = np.stack([radius_bottom * sin_t, np.full_like(theta, -half), radius_bottom * cos_t], axis=1)
    u = theta / (2.0 * np.pi)

    verts = [top, bot]
    norms = [side_n, side_n]
    uvs = [np.stack([u, np.ones_like(u)], axis=1), np.stack([u, np.zeros_like(u)], axis=1)]

    cols = radial_segments + 1
    i = np.arange(radial_segments)
    a, b = i, i + 1                 # top ring
    c, d = i + cols, i + 1 + cols   # bottom ring
    tris = [np.stack([a, c, b], axis=1), np.stack([b, c, d], axis=1)]
    offset = 2 * cols

    if capped:
        for y, radius, sign in ((half, radius_top, 1.0), (-half, radius_bottom, -1.0)):
            if radius <= 0:
                continue
            ring = np.stack([radius * sin_t, np.full_like(theta, y), radius * cos_t], axis=1)
            center = np.array([[0.0, y, 0.0]])
            verts.append(np.vstack([center, ring]))
            norms.append(np.tile([0.0, sign, 0.0], (cols + 1, 1)))
            ring_uv = np.stack([cos_t * 0.5 + 0.5, sin_t * 0.5 * sign + 0.5], axis=1)
            uvs.append(np.vstack([[[0.5, 0.5]], ring_uv]))
            ctr = np.full(radial_segments, offset)
            r0 = offset + 1 + i
            r1 = offset + 2 + i
            fan = np.stack([ctr, r0, r1], axis=1) if sign > 0 else np.stack([ctr, r1, r0], axis=1)
            tris.append(fan)
            offset += cols + 1

    return MeshData(
        vertices=np.vstack(verts),
        triangles=np.vstack(tris).astype(int),
        normals=np.vstack(norms),
        uvs=np.vstack(uvs),
    )
