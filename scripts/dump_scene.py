"""Compose the scene without a window and print one line per node.

    python scripts/dump_scene.py [asset_dir]
"""

import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import config
from loading import AssetLoader, LoadingManager
from scene import PoolScene


def _model_path(path: Path):
    if not path.is_file():
        raise FileNotFoundError(f"no model file at {path}")
    return str(path)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    root = Path(argv[0]) if argv else config.ASSET_DIR

    manager = LoadingManager(on_load=lambda: print("[ASSETS] all assets settled"))
    loader = AssetLoader(root, manager, fetchers={"model": _model_path})
    pool_scene = PoolScene(loader).build()
    loader.drain(timeout=30)
    loader.shutdown()

    for row in pool_scene.graph.describe():
        pos = row["position"]
        where = "" if pos is None else "(" + ", ".join(f"{v:7.3f}" for v in pos) + ")"
        print(f"{row['kind']:<6} {row['name']:<18} {where}")
    print(f"[SCENE] {len(pool_scene.graph)} nodes, progress {manager.loaded}/{manager.total}")


if __name__ == "__main__":
    main()
