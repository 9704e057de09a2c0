"""Write the placeholder texture pack into the asset dir.

    python scripts/make_assets.py [dest] [--force]

Existing files are left alone unless --force is given. The fly model is not
generated; drop a glTF binary at models/Fly.glb to show it.
"""

import argparse
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import config
from textures import write_asset_pack


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("dest", nargs="?", default=str(config.ASSET_DIR))
    parser.add_argument("--force", action="store_true", help="overwrite existing files")
    args = parser.parse_args(argv)

    written = write_asset_pack(args.dest, force=args.force)
    for path in written:
        print(f"[ASSETS] wrote {path}")
    print(f"[ASSETS] {len(written)} files written to {args.dest}")


if __name__ == "__main__":
    main()
