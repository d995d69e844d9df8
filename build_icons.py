#!python3
"""Embed the SVG icons declared in icons.json into a generated source module.

Run by the build before the consuming package is compiled or packaged:

    OUT_DIR=build/generated python build_icons.py

The manifest directory is found by walking up from OUT_DIR to the first
directory holding a pyproject.toml, unless --source-dir or SOURCE_DIR say
otherwise.
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from assets import SHIPPED_ICONS_PATH, resolve_icons
from manifest import CONFIG_FILE, load_icons
from pack import OUTPUT_FILES, TARGETS, pack, write_depfile
from registry import build_registry
from utils import ConfigDirNotFound, IconError, setup_logging

PROJECT_DESCRIPTOR = "pyproject.toml"
TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class GenerateConfig:
    out_dir: Path
    config_dir: Optional[Path]
    assets_root: Optional[Path]
    target: str = "python"
    depfile: Optional[Path] = None
    docs: bool = False

    @property
    def output(self) -> Path:
        return self.out_dir / OUTPUT_FILES[self.target]


def find_config_dir(start: Path) -> Path:
    """Walk up from `start` to the first directory containing pyproject.toml."""
    start = Path(start).resolve()
    for directory in (start, *start.parents):
        if (directory / PROJECT_DESCRIPTOR).exists():
            return directory
    raise ConfigDirNotFound(
        f"Couldn't find a {PROJECT_DESCRIPTOR} in {start} or any of its parents"
    )


def build_config(args: argparse.Namespace, environ: Mapping[str, str] = os.environ) -> GenerateConfig:
    out_dir = args.out_dir or environ.get("OUT_DIR")
    if not out_dir:
        raise ConfigDirNotFound("No output directory: pass --out-dir or set OUT_DIR")
    out_dir = Path(out_dir).resolve()
    logging.debug(f"Canonical output dir: {out_dir}")

    docs = args.docs or environ.get("DOCS_BUILD", "").strip().lower() in TRUTHY
    source_dir = args.source_dir or environ.get("SOURCE_DIR")

    if source_dir:
        config_dir = Path(source_dir).resolve()
    elif docs:
        # Documentation builds run out of tree, there's nothing to discover.
        config_dir = None
    else:
        config_dir = find_config_dir(out_dir)
    logging.debug(f"Canonical config dir: {config_dir}")

    assets_root = args.assets_root
    if assets_root is None and config_dir is not None:
        assets_root = config_dir / SHIPPED_ICONS_PATH

    return GenerateConfig(
        out_dir=out_dir,
        config_dir=config_dir,
        assets_root=Path(assets_root).resolve() if assets_root else None,
        target=args.target,
        depfile=args.depfile,
        docs=docs,
    )


def generate(config: GenerateConfig) -> Path:
    """Manifest -> assets -> registry -> generated module. Returns the output path."""
    if config.config_dir is None:
        icons = []
    else:
        icons = load_icons(config.config_dir, missing_ok=config.docs)

    assets = resolve_icons(icons, config.assets_root)
    registry = build_registry(assets)
    output = pack(registry, config.output, config.target)

    if config.depfile:
        inputs = [a.path for a in assets]
        if config.config_dir is not None:
            inputs.insert(0, config.config_dir / CONFIG_FILE)
        write_depfile(config.depfile, output, inputs)
        logging.debug(f"Wrote dependency file {config.depfile}")

    return output


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Embed the SVG icons declared in icons.json into a generated module."
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Directory to write the generated module to (default: $OUT_DIR)",
    )
    parser.add_argument(
        "--source-dir",
        type=Path,
        default=None,
        help=f"Directory holding {CONFIG_FILE} (default: $SOURCE_DIR, else the "
        f"nearest parent of the output directory with a {PROJECT_DESCRIPTOR})",
    )
    parser.add_argument(
        "--assets-root",
        type=Path,
        default=None,
        help=f"Directory of <icon>/<variant>.svg files (default: <source-dir>/{SHIPPED_ICONS_PATH})",
    )
    parser.add_argument(
        "--target",
        choices=TARGETS,
        default="python",
        help="Language of the generated module",
    )
    parser.add_argument(
        "--depfile",
        type=Path,
        default=None,
        help="Also write a Make-style dependency file listing every input",
    )
    parser.add_argument(
        "--docs",
        action="store_true",
        help="Documentation build: a missing manifest embeds no icons (default: $DOCS_BUILD)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv=None) -> int:
    args = build_argument_parser().parse_args(argv)

    setup_logging()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = build_config(args)
        generate(config)
    except IconError as e:
        logging.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
