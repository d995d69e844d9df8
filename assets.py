import logging
from pathlib import Path
from typing import Iterable, List

from tqdm import tqdm

from utils import AssetNotFound, IconRequest, ResolvedAsset

SHIPPED_ICONS_PATH = "icons"


def asset_path(assets_root: Path, icon: IconRequest) -> Path:
    """<assets_root>/<name>/<filled->?<style>.svg"""
    return Path(assets_root) / icon.name / icon.file_name()


def resolve_icons(icons: Iterable[IconRequest], assets_root: Path) -> List[ResolvedAsset]:
    """Pair every request with its SVG. Every declared icon must have one."""
    icons = list(icons)
    resolved = []

    for icon in tqdm(icons, desc="Resolving icons", unit=" icons", disable=not icons):
        path = asset_path(assets_root, icon)

        # The name is a single directory below the root, nothing else.
        if Path(icon.name).name != icon.name or icon.name in (".", ".."):
            raise AssetNotFound(icon.name, path)

        if not path.is_file():
            raise AssetNotFound(icon.name, path)

        logging.debug(f"{icon.describe()} -> {path}")
        resolved.append(ResolvedAsset(icon, path))

    return resolved
