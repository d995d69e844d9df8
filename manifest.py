"""Read icons.json into a list of IconRequest.

Entries are either a bare icon name, or an object with `name`, and the
optional `style` ("outlined", "rounded" or "sharp") and `filled` keys:

    ["home", {"name": "settings", "style": "rounded", "filled": true}]
"""

import json
import logging
from pathlib import Path
from typing import List

from utils import IconRequest, IconStyle, ManifestNotFound, ManifestParseError

CONFIG_FILE = "icons.json"
KNOWN_KEYS = {"name", "style", "filled"}


def _check_name(name: str, where: str):
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        raise ManifestParseError(f"{where}: icon name {name!r} is not valid UTF-8") from None


def _parse_entry(entry, index: int, source: str) -> IconRequest:
    where = f"{source}: entry {index}"

    if isinstance(entry, str):
        if not entry:
            raise ManifestParseError(f"{where}: icon name is empty")
        _check_name(entry, where)
        return IconRequest(entry)

    if not isinstance(entry, dict):
        raise ManifestParseError(
            f"{where}: expected a name or an object, got {type(entry).__name__}"
        )

    unknown = set(entry) - KNOWN_KEYS
    if unknown:
        raise ManifestParseError(f"{where}: unknown keys {sorted(unknown)}")

    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise ManifestParseError(f"{where}: `name` must be a non-empty string")
    _check_name(name, where)

    style = entry.get("style", IconStyle.OUTLINED.value)
    if not isinstance(style, str):
        raise ManifestParseError(f"{where}: `style` must be a string")
    try:
        style = IconStyle.parse(style)
    except ValueError as e:
        raise ManifestParseError(f"{where}: {e}") from None

    # bool only: json gives us 0/1 as int, which we don't accept
    filled = entry.get("filled", False)
    if not isinstance(filled, bool):
        raise ManifestParseError(f"{where}: `filled` must be true or false")

    return IconRequest(name, style, filled)


def parse_icons(text: str, source: str = "<manifest>") -> List[IconRequest]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Couldn't parse {source}: {e}") from e

    if not isinstance(data, list):
        raise ManifestParseError(
            f"{source}: expected a list of icons, got {type(data).__name__}"
        )

    return [_parse_entry(entry, i, source) for i, entry in enumerate(data)]


def load_icons(config_dir: Path, missing_ok: bool = False) -> List[IconRequest]:
    config_path = Path(config_dir) / CONFIG_FILE
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        if missing_ok:
            logging.info(f"No {CONFIG_FILE} in {config_dir}, embedding no icons.")
            return []
        raise ManifestNotFound(config_path) from None
    except UnicodeDecodeError as e:
        raise ManifestParseError(f"Couldn't decode {config_path}: {e}") from e

    icons = parse_icons(text, str(config_path))
    logging.debug(f"Loaded {len(icons)} icon requests from {config_path}")
    return icons
