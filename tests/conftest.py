import importlib.util
import json
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

PROJECT_DIR = Path(__file__).resolve().parent.parent
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

HOME_SVG = b'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">\n<path d="M10 20v-6h4v6"/>\n</svg>\n'
SETTINGS_SVG = b'<svg xmlns="http://www.w3.org/2000/svg"><circle r="3"/></svg>'


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project root with a pyproject.toml and an empty icons/ tree."""
    root = tmp_path / "project"
    (root / "icons").mkdir(parents=True)
    (root / "pyproject.toml").write_text("[project]\nname = 'consumer'\n", encoding="utf-8")
    return root


@pytest.fixture
def write_manifest(project: Path) -> Callable[[object], Path]:
    def _write_manifest(entries: object) -> Path:
        path = project / "icons.json"
        path.write_text(json.dumps(entries), encoding="utf-8")
        return path

    return _write_manifest


@pytest.fixture
def add_asset(project: Path) -> Callable[..., Path]:
    def _add_asset(name: str, file_name: str, data: bytes = HOME_SVG) -> Path:
        path = project / "icons" / name / file_name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _add_asset


@pytest.fixture
def scenario(write_manifest, add_asset) -> dict[str, Path]:
    write_manifest(["home", {"name": "settings", "style": "rounded", "filled": True}])
    return {
        "home": add_asset("home", "outlined.svg", HOME_SVG),
        "settings": add_asset("settings", "filled-rounded.svg", SETTINGS_SVG),
    }


@pytest.fixture
def load_generated() -> Callable[[Path], object]:
    counter = iter(range(1_000_000))

    def _load_generated(path: Path):
        name = f"generated_icons_{next(counter)}"
        spec = importlib.util.spec_from_file_location(name, path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    return _load_generated
