#!python3
"""Pack the resolved icon SVGs into a generated source module.

The Python target produces a module exposing:

    IconStyle                 enum of OUTLINED, ROUNDED, SHARP
    ICON_<NAME>_<STYLE>       one bytes constant per declared variant
    icon_<name>(style, filled)
    icon(name, style, filled)

Lookups of variants or names that were never declared raise NoSuchVariant or
NoSuchIcon. The Typst target mirrors the same surface with `panic`.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List

from tqdm import tqdm

from registry import Entry, IconGroup, Registry
from utils import AssetReadError, IconStyle, WriteError

CONSTANTS_FILE = "icons.py"
TYPST_CONSTANTS_FILE = "icons.typ"
TARGETS = ("python", "typst")
OUTPUT_FILES = {"python": CONSTANTS_FILE, "typst": TYPST_CONSTANTS_FILE}

HEADER = "Generated by build-icons from icons.json. Do not edit."
CHUNK = 72
TYPST_ROW = 24


def _read_entries(registry: Registry):
    entries = registry.entries()
    for entry in tqdm(entries, desc="Embedding SVGs", unit=" files", disable=not entries):
        path = entry.asset.path
        try:
            data = path.read_bytes()
        except OSError as e:
            raise AssetReadError(entry.asset.request.name, path, e) from e
        yield entry, data


def _bytes_literal(data: bytes) -> List[str]:
    """Split `data` into short b"" literals, line breaks of the SVG first."""
    if not data:
        return ['b""']
    parts = []
    for line in data.splitlines(keepends=True):
        for i in range(0, len(line), CHUNK):
            parts.append(repr(line[i : i + CHUNK]))
    return parts


# ===--- Python ---=== #

PY_PRELUDE = '''\
import enum


class IconStyle(enum.Enum):
    OUTLINED = "outlined"
    ROUNDED = "rounded"
    SHARP = "sharp"


class NoSuchIcon(LookupError):
    """No icon with this name was declared in icons.json."""


class NoSuchVariant(LookupError):
    """The icon exists, but not with this style and fill."""


def _lookup(name, variants, style, filled):
    try:
        return variants[(IconStyle(style), filled)]
    except (KeyError, ValueError, TypeError):
        raise NoSuchVariant(
            f"there is no {name!r} icon with style={style!r}, filled={filled!r}"
        ) from None
'''

PY_GLOBAL = '''

def icon(name, style=IconStyle.OUTLINED, filled=False):
    """Return the SVG bytes of the declared icon `name` in the given variant."""
    try:
        func = _ICONS[name]
    except (KeyError, TypeError):
        raise NoSuchIcon(f"there is no icon called {name!r}") from None
    return func(style, filled)
'''


def _py_constant(entry: Entry, data: bytes) -> str:
    icon = entry.asset.request
    parts = _bytes_literal(data)
    lines = [f"# {icon.name!r}/{icon.file_name()}"]
    if len(parts) == 1:
        lines.append(f"{entry.constant} = {parts[0]}")
    else:
        lines.append(f"{entry.constant} = (")
        lines.extend(f"    {p}" for p in parts)
        lines.append(")")
    return "\n".join(lines)


def _py_function(group: IconGroup) -> str:
    table = f"_{group.function.upper()}_VARIANTS"
    lines = [f"{table} = {{"]
    for entry in group.entries():
        style, filled = entry.key
        lines.append(f"    (IconStyle.{style.name}, {filled}): {entry.constant},")
    lines.append("}")
    lines.append("")
    lines.append("")
    lines.append(f"def {group.function}(style, filled):")
    lines.append('    """Return the SVG bytes of this icon in the given variant."""')
    lines.append(f"    return _lookup({group.name!r}, {table}, style, filled)")
    return "\n".join(lines)


def render_python(registry: Registry) -> str:
    groups = registry.sorted_groups()
    names = ["IconStyle", "NoSuchIcon", "NoSuchVariant", "icon"]
    names += [g.function for g in groups]
    names += [e.constant for e in registry.entries()]

    out = [f"# {HEADER}", "", PY_PRELUDE]
    for entry, data in _read_entries(registry):
        out.append("")
        out.append(_py_constant(entry, data))
        out.append("")

    for group in groups:
        out.append("")
        out.append(_py_function(group))
        out.append("")

    out.append("")
    out.append("_ICONS = {")
    out.extend(f"    {g.name!r}: {g.function}," for g in groups)
    out.append("}")
    out.append(PY_GLOBAL)
    out.append("")
    out.append("__all__ = [")
    out.extend(f'    "{n}",' for n in names)
    out.append("]")
    out.append("")
    return "\n".join(out)


# ===--- Typst ---=== #


def _typst_str(s: str) -> str:
    s = s.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{s}"'


def _typst_if_chain(branches, fallback: str, indent: str = "  ") -> List[str]:
    if not branches:
        return [f"{indent}{fallback}"]
    lines = []
    for i, (cond, value) in enumerate(branches):
        lead = "if" if i == 0 else "} else if"
        lines.append(f"{indent}{lead} {cond} {{")
        lines.append(f"{indent}  {value}")
    lines.append(f"{indent}}} else {{")
    lines.append(f"{indent}  {fallback}")
    lines.append(f"{indent}}}")
    return lines


def _typst_constant(entry: Entry, data: bytes) -> str:
    icon = entry.asset.request
    rows = [
        ", ".join(str(b) for b in data[i : i + TYPST_ROW])
        for i in range(0, len(data), TYPST_ROW)
    ]
    lines = [f"// {icon.name!r}/{icon.file_name()}"]
    if not rows:
        lines.append(f"#let {entry.constant} = bytes(())")
    else:
        lines.append(f"#let {entry.constant} = bytes((")
        lines.extend(f"  {row}," for row in rows)
        lines.append("))")
    return "\n".join(lines)


def _typst_function(group: IconGroup) -> str:
    branches = []
    for entry in group.entries():
        style, filled = entry.key
        cond = f'(style, filled) == ("{style.value}", {str(filled).lower()})'
        branches.append((cond, entry.constant))
    fallback = (
        f'panic("there is no " + {_typst_str(group.name)}'
        ' + " icon with style " + repr(style) + ", filled " + repr(filled))'
    )
    lines = [f"#let {group.function}(style, filled) = {{"]
    lines.extend(_typst_if_chain(branches, fallback))
    lines.append("}")
    return "\n".join(lines)


def render_typst(registry: Registry) -> str:
    groups = registry.sorted_groups()
    styles = ", ".join(f'{s.value}: "{s.value}"' for s in IconStyle)

    out = [f"// {HEADER}", "", f"#let icon-style = ({styles})", ""]
    for entry, data in _read_entries(registry):
        out.append(_typst_constant(entry, data))
        out.append("")

    for group in groups:
        out.append(_typst_function(group))
        out.append("")

    branches = [
        (f"name == {_typst_str(g.name)}", f"{g.function}(style, filled)")
        for g in groups
    ]
    out.append('#let icon(name, style, filled) = {')
    out.extend(_typst_if_chain(branches, 'panic("there is no icon called " + repr(name))'))
    out.append("}")
    out.append("")
    return "\n".join(out)


RENDERERS = {"python": render_python, "typst": render_typst}


def _write_atomic(path: Path, text: str):
    """Write `text` to `path` in full, or leave `path` untouched."""
    path = Path(path)
    tmp = None
    try:
        data = text.encode("utf-8")
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=path.parent, prefix=f".{path.name}.", delete=False
        ) as f:
            tmp = Path(f.name)
            f.write(data)
        os.chmod(tmp, 0o644)
        os.replace(tmp, path)
    except (OSError, UnicodeError) as e:
        if tmp is not None:
            tmp.unlink(missing_ok=True)
        raise WriteError(f"Couldn't write {path}: {e}") from e


def pack(registry: Registry, output: Path, target: str = "python") -> Path:
    if target not in RENDERERS:
        raise ValueError(f"Unknown target {target!r} (expected one of {TARGETS})")

    text = RENDERERS[target](registry)

    output = Path(output)
    _write_atomic(output, text)

    logging.info(f"Wrote {len(registry)} icon variants to {output}")
    return output


def _dep_escape(path) -> str:
    return str(path).replace("\\", "\\\\").replace(" ", "\\ ").replace("$", "$$")


def write_depfile(depfile: Path, output: Path, inputs: Iterable[Path]):
    """Make-style dependency file, so the build reruns us when any input changes."""
    deps = " \\\n  ".join(_dep_escape(p) for p in inputs)
    text = f"{_dep_escape(output)}: {deps}\n" if deps else f"{_dep_escape(output)}:\n"
    _write_atomic(depfile, text)
