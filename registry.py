import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from utils import IconStyle, NamingCollision, ResolvedAsset

NON_IDENT_RE = re.compile(r"\W", re.ASCII)
STYLE_ORDER = {style: i for i, style in enumerate(IconStyle)}

VariantKey = Tuple[IconStyle, bool]


def _ident(name: str) -> str:
    return NON_IDENT_RE.sub("_", name)


def constant_name(name: str, style: IconStyle, filled: bool) -> str:
    return f"ICON_{_ident(name).upper()}_{'FILLED_' if filled else ''}{style.name}"


def function_name(name: str) -> str:
    return f"icon_{_ident(name).lower()}"


@dataclass(frozen=True)
class Entry:
    asset: ResolvedAsset
    constant: str

    @property
    def key(self) -> VariantKey:
        return (self.asset.request.style, self.asset.request.filled)


@dataclass
class IconGroup:
    name: str
    function: str
    variants: Dict[VariantKey, Entry] = field(default_factory=dict)

    def entries(self) -> List[Entry]:
        return sorted(
            self.variants.values(),
            key=lambda e: (e.key[1], STYLE_ORDER[e.key[0]]),
        )


@dataclass
class Registry:
    groups: Dict[str, IconGroup] = field(default_factory=dict)

    def sorted_groups(self) -> List[IconGroup]:
        return [self.groups[name] for name in sorted(self.groups)]

    def entries(self) -> List[Entry]:
        return [e for g in self.sorted_groups() for e in g.entries()]

    def __len__(self):
        return sum(len(g.variants) for g in self.groups.values())


def build_registry(assets: Iterable[ResolvedAsset]) -> Registry:
    registry = Registry()
    constants: Dict[str, ResolvedAsset] = {}
    functions: Dict[str, str] = {}

    for asset in assets:
        icon = asset.request
        const = constant_name(icon.name, icon.style, icon.filled)

        group = registry.groups.get(icon.name)
        if group is None:
            func = function_name(icon.name)
            if func in functions:
                raise NamingCollision(
                    functions[func],
                    icon.name,
                    f"Icons {functions[func]!r} and {icon.name!r} both map to {func}()",
                )
            functions[func] = icon.name
            group = registry.groups[icon.name] = IconGroup(icon.name, func)

        key = (icon.style, icon.filled)
        if key in group.variants:
            raise NamingCollision(
                const,
                const,
                f"Icon {icon.describe()} is declared more than once",
            )

        if const in constants:
            other = constants[const].request
            raise NamingCollision(
                other.describe(),
                icon.describe(),
                f"Icons {other.describe()} and {icon.describe()} both map to {const}",
            )
        constants[const] = asset

        group.variants[key] = Entry(asset, const)

    logging.debug(f"Registry: {len(registry.groups)} icons, {len(constants)} variants")
    return registry
