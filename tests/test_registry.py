import itertools
from pathlib import Path

import pytest

import registry
from utils import IconRequest, IconStyle, NamingCollision, ResolvedAsset


def _asset(name: str, style: IconStyle = IconStyle.OUTLINED, filled: bool = False) -> ResolvedAsset:
    icon = IconRequest(name, style, filled)
    return ResolvedAsset(icon, Path("icons") / name / icon.file_name())


@pytest.mark.parametrize(
    ("name", "style", "filled", "expected"),
    [
        ("home", IconStyle.OUTLINED, False, "ICON_HOME_OUTLINED"),
        ("settings", IconStyle.ROUNDED, True, "ICON_SETTINGS_FILLED_ROUNDED"),
        ("arrow_back", IconStyle.SHARP, False, "ICON_ARROW_BACK_SHARP"),
        ("arrow-back", IconStyle.SHARP, True, "ICON_ARROW_BACK_FILLED_SHARP"),
        ("3d_rotation", IconStyle.OUTLINED, False, "ICON_3D_ROTATION_OUTLINED"),
    ],
)
def test_constant_name(name: str, style: IconStyle, filled: bool, expected: str) -> None:
    assert registry.constant_name(name, style, filled) == expected
    assert expected.isidentifier()


def test_constant_names_are_injective_over_variants() -> None:
    names = {
        registry.constant_name("home", style, filled)
        for style, filled in itertools.product(IconStyle, (False, True))
    }

    assert len(names) == 6


def test_function_name() -> None:
    assert registry.function_name("home") == "icon_home"
    assert registry.function_name("Arrow-Back") == "icon_arrow_back"


def test_build_registry_groups_by_name() -> None:
    assets = [
        _asset("home"),
        _asset("settings", IconStyle.ROUNDED, True),
        _asset("home", IconStyle.SHARP, True),
    ]

    reg = registry.build_registry(assets)

    assert sorted(reg.groups) == ["home", "settings"]
    assert len(reg) == 3
    home = reg.groups["home"]
    assert home.function == "icon_home"
    assert set(home.variants) == {(IconStyle.OUTLINED, False), (IconStyle.SHARP, True)}
    assert home.variants[(IconStyle.SHARP, True)].constant == "ICON_HOME_FILLED_SHARP"
    assert home.variants[(IconStyle.OUTLINED, False)].asset == assets[0]


def test_build_registry_order_does_not_matter() -> None:
    assets = [
        _asset("b", IconStyle.SHARP),
        _asset("a"),
        _asset("b", IconStyle.OUTLINED, True),
        _asset("b"),
    ]

    forward = registry.build_registry(assets)
    backward = registry.build_registry(reversed(assets))

    assert [e.constant for e in forward.entries()] == [e.constant for e in backward.entries()]
    assert [e.constant for e in forward.entries()] == [
        "ICON_A_OUTLINED",
        "ICON_B_OUTLINED",
        "ICON_B_SHARP",
        "ICON_B_FILLED_OUTLINED",
    ]


def test_duplicate_variant_is_rejected() -> None:
    with pytest.raises(NamingCollision) as exc_info:
        registry.build_registry([_asset("home"), _asset("home")])

    assert exc_info.value.first == exc_info.value.second == "ICON_HOME_OUTLINED"
    assert "more than once" in str(exc_info.value)


def test_distinct_names_with_same_constant_collide() -> None:
    with pytest.raises(NamingCollision) as exc_info:
        registry.build_registry([_asset("arrow-back"), _asset("arrow_back", IconStyle.SHARP), _asset("arrow_back")])

    assert "arrow" in exc_info.value.first
    assert "arrow" in exc_info.value.second


def test_distinct_names_with_same_function_collide() -> None:
    with pytest.raises(NamingCollision) as exc_info:
        registry.build_registry([_asset("Home", IconStyle.SHARP), _asset("home")])

    assert {exc_info.value.first, exc_info.value.second} == {"Home", "home"}


def test_empty_registry() -> None:
    reg = registry.build_registry([])

    assert reg.groups == {}
    assert reg.entries() == []
    assert len(reg) == 0
