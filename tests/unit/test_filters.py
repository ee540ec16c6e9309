import pytest

from fakes import module
from reactorscan.config import ScanConfig
from reactorscan.filters import ModuleFilter, compile_pattern


@pytest.mark.parametrize(
    ("glob", "value", "matches"),
    [
        ("excluded-*", "excluded-mod", True),
        ("excluded-*", "my-excluded-mod", False),
        ("*-api", "billing-api", True),
        ("com.acme", "comXacme", False),
        ("com.acme", "com.acme", True),
        ("lib", "library", False),
        ("a+b*", "a+bc", True),
    ],
)
def test_compile_pattern_full_match(glob: str, value: str, matches: bool) -> None:
    assert bool(compile_pattern(glob).fullmatch(value)) is matches


def test_default_ignored_scopes() -> None:
    f = ModuleFilter(ScanConfig(), None)

    assert f.should_ignore_scope("test")
    assert f.should_ignore_scope("provided")
    assert not f.should_ignore_scope("compile")
    assert not f.should_ignore_scope("Test")
    assert not f.should_ignore_scope("")
    assert not f.should_ignore_scope(None)


def test_custom_scopes_replace_defaults() -> None:
    f = ModuleFilter(ScanConfig(ignored_scopes=("runtime",)), None)

    assert f.should_ignore_scope("runtime")
    assert not f.should_ignore_scope("test")


def test_legacy_and_primary_scopes_are_unioned() -> None:
    config = ScanConfig(scope=("system", "test"), ignored_scopes=("test", "runtime"))

    assert config.ignored_scope_set == {"system", "test", "runtime"}


def test_empty_scope_configuration_reverts_to_defaults() -> None:
    assert ScanConfig(scope=(), ignored_scopes=()).ignored_scope_set == {"test", "provided"}


def test_pom_modules_skipped_before_root_rule() -> None:
    root = module("parent", packaging="pom")
    f = ModuleFilter(ScanConfig(ignore_pom_modules=True), root)

    assert not f.should_process_module(root)
    assert f.should_process_module(module("child"))


def test_root_module_ignores_patterns() -> None:
    root = module("excluded-root")
    f = ModuleFilter(ScanConfig(excludes=("excluded-*",)), root)

    assert f.should_process_module(root)
    assert not f.should_process_module(module("excluded-other"))


def test_root_module_ignore_flag() -> None:
    root = module("root", ignore=True)

    assert not ModuleFilter(ScanConfig(), root).should_process_module(root)
    assert not ModuleFilter(ScanConfig(ignore=True), module("r")).should_process_module(
        module("r")
    )


def test_exclude_wins_over_include() -> None:
    f = ModuleFilter(ScanConfig(includes=("core-*",), excludes=("core-*",)), module("root"))

    assert not f.should_process_module(module("core-api"))


def test_include_patterns_restrict_modules() -> None:
    f = ModuleFilter(
        ScanConfig(includes=("core-*",), excludes=("*-it",)), module("root")
    )

    assert f.should_process_module(module("core-api"))
    assert not f.should_process_module(module("web"))
    assert not f.should_process_module(module("core-it"))


def test_none_module_is_rejected() -> None:
    assert not ModuleFilter(ScanConfig(), None).should_process_module(None)
