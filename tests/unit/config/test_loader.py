"""
nexus-spec — unit tests for the settings loader

File: tests/unit/config/test_loader.py
Last updated: 2026-10-19

Purpose
- Validate deterministic settings loading from defaults, TOML, env overrides and explicit overrides.

What this test file should cover
- Precedence: overrides > env > file > defaults.
- ``nexus_spec.toml`` and ``[tool.nexus_spec]`` discovery.
- Env var coercion and actionable errors.
- The active-settings slot.

Functional requirements
- Works offline; never reads the developer's real environment.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from nexus_spec.config import (
    ConfigLoadError,
    SpecSettings,
    configure,
    get_settings,
    load_settings,
    use_settings,
)


def _write_config(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_loader_precedence_default_file_env_override(tmp_path: Path) -> None:
    config_path = tmp_path / "nexus_spec.toml"
    _write_config(config_path, "check_num_tests = 40\n")

    defaults = load_settings(environ={}, search_dir=tmp_path / "empty")
    from_file = load_settings(config_path, environ={})
    from_env = load_settings(config_path, environ={"NEXUS_SPEC_CHECK_NUM_TESTS": "60"})
    from_override = load_settings(
        config_path,
        environ={"NEXUS_SPEC_CHECK_NUM_TESTS": "60"},
        overrides={"check_num_tests": 70},
    )

    assert defaults == SpecSettings()
    assert defaults.check_num_tests == 1000
    assert defaults.fspec_iterations == 21
    assert defaults.explain_iterations == 100
    assert from_file.check_num_tests == 40
    assert from_env.check_num_tests == 60
    assert from_override.check_num_tests == 70


def test_discovery_prefers_dedicated_file_over_pyproject(tmp_path: Path) -> None:
    _write_config(tmp_path / "pyproject.toml", "[tool.nexus_spec]\nseed = 5\nmax_workers = 2\n")

    from_pyproject = load_settings(environ={}, search_dir=tmp_path)
    _write_config(tmp_path / "nexus_spec.toml", "seed = 9\n")
    from_dedicated = load_settings(environ={}, search_dir=tmp_path)

    assert from_pyproject.seed == 5
    assert from_pyproject.max_workers == 2
    assert from_dedicated.seed == 9
    assert from_dedicated.max_workers == 1


def test_explicit_pyproject_path_reads_the_tool_table(tmp_path: Path) -> None:
    path = tmp_path / "pyproject.toml"
    _write_config(path, '[project]\nname = "demo"\n\n[tool.nexus_spec]\nlog_level = "debug"\n')

    loaded = load_settings(path, environ={})

    assert loaded.log_level == "DEBUG"


def test_env_coercion_of_booleans_and_optional_integers(tmp_path: Path) -> None:
    loaded = load_settings(
        environ={"NEXUS_SPEC_LOG_JSON": "yes", "NEXUS_SPEC_SEED": "42"},
        search_dir=tmp_path,
    )
    cleared = load_settings(
        environ={"NEXUS_SPEC_LOG_JSON": "off", "NEXUS_SPEC_SEED": "none"},
        search_dir=tmp_path,
        overrides={"seed": None},
    )

    assert loaded.log_json is True
    assert loaded.seed == 42
    assert cleared.log_json is False
    assert cleared.seed is None


@pytest.mark.parametrize(
    ("environ", "message"),
    [
        ({"NEXUS_SPEC_CHECK_NUM_TESTS": "many"}, "NEXUS_SPEC_CHECK_NUM_TESTS"),
        ({"NEXUS_SPEC_LOG_JSON": "maybe"}, "NEXUS_SPEC_LOG_JSON"),
        ({"NEXUS_SPEC_MAX_WORKERS": "0"}, "max_workers"),
        ({"NEXUS_SPEC_LOG_LEVEL": "chatty"}, "log_level"),
    ],
)
def test_invalid_env_values_raise_actionable_errors(
    tmp_path: Path, environ: dict[str, str], message: str
) -> None:
    with pytest.raises(ConfigLoadError, match=message):
        load_settings(environ=environ, search_dir=tmp_path)


def test_invalid_files_and_keys_are_rejected(tmp_path: Path) -> None:
    unknown = tmp_path / "unknown.toml"
    ill_typed = tmp_path / "typed.toml"
    broken = tmp_path / "broken.toml"
    _write_config(unknown, "iterations = 3\n")
    _write_config(ill_typed, 'check_num_tests = "3"\n')
    _write_config(broken, "check_num_tests = \n")

    with pytest.raises(ConfigLoadError, match="unknown config file keys: iterations"):
        load_settings(unknown, environ={})
    with pytest.raises(ConfigLoadError, match="check_num_tests"):
        load_settings(ill_typed, environ={})
    with pytest.raises(ConfigLoadError, match="invalid TOML"):
        load_settings(broken, environ={})
    with pytest.raises(ConfigLoadError, match="not found"):
        load_settings(tmp_path / "missing.toml", environ={})
    with pytest.raises(ConfigLoadError, match="unknown override keys"):
        load_settings(environ={}, search_dir=tmp_path, overrides={"workers": 2})


def test_use_settings_swaps_the_active_settings_temporarily() -> None:
    custom = SpecSettings(fspec_iterations=3)
    before = get_settings()

    with use_settings(custom) as active:
        assert active is custom
        assert get_settings() is custom

    assert get_settings() is before


def test_configure_installs_the_process_default() -> None:
    previous = get_settings()
    custom = SpecSettings(check_num_tests=5)
    try:
        configure(custom)
        assert get_settings() is custom
        with use_settings(SpecSettings()):
            assert get_settings() is not custom
    finally:
        configure(previous)


def test_settings_export_is_a_plain_dict() -> None:
    assert SpecSettings(seed=3).to_dict()["seed"] == 3
    with pytest.raises(ValueError):
        SpecSettings(fspec_iterations=-1)
