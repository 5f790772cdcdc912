from __future__ import annotations

import pytest

from twap_oracle.errors import InvalidWindowSizeError
from twap_oracle.integration.config import (
    DEFAULT_WINDOW_SIZE_SECONDS,
    OracleConfig,
    apply_env_overrides,
    config_from_mapping,
    load_config,
)


def test_defaults() -> None:
    cfg = load_config(env={})
    assert cfg == OracleConfig()
    assert cfg.window_size_seconds == DEFAULT_WINDOW_SIZE_SECONDS == 86_400
    assert cfg.max_staleness_multiplier == 2
    assert cfg.min_reserve == 0
    assert cfg.max_staleness_seconds == 2 * 86_400


def test_yaml_file(tmp_path) -> None:
    path = tmp_path / "oracle.yaml"
    path.write_text("window_size_seconds: 1800\nmin_reserve: 1000\n", encoding="utf-8")
    cfg = load_config(path, env={})
    assert cfg.window_size_seconds == 1800
    assert cfg.min_reserve == 1000
    assert cfg.max_staleness_multiplier == 2


def test_empty_yaml_file(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path, env={}) == OracleConfig()


def test_yaml_must_be_mapping(tmp_path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_config(path, env={})


def test_unknown_keys_rejected() -> None:
    with pytest.raises(ValueError, match="window_sise"):
        config_from_mapping({"window_sise": 10})


def test_invalid_window_in_yaml(tmp_path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("window_size_seconds: 0\n", encoding="utf-8")
    with pytest.raises(InvalidWindowSizeError):
        load_config(path, env={})


def test_env_overrides_yaml(tmp_path) -> None:
    path = tmp_path / "oracle.yaml"
    path.write_text("window_size_seconds: 1800\n", encoding="utf-8")
    cfg = load_config(path, env={"TWAP_WINDOW_SIZE_SECONDS": "600", "TWAP_MAX_STALENESS_MULTIPLIER": "3"})
    assert cfg.window_size_seconds == 600
    assert cfg.max_staleness_multiplier == 3
    assert cfg.max_staleness_seconds == 1800


def test_env_reads_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("TWAP_MIN_RESERVE", "42")
    assert apply_env_overrides(OracleConfig()).min_reserve == 42


def test_env_garbage_falls_back() -> None:
    cfg = apply_env_overrides(OracleConfig(window_size_seconds=900), {"TWAP_WINDOW_SIZE_SECONDS": "soon"})
    assert cfg.window_size_seconds == 900


def test_env_values_clamped() -> None:
    cfg = apply_env_overrides(
        OracleConfig(),
        {"TWAP_WINDOW_SIZE_SECONDS": "0", "TWAP_MAX_STALENESS_MULTIPLIER": "99999", "TWAP_MIN_RESERVE": "-5"},
    )
    assert cfg.window_size_seconds == 1
    assert cfg.max_staleness_multiplier == 1_000
    assert cfg.min_reserve == 0


def test_validation() -> None:
    with pytest.raises(InvalidWindowSizeError):
        OracleConfig(window_size_seconds=0)
    with pytest.raises(ValueError):
        OracleConfig(max_staleness_multiplier=0)
    with pytest.raises(ValueError):
        OracleConfig(min_reserve=-1)
    with pytest.raises(TypeError):
        OracleConfig(min_reserve="1")  # type: ignore[arg-type]
