"""Unit tests for config loading, env interpolation, and validation."""
from __future__ import annotations

from pathlib import Path

import pytest

from safeboard.config import (
    AppConfig,
    ResolverConfig,
    SafeApiConfig,
    ScannerConfig,
    _interpolate_env,
    load_config,
)


class TestInterpolateEnv:
    def test_simple_substitution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_VAR", "hello")
        assert _interpolate_env("${MY_VAR}") == "hello"

    def test_missing_var_becomes_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NONEXISTENT_VAR_XYZ", raising=False)
        assert _interpolate_env("${NONEXISTENT_VAR_XYZ}") == ""

    def test_nested_dict(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TOK", "secret")
        result = _interpolate_env({"key": "${TOK}", "plain": "text"})
        assert result == {"key": "secret", "plain": "text"}

    def test_nested_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("A", "x")
        assert _interpolate_env(["${A}", "y"]) == ["x", "y"]

    def test_non_string_passthrough(self) -> None:
        assert _interpolate_env(42) == 42
        assert _interpolate_env(True) is True


class TestLoadConfig:
    def test_loads_valid_yaml(self, sample_yaml_path: Path) -> None:
        cfg = load_config(sample_yaml_path)
        assert isinstance(cfg, AppConfig)
        assert cfg.safe_api.base_url == "https://safe.example.com/tx-service"
        assert cfg.safe_api.api_key == "yaml-key"
        assert cfg.safe_api.max_retries == 4
        assert cfg.resolver.lookup_delay == 0.2
        assert cfg.scanner.timeout == 200.0
        assert cfg.networks.excluded == (239, 6342)
        assert cfg.networks.extra[0].id == 12345
        assert cfg.networks.extra[0].code == "mychain"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_env_interpolation_in_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TEST_SAFE_KEY", "from-env")
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text('safe_api:\n  api_key: "${TEST_SAFE_KEY}"\n')
        cfg = load_config(cfg_file)
        assert cfg.safe_api.api_key == "from-env"

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("")
        cfg = load_config(cfg_file)
        assert cfg.safe_api == SafeApiConfig()
        assert cfg.resolver == ResolverConfig()
        assert cfg.scanner == ScannerConfig()
        assert cfg.networks.excluded == (239,)

    def test_unset_key_is_not_a_load_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("UNSET_SAFE_KEY_XYZ", raising=False)
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text('safe_api:\n  api_key: "${UNSET_SAFE_KEY_XYZ}"\n')
        assert load_config(cfg_file).safe_api.api_key == ""

    def test_default_path_falls_back_to_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SAFE_API_KEY", "env-key")
        monkeypatch.setattr("safeboard.config.Path.exists", lambda self: False)
        cfg = load_config()
        assert cfg.safe_api.api_key == "env-key"
        assert cfg.resolver == ResolverConfig()


class TestValidation:
    @pytest.mark.parametrize(
        "yaml_content, message",
        [
            ("safe_api:\n  max_retries: 0\n", "safe_api.max_retries"),
            ("scanner:\n  max_retries: 0\n", "scanner.max_retries"),
            ("safe_api:\n  retry_delay: -1\n", "safe_api.retry_delay"),
            ("resolver:\n  lookup_delay: -0.1\n", "resolver.lookup_delay"),
            ("scanner:\n  network_delay: -5\n", "scanner.network_delay"),
            ("resolver:\n  timeout: 0\n", "resolver.timeout"),
            ("safe_api:\n  request_timeout: -3\n", "safe_api.request_timeout"),
        ],
    )
    def test_invalid_values_raise(
        self, tmp_path: Path, yaml_content: str, message: str
    ) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(yaml_content)
        with pytest.raises(ValueError, match=message):
            load_config(cfg_file)

    def test_extra_network_without_code_raises(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("networks:\n  extra:\n    - id: 5\n      name: Five\n")
        with pytest.raises(ValueError, match="has no code"):
            load_config(cfg_file)

    def test_extra_network_without_id_raises(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("networks:\n  extra:\n    - code: five\n      name: Five\n")
        with pytest.raises(ValueError, match="no valid id"):
            load_config(cfg_file)


class TestFrozenConfigs:
    def test_safe_api_config_immutable(self) -> None:
        c = SafeApiConfig()
        with pytest.raises(AttributeError):
            c.api_key = "x"  # type: ignore[misc]

    def test_resolver_config_immutable(self) -> None:
        c = ResolverConfig()
        with pytest.raises(AttributeError):
            c.timeout = 1.0  # type: ignore[misc]
