"""Configuration loader: reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.safe.global/tx-service"
DEFAULT_EXCLUDED_NETWORKS: tuple[int, ...] = (239,)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SafeApiConfig:
    base_url: str = DEFAULT_API_BASE_URL
    api_key: str = ""
    request_timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0


@dataclass(frozen=True)
class ResolverConfig:
    lookup_delay: float = 0.1
    timeout: float = 120.0


@dataclass(frozen=True)
class ScannerConfig:
    max_retries: int = 2
    retry_delay: float = 0.5
    network_delay: float = 0.1
    timeout: float = 300.0


@dataclass(frozen=True)
class ExtraNetworkConfig:
    id: int
    code: str
    name: str
    explorer_url: str = ""
    api_url: str = ""


@dataclass(frozen=True)
class NetworksConfig:
    excluded: tuple[int, ...] = DEFAULT_EXCLUDED_NETWORKS
    extra: tuple[ExtraNetworkConfig, ...] = ()


@dataclass(frozen=True)
class AppConfig:
    safe_api: SafeApiConfig = field(default_factory=SafeApiConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    networks: NetworksConfig = field(default_factory=NetworksConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_safe_api(raw: dict[str, Any]) -> SafeApiConfig:
    return SafeApiConfig(
        base_url=str(raw.get("base_url", DEFAULT_API_BASE_URL)).rstrip("/"),
        api_key=str(raw.get("api_key") or "").strip(),
        request_timeout=float(raw.get("request_timeout", 30.0)),
        max_retries=int(raw.get("max_retries", 3)),
        retry_delay=float(raw.get("retry_delay", 1.0)),
    )


def _build_resolver(raw: dict[str, Any]) -> ResolverConfig:
    return ResolverConfig(
        lookup_delay=float(raw.get("lookup_delay", 0.1)),
        timeout=float(raw.get("timeout", 120.0)),
    )


def _build_scanner(raw: dict[str, Any]) -> ScannerConfig:
    return ScannerConfig(
        max_retries=int(raw.get("max_retries", 2)),
        retry_delay=float(raw.get("retry_delay", 0.5)),
        network_delay=float(raw.get("network_delay", 0.1)),
        timeout=float(raw.get("timeout", 300.0)),
    )


def _build_networks(raw: dict[str, Any]) -> NetworksConfig:
    extra: list[ExtraNetworkConfig] = []
    for n in raw.get("extra", []):
        extra.append(
            ExtraNetworkConfig(
                id=int(n.get("id", 0)),
                code=str(n.get("code", "")),
                name=str(n.get("name", "")),
                explorer_url=str(n.get("explorer_url", "")),
                api_url=str(n.get("api_url", "")),
            )
        )
    excluded = raw.get("excluded", list(DEFAULT_EXCLUDED_NETWORKS))
    return NetworksConfig(
        excluded=tuple(int(chain_id) for chain_id in excluded or ()),
        extra=tuple(extra),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package). When the default
            file does not exist, built-in defaults are used and the API key
            is read from ``SAFE_API_KEY``.
    """
    load_dotenv()

    if config_path is None:
        default_path = Path(__file__).resolve().parent.parent / "config.yaml"
        if not default_path.exists():
            logger.info("No config.yaml found, using defaults")
            cfg = AppConfig(
                safe_api=SafeApiConfig(api_key=os.environ.get("SAFE_API_KEY", "").strip())
            )
            _validate(cfg)
            return cfg
        config_path = default_path
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        safe_api=_build_safe_api(raw.get("safe_api", {})),
        resolver=_build_resolver(raw.get("resolver", {})),
        scanner=_build_scanner(raw.get("scanner", {})),
        networks=_build_networks(raw.get("networks", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration.

    A missing API key is not checked here: it surfaces as a
    ``ConfigurationError`` on the first request, before any I/O.
    """
    if not cfg.safe_api.base_url:
        raise ValueError("safe_api.base_url must not be empty")
    if cfg.safe_api.max_retries < 1:
        raise ValueError("safe_api.max_retries must be at least 1")
    if cfg.scanner.max_retries < 1:
        raise ValueError("scanner.max_retries must be at least 1")

    for name, value in (
        ("safe_api.retry_delay", cfg.safe_api.retry_delay),
        ("resolver.lookup_delay", cfg.resolver.lookup_delay),
        ("scanner.retry_delay", cfg.scanner.retry_delay),
        ("scanner.network_delay", cfg.scanner.network_delay),
    ):
        if value < 0:
            raise ValueError(f"{name} must not be negative")

    for name, value in (
        ("safe_api.request_timeout", cfg.safe_api.request_timeout),
        ("resolver.timeout", cfg.resolver.timeout),
        ("scanner.timeout", cfg.scanner.timeout),
    ):
        if value <= 0:
            raise ValueError(f"{name} must be positive")

    for network in cfg.networks.extra:
        if network.id <= 0:
            raise ValueError(f"Extra network '{network.name}' has no valid id")
        if not network.code:
            raise ValueError(f"Extra network {network.id} has no code")
