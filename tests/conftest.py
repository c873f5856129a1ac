"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from safeboard.config import (
    AppConfig,
    NetworksConfig,
    ResolverConfig,
    SafeApiConfig,
    ScannerConfig,
)
from safeboard.networks import NetworkRegistry

from helpers import BASE_URL, TEST_NETWORKS, FakeQueryClient

# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_safe_api_config() -> SafeApiConfig:
    return SafeApiConfig(
        base_url=BASE_URL,
        api_key="test-key",
        request_timeout=10.0,
        max_retries=3,
        retry_delay=1.0,
    )


@pytest.fixture()
def resolver_config() -> ResolverConfig:
    return ResolverConfig(lookup_delay=0.0, timeout=60.0)


@pytest.fixture()
def scanner_config() -> ScannerConfig:
    return ScannerConfig(max_retries=2, retry_delay=0.5, network_delay=0.0, timeout=60.0)


@pytest.fixture()
def sample_app_config(
    sample_safe_api_config: SafeApiConfig,
    resolver_config: ResolverConfig,
    scanner_config: ScannerConfig,
) -> AppConfig:
    return AppConfig(
        safe_api=sample_safe_api_config,
        resolver=resolver_config,
        scanner=scanner_config,
        networks=NetworksConfig(excluded=(239,)),
    )


@pytest.fixture()
def registry() -> NetworkRegistry:
    return NetworkRegistry(TEST_NETWORKS, excluded=(239,), base_url=BASE_URL)


@pytest.fixture()
def fake_client() -> FakeQueryClient:
    return FakeQueryClient()


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    safe_api:
      base_url: "https://safe.example.com/tx-service/"
      api_key: "yaml-key"
      request_timeout: 15
      max_retries: 4
      retry_delay: 0.25
    resolver:
      lookup_delay: 0.2
      timeout: 90
    scanner:
      max_retries: 2
      retry_delay: 0.5
      network_delay: 0.05
      timeout: 200
    networks:
      excluded: [239, 6342]
      extra:
        - id: 12345
          code: "mychain"
          name: "My Chain"
          explorer_url: "https://explorer.mychain.example"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
