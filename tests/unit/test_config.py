"""
Tests for configuration management in `health_risk/config.py`.

Covers:
- Environment parsing and debug defaults
- Logging level coercion to the expected Literal
- Dataset settings from the environment
- get_config cache behavior
- AppConfig validation (debug only allowed in development)
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from pydantic import ValidationError

from health_risk.config import (
    AppConfig,
    DatasetConfig,
    LoggingConfig,
    get_config,
    load_config_from_env,
    reset_config_cache,
)


@pytest.fixture(autouse=True)
def clear_config_cache() -> Iterator[None]:
    """Ensure get_config cache is cleared before and after each test."""
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "ENVIRONMENT",
        "LOG_LEVEL",
        "LOG_TO_FILE",
        "RISK_DATASET_PATH",
        "RISK_SYNTHETIC_FALLBACK",
        "RISK_SYNTHETIC_COUNT",
        "RISK_SYNTHETIC_SEED",
    ):
        monkeypatch.delenv(name, raising=False)


def test_load_config_dev_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "dev")

    config = load_config_from_env()

    assert config.environment == "development"
    assert config.debug is True
    assert config.logging.format == "console"
    assert config.logging.level == "INFO"
    assert config.dataset.path == "data/Health_Risk_dataset.csv"
    assert config.dataset.synthetic_fallback is True
    assert config.dataset.synthetic_count == 100
    assert config.dataset.synthetic_seed is None


@pytest.mark.parametrize(
    "raw,expected",
    [("stage", "staging"), ("staging", "staging"), ("prod", "production"), ("other", "production")],
)
def test_environment_aliases(monkeypatch: pytest.MonkeyPatch, raw: str, expected: str) -> None:
    monkeypatch.setenv("ENVIRONMENT", raw)

    config = load_config_from_env()

    assert config.environment == expected
    assert config.debug is False
    assert config.logging.format == "json"


def test_dataset_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RISK_DATASET_PATH", "/srv/vitals.csv")
    monkeypatch.setenv("RISK_SYNTHETIC_FALLBACK", "off")
    monkeypatch.setenv("RISK_SYNTHETIC_COUNT", "250")
    monkeypatch.setenv("RISK_SYNTHETIC_SEED", "42")

    config = load_config_from_env()

    assert config.dataset.path == "/srv/vitals.csv"
    assert config.dataset.synthetic_fallback is False
    assert config.dataset.synthetic_count == 250
    assert config.dataset.synthetic_seed == 42


def test_invalid_synthetic_count_fails_fast(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RISK_SYNTHETIC_COUNT", "0")

    with pytest.raises(ValidationError):
        load_config_from_env()


def test_logging_level_literal_coercion(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "staging")

    # Unknown level should coerce to INFO
    monkeypatch.setenv("LOG_LEVEL", "unknown")
    config = load_config_from_env()
    assert config.logging.level == "INFO"

    # Known level should pass through
    monkeypatch.setenv("LOG_LEVEL", "error")
    config = load_config_from_env()
    assert config.logging.level == "ERROR"


def test_get_config_cache() -> None:
    c1 = get_config()
    c2 = get_config()
    assert c1 is c2  # same object due to lru_cache

    reset_config_cache()
    assert get_config() is not c1


def test_app_config_debug_only_in_dev_validation() -> None:
    with pytest.raises(ValueError, match="debug mode is only allowed"):
        AppConfig(
            environment="production",
            debug=True,
            dataset=DatasetConfig(),
            logging=LoggingConfig(),
        )
