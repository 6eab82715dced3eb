"""
Configuration management with environment variable support and validation.

Design principles:
- Environment-specific configs (dev, staging, prod)
- Validation at startup (fail fast)
- Type safety with Pydantic
- Scoring thresholds are code, not configuration
"""

import os
from functools import lru_cache
from typing import Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

# Load environment variables from .env file
load_dotenv()

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class DatasetConfig(BaseModel):
    """Where historical vitals come from and how to fill in when they don't."""

    path: str = Field(
        default="data/Health_Risk_dataset.csv", description="Path to the vitals CSV dataset"
    )
    synthetic_fallback: bool = Field(
        default=True, description="Substitute synthetic records when the dataset is empty"
    )
    synthetic_count: int = Field(default=100, gt=0, description="Synthetic records to generate")
    synthetic_seed: int | None = Field(
        default=None, description="Seed for reproducible synthetic data"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default="INFO", description="Logging level")
    format: Literal["json", "console"] = Field(default="json", description="Logging format")

    # Log destinations
    enable_file_logging: bool = Field(default=False, description="Enable file logging")
    log_file_path: str = Field(default="./logs/health_risk.log", description="Path to log file")


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    # Component configs
    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""

    def _env_to_literal(val: str) -> Literal["development", "staging", "production"]:
        v = val.strip().lower()
        if v in {"dev", "development"}:
            return "development"
        if v in {"stage", "staging"}:
            return "staging"
        return "production"

    def _level_to_literal(val: str) -> LogLevel:
        v = val.strip().upper()
        return cast(
            LogLevel,
            v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO",
        )

    def _parse_bool(val: str | None, default: bool) -> bool:
        if val is None:
            return default
        return val.strip().lower() in {"1", "true", "yes", "on"}

    def _parse_optional_int(val: str | None) -> int | None:
        if val is None or not val.strip():
            return None
        return int(val)

    # Detect environment
    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = environment == "development"

    dataset_config = DatasetConfig(
        path=os.getenv("RISK_DATASET_PATH", "data/Health_Risk_dataset.csv"),
        synthetic_fallback=_parse_bool(os.getenv("RISK_SYNTHETIC_FALLBACK"), True),
        synthetic_count=int(os.getenv("RISK_SYNTHETIC_COUNT", "100")),
        synthetic_seed=_parse_optional_int(os.getenv("RISK_SYNTHETIC_SEED")),
    )

    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format="console" if debug else "json",
        enable_file_logging=_parse_bool(os.getenv("LOG_TO_FILE"), False),
        log_file_path=os.getenv("LOG_FILE_PATH", "./logs/health_risk.log"),
    )

    return AppConfig(
        environment=environment,
        debug=debug,
        dataset=dataset_config,
        logging=logging_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


def reset_config_cache() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    get_config.cache_clear()


def validate_config() -> None:
    """Validate configuration at startup."""
    try:
        config = get_config()
        print(f"✅ Configuration loaded for {config.environment} environment")

        if os.path.exists(config.dataset.path):
            print(f"✅ Dataset found at {config.dataset.path}")
        elif config.dataset.synthetic_fallback:
            print(f"⚠️  No dataset at {config.dataset.path}, synthetic data will be used")

    except Exception as e:
        print(f"❌ Configuration validation failed: {e}")
        raise


def print_config_summary() -> None:
    """Print configuration summary for debugging."""
    config = get_config()

    print("\n🔧 CONFIGURATION SUMMARY")
    print(f"Environment: {config.environment}")
    print(f"Debug Mode: {config.debug}")
    print(f"Log Level: {config.logging.level}")
    print(f"Log Format: {config.logging.format}")

    print("\n📂 DATASET CONFIGURATION")
    print(f"Path: {config.dataset.path}")
    print(f"Synthetic Fallback: {config.dataset.synthetic_fallback}")
    print(f"Synthetic Count: {config.dataset.synthetic_count}")
    print(f"Synthetic Seed: {config.dataset.synthetic_seed}")


if __name__ == "__main__":
    # Test configuration loading
    validate_config()
    print_config_summary()
