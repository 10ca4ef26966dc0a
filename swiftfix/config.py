"""
Centralized configuration with environment variable overrides.

Shop settings, dashboard paging, simulated latency and diagnosis model
settings are all configurable here. Nothing is hardcoded in funnel,
ledger or reporting logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class ShopConfig:
    """Shop-facing settings loaded from environment or defaults."""

    name: str = os.getenv("SHOP_NAME", "SwiftFix")
    # Plaintext placeholder gate for the dashboard. Not a security boundary.
    admin_password: str = os.getenv("ADMIN_PASSWORD", "admin")
    submit_delay_sec: float = _safe_float("SUBMIT_DELAY_SEC", "1.5")
    bookings_page_size: int = _safe_int("BOOKINGS_PAGE_SIZE", "10")
    currency_symbol: str = os.getenv("CURRENCY_SYMBOL", "₱")


@dataclass(frozen=True)
class ModelConfig:
    """Settings for the AI diagnosis collaborator."""

    api_key: str = os.getenv("OPENAI_API_KEY", "")
    llm_model: str = os.getenv("LLM_MODEL", "gpt-4o-mini")
    llm_temperature: float = _safe_float("LLM_TEMPERATURE", "0.3")
    max_output_tokens: int = _safe_int("LLM_MAX_OUTPUT_TOKENS", "150")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    shop: ShopConfig = field(default_factory=ShopConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not 0.0 <= config.model.llm_temperature <= 2.0:
        raise ValueError(
            f"LLM_TEMPERATURE must be between 0.0 and 2.0, got {config.model.llm_temperature}"
        )
    if config.model.max_output_tokens < 1:
        raise ValueError(
            f"LLM_MAX_OUTPUT_TOKENS must be >= 1, got {config.model.max_output_tokens}"
        )
    if config.shop.bookings_page_size < 1:
        raise ValueError(
            f"BOOKINGS_PAGE_SIZE must be >= 1, got {config.shop.bookings_page_size}"
        )
    if config.shop.submit_delay_sec < 0:
        raise ValueError(
            f"SUBMIT_DELAY_SEC must be >= 0, got {config.shop.submit_delay_sec}"
        )
    if not config.shop.admin_password:
        raise ValueError("ADMIN_PASSWORD must not be empty")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.shop.name)
    return config


# Singleton instance
settings = load_config()
