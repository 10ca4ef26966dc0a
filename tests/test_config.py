"""Tests for configuration parsing and validation."""

import dataclasses

import pytest

from swiftfix import config
from swiftfix.config import AppConfig, ModelConfig, ShopConfig, _validate_config, settings


class TestDefaults:
    def test_settings_loaded(self):
        assert isinstance(settings, AppConfig)
        assert settings.shop.bookings_page_size >= 1

    def test_default_values(self):
        shop = ShopConfig()
        assert isinstance(shop.submit_delay_sec, float)
        assert isinstance(shop.bookings_page_size, int)
        assert ModelConfig().max_output_tokens >= 1

    def test_config_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            settings.shop.name = "Other"


class TestSafeParsing:
    def test_safe_int(self, monkeypatch):
        monkeypatch.setenv("SWIFTFIX_TEST_INT", "42")
        assert config._safe_int("SWIFTFIX_TEST_INT", "1") == 42

    def test_safe_int_default(self, monkeypatch):
        monkeypatch.delenv("SWIFTFIX_TEST_INT", raising=False)
        assert config._safe_int("SWIFTFIX_TEST_INT", "7") == 7

    def test_safe_int_invalid(self, monkeypatch):
        monkeypatch.setenv("SWIFTFIX_TEST_INT", "ten")
        with pytest.raises(ValueError, match="SWIFTFIX_TEST_INT"):
            config._safe_int("SWIFTFIX_TEST_INT", "1")

    def test_safe_float_invalid(self, monkeypatch):
        monkeypatch.setenv("SWIFTFIX_TEST_FLOAT", "slow")
        with pytest.raises(ValueError, match="Invalid float"):
            config._safe_float("SWIFTFIX_TEST_FLOAT", "1.5")


class TestValidation:
    def test_valid_config_passes(self):
        _validate_config(AppConfig())

    @pytest.mark.parametrize(
        "shop_changes, model_changes, message",
        [
            ({}, {"llm_temperature": 2.5}, "LLM_TEMPERATURE"),
            ({}, {"max_output_tokens": 0}, "LLM_MAX_OUTPUT_TOKENS"),
            ({"bookings_page_size": 0}, {}, "BOOKINGS_PAGE_SIZE"),
            ({"submit_delay_sec": -1.0}, {}, "SUBMIT_DELAY_SEC"),
            ({"admin_password": ""}, {}, "ADMIN_PASSWORD"),
        ],
    )
    def test_rejects_out_of_range(self, shop_changes, model_changes, message):
        bad = AppConfig(
            shop=dataclasses.replace(ShopConfig(), **shop_changes),
            model=dataclasses.replace(ModelConfig(), **model_changes),
        )
        with pytest.raises(ValueError, match=message):
            _validate_config(bad)
