"""Smoke test that every package module imports cleanly."""

import importlib

import pytest

MODULES = [
    "swiftfix.config",
    "swiftfix.logging_context",
    "swiftfix.utils",
    "swiftfix.app",
    "swiftfix.schemas.booking_schema",
    "swiftfix.schemas.catalog_schema",
    "swiftfix.schemas.customer_schema",
    "swiftfix.tools.catalog",
    "swiftfix.tools.ledger",
    "swiftfix.tools.identity",
    "swiftfix.tools.diagnosis",
    "swiftfix.prompts.system_prompts",
    "swiftfix.funnel",
    "swiftfix.reporting",
    "swiftfix.admin",
]


@pytest.mark.parametrize("name", MODULES)
def test_import(name):
    assert importlib.import_module(name) is not None
