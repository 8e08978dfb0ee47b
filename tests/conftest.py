"""
Shared pytest fixtures for the invoice interpreter tests.
"""

from decimal import Decimal

import pytest

from invoice_interpreter.amounts.currency_amount import CurrencyAmount
from invoice_interpreter.config import ConfigurationManager


@pytest.fixture(autouse=True)
def reset_configuration():
    """Give every test the bundled settings, even after a custom --config."""
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


@pytest.fixture
def isk():
    """Factory for ISK amounts."""
    def make(value, confidence=0.8):
        return CurrencyAmount(Decimal(str(value)), "ISK", confidence)
    return make


@pytest.fixture
def bonus_receipt():
    return "Bónus\nVSK 24% 1200\nSamtals 6200"
