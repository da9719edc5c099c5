import pytest
from pydantic import ValidationError

from config import PRECISION_BITS, UNITS, Settings


def test_settings_defaults():
    settings = Settings()

    assert settings.precision_bits == PRECISION_BITS
    assert settings.units == UNITS


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("LINE_CALC_PRECISION_BITS", "256")
    monkeypatch.setenv("LINE_CALC_UNITS", '{"h": 100, "c": -100}')

    settings = Settings()

    assert settings.precision_bits == 256
    assert settings.units == {"h": 100, "c": -100}


def test_settings_reject_low_precision():
    with pytest.raises(ValidationError):
        Settings(precision_bits=53)


def test_settings_reject_bad_units():
    with pytest.raises(ValidationError):
        Settings(units={"1x": 10})
    with pytest.raises(ValidationError):
        Settings(units={"z": 0})
