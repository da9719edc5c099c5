"""
config.py — Application configuration via environment variables.
All variables use the LINE_CALC_ prefix (e.g. LINE_CALC_PRECISION_BITS=256).

The module-level constants below are the fixed defaults; Settings only lets
a deployment override them.
"""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Working precision of the binary float representation (mantissa bits)
PRECISION_BITS = 128

# Integers longer than this are shown in the float branch instead of 10/16/2
SHOW_MAX_BITS = 300

# Upper bound for results of << and ^ before they are materialised
MAX_INTEGER_BITS = 1 << 24

# Unit suffixes: positive = multiply, negative = divide by the absolute value
UNITS: dict[str, int] = {
    "K": 1024,
    "M": 1024 * 1024,
    "G": 1024 * 1024 * 1024,
    "T": 1024 * 1024 * 1024 * 1024,
    "k": 1000,
    "m": 1000 * 1000,
    "g": 1000 * 1000 * 1000,
    "t": 1000 * 1000 * 1000 * 1000,
    "u": -1000 * 1000,
    "n": -1000 * 1000 * 1000,
}

# Textual substitutions done before parsing
CONSTANTS: dict[str, str] = {
    "pi": "3.1415926535897932384626433832795028841971693993751",
}

# Read-only identifier table used by the evaluator
IDENTIFIERS: dict[str, str] = {
    "e": "2.7182818284590452353602874713526624977572470937000",
    "tau": "6.2831853071795864769252867665590057683943387987502",
    "phi": "1.6180339887498948482045868343656381177203091798058",
}


class Settings(BaseSettings):
    # Evaluation
    precision_bits: int = Field(default=PRECISION_BITS, ge=72)
    max_integer_bits: int = Field(default=MAX_INTEGER_BITS, ge=64)

    # Formatting
    max_display_bits: int = Field(default=SHOW_MAX_BITS, ge=64)

    # Tables
    units: dict[str, int] = Field(default_factory=lambda: dict(UNITS))
    constants: dict[str, str] = Field(default_factory=lambda: dict(CONSTANTS))
    identifiers: dict[str, str] = Field(default_factory=lambda: dict(IDENTIFIERS))

    # Logging
    log_level: str = "WARNING"

    # App
    app_title: str = "LineCalc"
    app_version: str = "0.1.0"

    model_config = SettingsConfigDict(
        env_prefix="LINE_CALC_", env_file=".env", extra="ignore", frozen=True,
    )

    @field_validator("units")
    @classmethod
    def _check_units(cls, v: dict[str, int]) -> dict[str, int]:
        for token, magnitude in v.items():
            if not token.isidentifier():
                raise ValueError(f"unit token must be identifier-shaped: {token!r}")
            if magnitude == 0:
                raise ValueError(f"unit magnitude must be non-zero: {token!r}")
        return v
