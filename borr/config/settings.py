"""
settings.py

This module provides configuration management for borr.

Features:
- Centralized library configuration using Pydantic settings
- Version and constants describing the library itself
- A shared rich console for command line output

Usage:
Import appsettings for configuration values.

Environment:
- Every setting can be overridden with a `BORR_` prefixed variable, for
  example `BORR_EXPANSION_MAXROUNDS=64` or `BORR_STRICTPARSE=true`.
"""

from typing import Final
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console

# Console instance for rich output
console: Final[Console] = Console()

__version__: Final[str] = "0.1.0"

LIB_DESCRIPTION: Final[str] = "Borr; A simple cross-platform language file parser"
LIB_URL: Final[str] = "https://github.com/SimonCahill"


class App(BaseSettings):
    """
    Library settings model.

    Settings can be overridden through environment variables with BORR_ prefix.

    Attributes:
        beQuiet: Suppress detailed logging output
        strictParse: Collect warnings for lines the grammar ignores
        expansion_maxRounds: Bound on expansion rounds that introduce new variables
        expansion_maxDepth: Bound on nested cross-reference lookups
        date_format: strftime format of the built-in `date` expander
        time_format: strftime format of the built-in `time` expander
    """

    beQuiet: bool = False
    strictParse: bool = False

    expansion_maxRounds: int = Field(default=32, ge=1)
    expansion_maxDepth: int = Field(default=16, ge=1)

    date_format: str = "%Y-%m-%d"
    time_format: str = "%H:%M:%S"

    model_config = SettingsConfigDict(
        env_prefix="BORR_",  # Environment variables with this prefix override settings
        case_sensitive=False,  # Allow case-insensitive environment variables
        extra="ignore",
    )


# Create the library settings instance
appsettings: Final[App] = App()
