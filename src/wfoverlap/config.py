from __future__ import annotations

"""Configuration utilities for wfoverlap.

Runtime options are grouped into small Pydantic sections collected by the
:class:`Settings` container.  Values can be supplied through environment
variables (``WFOVERLAP_OVERLAP__ALPHA=0.1``) or from YAML/JSON files with
matching nested keys.
"""

import json
import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

try:  # pragma: no cover - optional dependency
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None


DEFAULT_ALPHA = 0.05


class SectionModel(BaseModel):
    """Base model for configuration subsections that ignores unknown fields."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)


# ---------------------------------------------------------------------------
# Settings schema
# ---------------------------------------------------------------------------


class OverlapSettings(SectionModel):
    """Parameters of the waveform overlap metric.

    ``alpha`` is the significance level of the central credible region and
    ``degenerate`` selects what happens to rows whose union area is zero
    (every interval zero-width, e.g. all-zero rows or very small rates):
    ``"nan"`` leaves a NaN in the result, ``"raise"`` aborts the call.
    """

    alpha: float = DEFAULT_ALPHA
    degenerate: Literal["nan", "raise"] = "nan"

    @field_validator("alpha")
    @classmethod
    def _check_alpha(cls, value: float) -> float:
        if not 0.0 < value < 1.0:
            raise ValueError("alpha must lie strictly between 0 and 1")
        return value


class LoggingSettings(SectionModel):
    """Logging verbosity for the command line tool."""

    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        name = value.upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"unknown logging level: {value}")
        return name


class Settings(BaseSettings):
    """Container for all runtime configuration sections."""

    overlap: OverlapSettings = Field(default_factory=OverlapSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="WFOVERLAP_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``WFOVERLAP_*`` environment variables."""

        return cls()


# ---------------------------------------------------------------------------
# Loading utilities
# ---------------------------------------------------------------------------


def load_settings(path: str | Path) -> Settings:
    """Load settings from a JSON or YAML file."""

    p = Path(path)
    text = p.read_text()
    if p.suffix.lower() in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("PyYAML is required to load YAML files")
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise TypeError("Configuration file must define a mapping")
    return Settings.model_validate(data)


__all__ = [
    "DEFAULT_ALPHA",
    "LoggingSettings",
    "OverlapSettings",
    "Settings",
    "load_settings",
]
