"""Configuration loading and validation."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Storage configuration section."""

    root: Path = Field(default=Path("./data"))
    raw_dir: str = Field(default="raw", min_length=1)
    gold_dir: str = Field(default="gold", min_length=1)
    exports_dir: str = Field(default="exports", min_length=1)


class SourcesConfig(BaseModel):
    """Raw CSV file names, relative to the raw directory."""

    bios: str = "bios.csv"
    bios_locs: str = "bios_locs.csv"
    noc_regions: str = "noc_regions.csv"
    populations: str = "populations.csv"
    results: str = "results.csv"
    encoding: str = Field(default="utf8", pattern=r"^(utf8|utf8-lossy)$")


class NormalizationConfig(BaseModel):
    """Text cleanup rules applied in the Silver layer."""

    placeholder_tokens: list[str] = Field(default_factory=lambda: ["?"])
    name_separators: list[str] = Field(default_factory=lambda: ["•"])

    @field_validator("placeholder_tokens", "name_separators")
    @classmethod
    def validate_non_empty_tokens(cls, v: list[str]) -> list[str]:
        """Reject empty tokens, which would match every value."""
        for token in v:
            if not token:
                msg = "tokens must be non-empty strings"
                raise ValueError(msg)
        return v


class AnalyticsConfig(BaseModel):
    """Analytical view configuration."""

    min_athletes_for_efficiency: int = Field(
        default=50, ge=1, description="Minimum distinct athletes for medal efficiency"
    )


class ParquetConfig(BaseModel):
    """Parquet output settings."""

    compression: str = Field(default="snappy", pattern=r"^(snappy|gzip|brotli|zstd|lz4|none)$")


class Config(BaseModel):
    """Root configuration model."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    parquet: ParquetConfig = Field(default_factory=ParquetConfig)


def load_config(path: Path) -> Config:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValidationError: If the config is invalid.
    """
    if not path.exists():
        msg = f"Config file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open() as f:
        raw_config: dict[str, Any] | None = yaml.safe_load(f)

    return Config.model_validate(raw_config or {})
