"""Scanner configuration loader with Pydantic v2 validation.

Loads and validates a ``pii-scanner.yaml`` file into a typed
:class:`ScannerConfig` object.  Unknown keys are allowed to support
future schema additions without breakage.

Example
-------
>>> loader = ConfigLoader()
>>> config = loader.load_string("scan:\\n  max_workers: 2\\n")
>>> config.scan.max_workers
2
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from pii_scanner.detection.registry import ALL_JURISDICTIONS, PatternRegistry
from pii_scanner.exposure.permissions import ExposureLevel

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = (
    ".txt",
    ".csv",
    ".json",
    ".log",
    ".md",
    ".xml",
    ".html",
    ".sql",
    ".yaml",
    ".yml",
    ".ini",
    ".conf",
    ".env",
)


class ScannerConfigError(ValueError):
    """Raised when a scanner YAML config is malformed or invalid.

    Attributes
    ----------
    config_path:
        The path to the config file that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


class DetectionConfig(BaseModel):
    """Configuration for PII detection."""

    model_config = {"extra": "allow"}

    jurisdictions: list[str] = Field(default_factory=lambda: list(ALL_JURISDICTIONS))
    disabled_categories: list[str] = Field(default_factory=list)

    @field_validator("jurisdictions")
    @classmethod
    def validate_jurisdictions(cls, values: list[str]) -> list[str]:
        valid = set(ALL_JURISDICTIONS)
        for v in values:
            if v not in valid:
                raise ValueError(f"Unknown jurisdiction '{v}'. Valid: {sorted(valid)}")
        return values


class ScanConfig(BaseModel):
    """Configuration for directory scans."""

    model_config = {"extra": "allow"}

    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    max_file_size_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    max_workers: int = Field(default=4, ge=1, le=64)
    compute_hash: bool = Field(default=False)

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, values: list[str]) -> list[str]:
        normalized: list[str] = []
        for v in values:
            ext = v.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return normalized


class ExposureConfig(BaseModel):
    """Configuration for exposure classification."""

    model_config = {"extra": "allow"}

    read_failure_level: Literal["low", "medium", "critical"] = Field(default="low")
    warning_language: Literal["en", "fr"] = Field(default="en")

    @property
    def fallback_level(self) -> ExposureLevel:
        return ExposureLevel(self.read_failure_level)


class ScannerConfig(BaseModel):
    """Top-level scanner configuration schema.

    All sections are optional and fall back to sensible defaults.
    """

    model_config = {"extra": "allow"}

    version: str = Field(default="1")
    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
    exposure: ExposureConfig = Field(default_factory=ExposureConfig)

    def build_registry(self) -> PatternRegistry:
        """Build the pattern registry described by the ``detection`` section."""
        return PatternRegistry.from_jurisdictions(
            self.detection.jurisdictions,
            disabled_categories=self.detection.disabled_categories,
        )


class ConfigLoader:
    """Loads and validates scanner YAML configuration.

    Example
    -------
    >>> loader = ConfigLoader()
    >>> config = loader.load(Path("pii-scanner.yaml"))
    """

    def load(self, config_path: str | Path) -> ScannerConfig:
        """Load and validate a scanner YAML file.

        Parameters
        ----------
        config_path:
            Path to the YAML file.

        Returns
        -------
        ScannerConfig
            Validated configuration object.

        Raises
        ------
        FileNotFoundError:
            When the config file does not exist.
        ScannerConfigError:
            When the YAML cannot be parsed or fails validation.
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Scanner config not found: {path}")

        with path.open("r", encoding="utf-8") as fh:
            text = fh.read()
        config = self._parse(text, str(path))
        logger.info("Loaded scanner config from %s", path)
        return config

    def load_string(self, yaml_content: str) -> ScannerConfig:
        """Load and validate a YAML string directly.

        Raises
        ------
        ScannerConfigError:
            When the YAML cannot be parsed or fails validation.
        """
        return self._parse(yaml_content, None)

    def defaults(self) -> ScannerConfig:
        """Return a default configuration with all defaults applied."""
        return ScannerConfig()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _parse(self, yaml_content: str, config_path: str | None) -> ScannerConfig:
        try:
            raw = yaml.safe_load(yaml_content) or {}
        except yaml.YAMLError as exc:
            raise ScannerConfigError(f"YAML parse error: {exc}", config_path) from exc

        if not isinstance(raw, dict):
            raise ScannerConfigError(
                f"Top-level YAML must be a mapping, got {type(raw).__name__}",
                config_path,
            )

        try:
            return ScannerConfig.model_validate(raw)
        except ValidationError as exc:
            raise ScannerConfigError(f"Invalid configuration: {exc}", config_path) from exc
