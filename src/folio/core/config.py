"""Configuration for folio sites.

Settings come from three layers, highest priority first:

1. Environment variables (``FOLIO_SECTION__KEY``, e.g. ``FOLIO_BUILD__WORKERS``)
2. ``folio.yml`` in the site root
3. Defaults
"""

from __future__ import annotations

import os
from copy import deepcopy
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from folio.core.exceptions import ConfigError

CONFIG_FILENAME = "folio.yml"
ENV_PREFIX = "FOLIO_"


class PathsSettings(BaseModel):
    """Path configuration.

    All paths are relative to ``site_root`` unless absolute.
    """

    site_root: Path = Field(default_factory=Path.cwd, description="Root directory of the site")
    content_dir: Path = Field(default=Path("content"), description="Directory holding Markdown sources")
    output_dir: Path = Field(default=Path("site"), description="Directory receiving rendered HTML")

    @property
    def abs_content_dir(self) -> Path:
        return self._resolve(self.content_dir)

    @property
    def abs_output_dir(self) -> Path:
        return self._resolve(self.output_dir)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path


class BuildSettings(BaseModel):
    include_drafts: bool = Field(default=False, description="Render drafts alongside published documents")
    workers: int = Field(default=1, ge=1, description="Threads used to parse and render documents")
    strict: bool = Field(default=False, description="Treat any skipped document as a build failure")


class RenderSettings(BaseModel):
    allow_html: bool = Field(default=True, description="Pass raw HTML in bodies through unchanged")
    tables: bool = Field(default=True, description="Enable GFM tables and strikethrough")
    typographer: bool = Field(default=False, description="Smart quotes and typographic replacements")
    heading_anchors: bool = Field(default=True, description="Add id anchors to headings")


class SiteSettings(BaseModel):
    title: str = "Articles"
    base_url: str = "/"
    language: str = "en"


class FolioConfig(BaseSettings):
    """Root configuration for a folio site."""

    paths: PathsSettings = Field(default_factory=PathsSettings)
    build: BuildSettings = Field(default_factory=BuildSettings)
    render: RenderSettings = Field(default_factory=RenderSettings)
    site: SiteSettings = Field(default_factory=SiteSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, site_root: Path | None = None) -> FolioConfig:
        return ConfigLoader(site_root).load()


class ConfigLoader:
    """Loads ``folio.yml`` and layers environment overrides on top."""

    def __init__(self, site_root: Path | None = None) -> None:
        self.site_root = site_root if site_root is not None else Path.cwd()

    @property
    def config_path(self) -> Path:
        return self.site_root / CONFIG_FILENAME

    def load(self) -> FolioConfig:
        """Load configuration with environment-variable precedence.

        Raises:
            ConfigError: If the file is not valid YAML, is not a mapping or
                fails validation.

        """
        file_config = self._normalized_config(self._load_from_file())
        # Instantiating the settings class applies environment overrides.
        try:
            env_config = FolioConfig()
        except ValidationError as exc:
            msg = f"Invalid FOLIO_* environment settings: {exc}"
            raise ConfigError(msg) from exc
        merged = self._merge_config(
            base=env_config.model_dump(mode="json"),
            override=file_config,
            env_override_paths=self._collect_env_override_paths(),
        )
        merged["paths"]["site_root"] = self.site_root

        try:
            return FolioConfig.model_validate(merged)
        except ValidationError as exc:
            msg = f"Invalid configuration in {self.config_path}: {exc}"
            raise ConfigError(msg) from exc

    def _load_from_file(self) -> dict[str, Any]:
        if not self.config_path.is_file():
            return {}

        try:
            with self.config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            msg = f"Invalid YAML in {self.config_path}: {exc}"
            raise ConfigError(msg) from exc

        if not isinstance(data, dict):
            msg = f"Configuration root must be a mapping, got {type(data).__name__}"
            raise ConfigError(msg)
        return data

    def _normalized_config(self, config_data: dict[str, Any]) -> dict[str, Any]:
        normalized = deepcopy(config_data)
        for section, value in normalized.items():
            if not isinstance(value, dict):
                msg = f"Configuration section '{section}' must be a mapping, got {type(value).__name__}"
                raise ConfigError(msg)
        # site_root always comes from the loader, never from the file.
        normalized.get("paths", {}).pop("site_root", None)
        return normalized

    def _collect_env_override_paths(self) -> set[tuple[str, ...]]:
        env_paths: set[tuple[str, ...]] = set()
        for key in os.environ:
            if not key.startswith(ENV_PREFIX):
                continue
            parts = [part.lower() for part in key[len(ENV_PREFIX) :].split("__") if part]
            if parts:
                env_paths.add(tuple(parts))
        return env_paths

    def _merge_config(
        self,
        base: dict[str, Any],
        override: dict[str, Any],
        env_override_paths: set[tuple[str, ...]],
        current_path: tuple[str, ...] = (),
    ) -> dict[str, Any]:
        """Merge override into base, skipping keys provided via env vars."""
        merged = deepcopy(base)

        for key, value in override.items():
            path = (*current_path, str(key).lower())
            if path in env_override_paths:
                continue

            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = self._merge_config(merged[key], value, env_override_paths, path)
            else:
                merged[key] = value

        return merged
