"""Configuration loading and validation."""

from __future__ import annotations

import importlib
import os
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pkgfinder.errors import ConfigError, ConfigNotFoundError, FactoryLoadError
from pkgfinder.finders.base import SchemeFinderFactory

__all__ = ["Config", "ScannerSettings", "load_factory"]


class ScannerSettings(BaseModel):
    """The ``scanner`` section of a pkgfinder configuration file."""

    model_config = ConfigDict(extra="forbid")

    packages: list[str] = Field(default_factory=list)
    recursive: bool = True
    search_path: list[str] | None = None
    factories: list[str] = Field(default_factory=list)
    vfs_mounts: dict[str, str] = Field(default_factory=dict)


class Config:
    """Configuration accessor with dot-path key support.

    Example YAML::

        scanner:
          packages: ["myapp.resources", "myapp.templates"]
          recursive: true
          search_path: ["./lib", "./vendor/bundle.zip"]
          factories: ["myapp.finders:S3FinderFactory"]
          vfs_mounts:
            assets: ./static
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def load(cls, yaml_path: str) -> Config:
        """Load configuration from a YAML file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the YAML is invalid or not a mapping.
        """
        if not os.path.isfile(yaml_path):
            raise ConfigNotFoundError(config_path=yaml_path)

        with open(yaml_path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {yaml_path}: {e}") from e

        if data is None:
            return cls({})
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")
        return cls(data)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def scanner_settings(self) -> ScannerSettings:
        """Validate and return the ``scanner`` section.

        Raises:
            ConfigError: If the section does not match :class:`ScannerSettings`.
        """
        raw = self.get("scanner") or {}
        if not isinstance(raw, dict):
            raise ConfigError(f"'scanner' must be a mapping, got {type(raw).__name__}")
        try:
            return ScannerSettings.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(f"Invalid scanner configuration: {e}") from e


def load_factory(target: str) -> SchemeFinderFactory:
    """Resolve ``'module.path:ClassName'`` and instantiate it with no arguments.

    Raises:
        FactoryLoadError: If the target cannot be imported, instantiated, or
            does not look like a finder factory.
    """
    if ":" not in target:
        raise FactoryLoadError(target=target, reason="expected format 'module.path:ClassName'")

    module_path, attr_name = target.split(":", 1)
    try:
        mod = importlib.import_module(module_path)
    except ImportError as exc:
        raise FactoryLoadError(target=target, reason=f"cannot import module '{module_path}'") from exc

    try:
        factory_cls = getattr(mod, attr_name)
    except AttributeError as exc:
        raise FactoryLoadError(target=target, reason=f"'{attr_name}' not found in '{module_path}'") from exc

    if not callable(factory_cls):
        raise FactoryLoadError(target=target, reason=f"'{attr_name}' is not callable")

    try:
        factory = factory_cls()
    except TypeError as exc:
        raise FactoryLoadError(target=target, reason=f"cannot instantiate '{attr_name}': {exc}") from exc

    if not isinstance(factory, SchemeFinderFactory):
        raise FactoryLoadError(target=target, reason="object does not provide 'schemes' and 'create'")
    return factory
