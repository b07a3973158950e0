"""Configuration loading: bundled defaults plus an optional user YAML file."""

import importlib
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml
from importlib.resources import files
from jsonschema import ValidationError, validate

from .exceptions import ConfigError
from .flattener import ParameterFormatting
from .macro_registry import MacroRegistry, get_registry

logger = logging.getLogger(__name__)


CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "parameters": {
            "type": "object",
            "properties": {
                "true": {"type": "string"},
                "false": {"type": "string"},
                "null": {"type": "string"},
                "date_format": {"type": "string", "minLength": 1},
                "datetime_format": {"type": "string", "minLength": 1},
            },
            "additionalProperties": False,
        },
        "macros": {
            "type": "object",
            "propertyNames": {"pattern": "^[A-Za-z][A-Za-z0-9_]*$"},
            "additionalProperties": {"type": "string", "pattern": "^[\\w.]+[:.]\\w+$"},
        },
    },
    "additionalProperties": False,
}


class ConfigLoader:
    """Loads, merges and validates fluent-rules configuration."""

    BUNDLED_CONFIG = "builder-config.yaml"

    def __init__(self, config_path: Optional[str] = None):
        """
        Load bundled defaults, then overlay config_path if given.

        Args:
            config_path: Optional path to a user YAML config. Each top-level
                section in it is merged key by key over the defaults.

        Raises:
            ConfigError: If a file cannot be read or the merged config is invalid
        """
        bundled = files('fluent_rules').joinpath(self.BUNDLED_CONFIG)
        with bundled.open('r') as f:
            defaults = yaml.safe_load(f) or {}

        self.config_path = str(config_path) if config_path else None
        user_config = self._load_yaml(Path(config_path)) if config_path else {}

        self.config = self._merge(defaults, user_config)
        self._validate(self.config)

        if self.config_path:
            logger.info("Loaded fluent-rules config", extra={'config_path': self.config_path})

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load a YAML mapping from disk."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping at top level")
        return data

    @staticmethod
    def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        merged = {key: dict(value) if isinstance(value, dict) else value
                  for key, value in defaults.items()}
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key].update(value)
            else:
                merged[key] = value
        return merged

    def _validate(self, config: Dict[str, Any]) -> None:
        try:
            validate(instance=config, schema=CONFIG_SCHEMA)
        except ValidationError as e:
            error_path = " -> ".join(str(p) for p in e.path) if e.path else "root"
            raise ConfigError(f"Invalid config at {error_path}: {e.message}") from e

    def get_config(self) -> Dict[str, Any]:
        """Get the merged configuration."""
        return self.config

    def get_formatting(self) -> ParameterFormatting:
        """Build the parameter rendering settings."""
        return ParameterFormatting(**self.config.get('parameters', {}))

    def get_macro_paths(self) -> Dict[str, str]:
        """Get configured macros as name -> import path."""
        return dict(self.config.get('macros', {}))

    def load_macros(self, registry: Optional[MacroRegistry] = None) -> Dict[str, Callable]:
        """
        Import every configured macro and register it.

        Args:
            registry: Registry to populate (defaults to the process-wide one)

        Returns:
            Dict of registered name -> function

        Raises:
            ConfigError: If an import path cannot be resolved to a callable
            InvalidMacroNameError: If a configured name is reserved
        """
        registry = registry if registry is not None else get_registry()
        # Resolve everything first so a bad entry registers nothing
        loaded = {
            name: self._import_callable(path)
            for name, path in self.get_macro_paths().items()
        }
        registry.register_all(loaded)

        if loaded:
            logger.info(
                "Registered configured macros",
                extra={'macros': list(loaded), 'config_path': self.config_path}
            )
        return loaded

    @staticmethod
    def _import_callable(path: str) -> Callable:
        """
        Resolve "package.module:function" (or "package.module.function").
        """
        if ':' in path:
            module_name, attr = path.split(':', 1)
        else:
            module_name, attr = path.rsplit('.', 1)

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise ConfigError(f"Cannot import macro module '{module_name}' for {path}: {e}") from e

        function = getattr(module, attr, None)
        if function is None or not callable(function):
            raise ConfigError(f"Macro path {path} does not name a callable in {module_name}")
        return function
