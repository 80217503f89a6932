"""
Generator configuration.

Per-language defaults (namespace of the resource classes and the runtime
types generated mappers import) merged with an optional JSON file and
explicit overrides.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, fields, asdict

from .synthesizer import RuntimeTypes


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


RUNTIME_TYPE_KEYS = ("base_mapper", "system_properties", "link", "timestamp")


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    output_dir: Optional[str] = None
    namespace: str = "models"

    # Code style settings
    indent_size: int = 4
    add_comments: bool = True

    # Qualified names of the runtime types generated mappers import
    runtime_types: Dict[str, str] = field(default_factory=dict)

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    def get_runtime_types(self) -> RuntimeTypes:
        """Runtime types as a RuntimeTypes value."""
        missing = [key for key in RUNTIME_TYPE_KEYS if not self.runtime_types.get(key)]
        if missing:
            raise ConfigError(f"Missing runtime types: {', '.join(missing)}")
        return RuntimeTypes(**{key: self.runtime_types[key] for key in RUNTIME_TYPE_KEYS})


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        # Python defaults
        self._configs["python"] = {
            "namespace": "models",
            "indent_size": 4,
            "add_comments": True,
            "runtime_types": {
                "base_mapper": "content_mapper.runtime.BaseMapper",
                "system_properties": "content_mapper.runtime.SystemProperties",
                "link": "content_mapper.runtime.Link",
                "timestamp": "content_mapper.runtime.Timestamp",
            },
        }

        # PHP defaults, matching the contentful-management.php SDK
        self._configs["php"] = {
            "namespace": "App.Entry",
            "indent_size": 4,
            "add_comments": True,
            "runtime_types": {
                "base_mapper": "Contentful.Management.Mapper.BaseMapper",
                "system_properties": "Contentful.Management.SystemProperties",
                "link": "Contentful.Core.Api.Link",
                "timestamp": "Contentful.Core.Api.DateTimeImmutable",
            },
        }

    def get_config(
        self,
        language: str = "python",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        # Start with defaults
        base_config = json.loads(json.dumps(self._configs.get(language, {})))

        # Load from file if provided
        if config_file:
            file_config = self._load_config_file(config_file)
            self._merge(base_config, file_config)

        # Apply custom overrides
        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    def _merge(self, base: Dict[str, Any], overrides: Dict[str, Any]):
        """Merge overrides into base; runtime_types merge key by key."""
        for key, value in overrides.items():
            if key == "runtime_types" and isinstance(value, dict):
                base.setdefault("runtime_types", {}).update(value)
            else:
                base[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Read a JSON object of settings; anything else is a ConfigError."""
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")
        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            settings = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(settings, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")
        return settings

    def _dict_to_config(self, settings: Dict[str, Any]) -> GeneratorConfig:
        """Build a GeneratorConfig; keys it does not declare land in ``custom``."""
        declared = {f.name for f in fields(GeneratorConfig)}
        known = {key: value for key, value in settings.items() if key in declared}
        extra = {key: value for key, value in settings.items() if key not in declared}

        if extra:
            known["custom"] = {**known.get("custom", {}), **extra}
        return GeneratorConfig(**known)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def list_languages(self) -> list[str]:
        """Get list of languages with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig, language: str) -> list[str]:
        """
        Validate configuration for a language.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.indent_size < 1:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        for key in RUNTIME_TYPE_KEYS:
            if not config.runtime_types.get(key):
                warnings.append(f"Missing runtime type: {key}")

        unknown = set(config.runtime_types) - set(RUNTIME_TYPE_KEYS)
        for key in sorted(unknown):
            warnings.append(f"Unknown runtime type: {key}")

        parts = [part for part in config.namespace.split(".") if part]
        if config.namespace and len(parts) != len(config.namespace.split(".")):
            warnings.append(f"Invalid namespace: {config.namespace}")

        # Language-specific validations
        if language == "python":
            if not parts:
                warnings.append("Empty namespace: Python mappers import resources from it")
            for part in parts:
                if not part.isidentifier():
                    warnings.append(f"Invalid Python module name: {config.namespace}")
                    break

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = "python",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)

