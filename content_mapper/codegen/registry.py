"""
Registry of mapper generators.

Languages are looked up case-insensitively by primary name or alias. The
module-level helpers work on a lazily built global registry holding the
built-in python and php generators.
"""

from typing import Dict, Type, Optional, Any, List, Union
from pathlib import Path
from .core.generator import CodeGenerator
from .core.config import GeneratorConfig, load_config
from ..logging_config import get_logger

logger = get_logger(__name__)

ConfigSource = Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]]


class RegistryError(Exception):
    """Raised when a language cannot be registered, resolved or instantiated."""

    pass


class GeneratorRegistry:
    """Maps language names and aliases to CodeGenerator subclasses."""

    def __init__(self):
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator class under a language name.

        A language that is already registered is left alone unless
        ``replace`` is set. Aliases may not shadow another language or
        an alias owned by one; nothing is registered if they do.

        Raises:
            RegistryError: If the class is not a CodeGenerator or an alias clashes
        """
        if not isinstance(generator_class, type) or not issubclass(
            generator_class, CodeGenerator
        ):
            raise RegistryError(
                f"{generator_class!r} is not a CodeGenerator subclass"
            )

        key = language.lower()
        if key in self._generators and not replace:
            logger.debug("Keeping existing %s generator", key)
            return

        alias_keys = [a.lower() for a in aliases or [] if a.lower() != key]
        if not replace:
            for alias in alias_keys:
                self._check_alias(alias, key)

        self._generators[key] = generator_class
        self._aliases.update({alias: key for alias in alias_keys})
        logger.debug("Registered %s generator %s", key, generator_class.__name__)

    def _check_alias(self, alias: str, language: str):
        if alias in self._generators:
            raise RegistryError(f"Alias '{alias}' conflicts with existing primary language")
        owner = self._aliases.get(alias)
        if owner is not None and owner != language:
            raise RegistryError(f"Alias '{alias}' already points to '{owner}'")

    def unregister(self, language: str):
        """Remove a language together with every alias pointing at it."""
        key = language.lower()
        self._generators.pop(key, None)
        self._aliases = {
            alias: target for alias, target in self._aliases.items() if target != key
        }

    def resolve(self, language: str) -> str:
        """Return the primary name for a language name or alias."""
        key = language.lower()
        if key in self._generators:
            return key
        if key in self._aliases:
            return self._aliases[key]

        raise RegistryError(
            f"No generator registered for language: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def get_generator_class(self, language: str) -> Type[CodeGenerator]:
        return self._generators[self.resolve(language)]

    def create_generator(self, language: str, config: ConfigSource = None) -> CodeGenerator:
        """
        Instantiate the generator for a language.

        Args:
            language: Language name or alias
            config: A GeneratorConfig used as is, a dict of overrides, a path
                to a JSON config file, or None for the language defaults

        Raises:
            RegistryError: If the language is unknown or the generator cannot
                be configured
        """
        key = self.resolve(language)
        if config is not None and not isinstance(
            config, (GeneratorConfig, dict, str, Path)
        ):
            raise RegistryError(f"Invalid config type: {type(config)}")

        try:
            return self._generators[key](self._config_for(key, config))
        except Exception as e:
            raise RegistryError(f"Failed to create {language} generator: {e}") from e

    @staticmethod
    def _config_for(language: str, config: ConfigSource) -> GeneratorConfig:
        if isinstance(config, GeneratorConfig):
            return config
        if isinstance(config, dict):
            return load_config(language, custom_config=config)
        return load_config(language, config_file=config)

    def list_languages(self) -> List[str]:
        """Sorted primary language names."""
        return sorted(self._generators)

    def get_aliases_for_language(self, language: str) -> List[str]:
        key = language.lower()
        return sorted(alias for alias, target in self._aliases.items() if target == key)

    def is_supported(self, language: str) -> bool:
        key = language.lower()
        return key in self._generators or key in self._aliases

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Describe a language: generator class, file extension, aliases and
        the default namespace and runtime types its mappers import.
        """
        key = self.resolve(language)
        generator_class = self._generators[key]
        generator = generator_class(load_config(key))

        return {
            "name": generator.language_name,
            "class": generator_class.__name__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases_for_language(key),
            "module": generator_class.__module__,
            "namespace": generator.config.namespace,
            "runtime_types": dict(generator.config.runtime_types),
        }


_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Return the global registry, registering the built-in generators on first use."""
    global _global_registry
    if _global_registry is None:
        from .languages.php import PhpGenerator
        from .languages.python import PythonGenerator

        _global_registry = GeneratorRegistry()
        _global_registry.register("python", PythonGenerator, aliases=["py"])
        _global_registry.register("php", PhpGenerator)
    return _global_registry


def register_generator(
    language: str,
    generator_class: Type[CodeGenerator],
    aliases: Optional[List[str]] = None,
):
    """Register a generator in the global registry."""
    get_registry().register(language, generator_class, aliases)


def get_generator(language: str = "python", config: ConfigSource = None) -> CodeGenerator:
    """Create a configured generator from the global registry."""
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Language info for every registered language, skipping broken ones."""
    result = {}
    for language in list_supported_languages():
        try:
            result[language] = get_language_info(language)
        except RegistryError as e:
            logger.warning("Skipping %s: %s", language, e)
    return result
