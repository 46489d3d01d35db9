"""Registry of custom generation strategies."""

import logging

from synthdb.exceptions import GeneratorNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_STRATEGY = "semantic"


class GeneratorRegistry:
    """Maps strategy names to generator classes."""

    def __init__(self):
        self._generators: dict[str, type] = {}

    def register(self, name: str, generator_class: type) -> None:
        """
        Register a custom generator.

        Args:
            name: Strategy name used in ``SeedBuilder.add(strategy=...)``
            generator_class: Class with a ``generate`` method

        Raises:
            ValueError: If the name is reserved or the class has no generate method
        """
        if name == DEFAULT_STRATEGY:
            raise ValueError(f"Strategy name '{DEFAULT_STRATEGY}' is reserved")
        if not callable(getattr(generator_class, "generate", None)):
            raise ValueError(
                f"Generator class must have 'generate' method. "
                f"Class {generator_class.__name__} is missing it."
            )
        if name in self._generators:
            logger.debug(f"Replacing generator registered as '{name}'")
        self._generators[name] = generator_class

    def get(self, name: str) -> type:
        """
        Get generator class by name.

        Raises:
            GeneratorNotFoundError: If nothing is registered under name
        """
        try:
            return self._generators[name]
        except KeyError:
            raise GeneratorNotFoundError(name, self.list_generators()) from None

    def __contains__(self, name: str) -> bool:
        return name in self._generators

    def list_generators(self) -> list[str]:
        """Registered strategy names, in registration order."""
        return list(self._generators)

    def clear(self) -> None:
        """Remove every registered generator (for tests)."""
        self._generators.clear()


_registry = GeneratorRegistry()


def register_generator(name: str, generator_class: type) -> None:
    """
    Register a custom generator.

    Example:
        >>> from synthdb import BaseGenerator, register_generator
        >>>
        >>> class SKUGenerator(BaseGenerator):
        ...     def generate(self, column, data_type, **context):
        ...         return f"SKU-{context['instance']:06d}"
        >>>
        >>> register_generator("sku", SKUGenerator)
    """
    _registry.register(name, generator_class)


def get_generator(name: str) -> type:
    """Get a registered generator class (raises GeneratorNotFoundError)."""
    return _registry.get(name)


def list_generators() -> list[str]:
    """List registered strategy names."""
    return _registry.list_generators()


def clear_generators() -> None:
    """Clear all registered generators (for testing)."""
    _registry.clear()
