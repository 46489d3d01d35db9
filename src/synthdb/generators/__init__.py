"""Value generators: semantic synthesis and custom strategy plugins."""

from synthdb.generators.base import BaseGenerator
from synthdb.generators.registry import (
    DEFAULT_STRATEGY,
    clear_generators,
    get_generator,
    list_generators,
    register_generator,
)
from synthdb.generators.semantic import ValueSynthesizer

__all__ = [
    "DEFAULT_STRATEGY",
    "BaseGenerator",
    "ValueSynthesizer",
    "clear_generators",
    "get_generator",
    "list_generators",
    "register_generator",
]
