"""
synthdb - Dependency-Ordered, Semantics-Aware Synthetic SQL Data

Generates referentially valid, realistic-looking rows for a relational schema
and writes them as a single SQL script.
"""

from synthdb.builder import SeedBuilder
from synthdb.classifier import SemanticClassifier
from synthdb.decorators import seed_data
from synthdb.generators.base import BaseGenerator
from synthdb.generators.registry import (
    clear_generators,
    list_generators,
    register_generator,
)
from synthdb.generators.semantic import ValueSynthesizer
from synthdb.models import ColumnInfo, ForeignKeyInfo, SeedRow, Seeds, TableInfo
from synthdb.schema import SchemaModel
from synthdb.writer import SqlDumpWriter

__version__ = "0.1.0"

__all__ = [
    "SeedBuilder",
    "SchemaModel",
    "SemanticClassifier",
    "ValueSynthesizer",
    "SqlDumpWriter",
    "ColumnInfo",
    "ForeignKeyInfo",
    "TableInfo",
    "seed_data",
    "Seeds",
    "SeedRow",
    "BaseGenerator",
    "register_generator",
    "list_generators",
    "clear_generators",
]
