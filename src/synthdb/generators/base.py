"""Base generator interface for custom strategies."""

from abc import ABC, abstractmethod
from typing import Any


class BaseGenerator(ABC):
    """
    Base class for custom generators.

    A registered generator replaces semantic synthesis for every non-key
    column of the tables planned with its strategy name. Primary and foreign
    keys are still produced by the builder so references stay valid.

    Example:
        >>> class SKUGenerator(BaseGenerator):
        ...     def generate(self, column, data_type, **context):
        ...         return f"SKU-{context['instance']:06d}"
        >>>
        >>> register_generator("sku", SKUGenerator)
        >>> builder.add("products", strategy="sku")
    """

    @abstractmethod
    def generate(self, column: str, data_type: str, **context: Any) -> Any:
        """
        Generate a value for a column.

        Args:
            column: Column name
            data_type: Declared SQL type of the column
            **context: Additional context:
                - instance: Row instance number (1-based)
                - row_data: Values generated so far for this row (dict)
                - table_info: TableInfo for the current table
                - category: SemanticCategory assigned to the column

        Returns:
            Generated value (None renders as NULL)
        """
