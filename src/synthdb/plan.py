"""Per-table generation plans."""

from dataclasses import dataclass, field
from typing import Any

from synthdb.classifier import SemanticClassifier
from synthdb.models import ColumnInfo, TableInfo
from synthdb.semantics import SemanticCategory, SemanticType


@dataclass(frozen=True)
class ColumnPlan:
    """A column together with its semantic category."""

    column: ColumnInfo
    category: SemanticCategory
    position: int

    @property
    def name(self) -> str:
        return self.column.name

    @property
    def priority(self) -> int:
        return self.category.priority

    @property
    def is_key(self) -> bool:
        """Primary and foreign keys are always produced by the builder."""
        return self.category.type in (SemanticType.PRIMARY_KEY, SemanticType.FOREIGN_KEY)


@dataclass
class TablePlan:
    """
    How one table's rows are generated.

    Columns are generated in ``generation_order`` (descending priority,
    declaration order among equals) so derived fields can read their sources
    from the row context, and emitted in ``output_order`` (declaration order).

    Attributes:
        table: Table metadata
        count: Number of rows to generate
        strategy: "semantic" or a registered custom strategy name
        overrides: Column name to static value or callable
    """

    table: TableInfo
    count: int
    columns: list[ColumnPlan]
    strategy: str = "semantic"
    overrides: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        table: TableInfo,
        count: int,
        classifier: SemanticClassifier | None = None,
        strategy: str = "semantic",
        overrides: dict[str, Any] | None = None,
    ) -> "TablePlan":
        """Classify every column of table and build its plan."""
        classifier = classifier or SemanticClassifier()
        columns = [
            ColumnPlan(column=col, category=classifier.classify_column(col, table), position=i)
            for i, col in enumerate(table.columns)
        ]
        return cls(
            table=table,
            count=count,
            columns=columns,
            strategy=strategy,
            overrides=dict(overrides or {}),
        )

    @property
    def name(self) -> str:
        return self.table.name

    @property
    def generation_order(self) -> list[ColumnPlan]:
        """Columns sorted by descending priority; ties keep declaration order."""
        return sorted(self.columns, key=lambda c: -c.priority)

    @property
    def output_order(self) -> list[str]:
        """Column names in declaration order."""
        return [c.name for c in self.columns]

    @property
    def pk_column(self) -> ColumnPlan | None:
        """
        The column whose values feed the reference pool.

        A declared primary key wins, even when it also owns a foreign key.
        Otherwise the first column classified as PRIMARY_KEY is used.
        """
        declared = self.table.pk_column
        if declared is not None:
            for column in self.columns:
                if column.name == declared:
                    return column
        for column in self.columns:
            if column.category.type == SemanticType.PRIMARY_KEY:
                return column
        return None

    def category_of(self, column: str) -> SemanticCategory:
        for c in self.columns:
            if c.name == column:
                return c.category
        raise KeyError(column)
