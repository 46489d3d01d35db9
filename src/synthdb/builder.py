"""SeedBuilder API for declarative synthetic data generation."""

import inspect
import logging
from datetime import date, datetime
from typing import Any

from synthdb.classifier import SemanticClassifier
from synthdb.context import RowContext
from synthdb.dependency import sort_tables
from synthdb.generators import DEFAULT_STRATEGY, BaseGenerator, ValueSynthesizer, get_generator
from synthdb.models import SeedPlan, Seeds, TableInfo
from synthdb.plan import ColumnPlan, TablePlan
from synthdb.pool import ReferencePool
from synthdb.schema import SchemaModel
from synthdb.semantics import SemanticType

logger = logging.getLogger(__name__)

DEFAULT_ROWS = 100


class SeedBuilder:
    """
    Generate rows for every table of a schema model.

    Tables are generated parents first. Every table gets ``rows`` rows unless
    adjusted with :meth:`add`.

    Example:
        >>> schema = SchemaModel.from_file("schema.yaml")
        >>> seeds = (
        ...     SeedBuilder(schema, rows=10, seed=42)
        ...     .add("employees", count=50, overrides={"status": "active"})
        ...     .execute()
        ... )
        >>> seeds.employees[0].company_id in {c.id for c in seeds.companies}
        True
    """

    def __init__(
        self,
        schema: SchemaModel,
        rows: int = DEFAULT_ROWS,
        seed: int | None = None,
        locale: str = "en_US",
        strict: bool = False,
        now: datetime | None = None,
        classifier: SemanticClassifier | None = None,
    ):
        """
        Initialize SeedBuilder.

        Args:
            schema: Tables to generate
            rows: Default row count per table
            seed: Seed for reproducible output (None: non-deterministic)
            locale: Faker locale
            strict: Raise CircularDependencyError instead of falling back
            now: Reference time for relative dates
            classifier: Column classifier (default: SemanticClassifier())

        Raises:
            ValueError: If rows is negative
        """
        if rows < 0:
            raise ValueError(f"rows must be >= 0, got {rows}")
        self.schema = schema
        self.rows = rows
        self.seed = seed
        self.locale = locale
        self.strict = strict
        self.now = now
        self.classifier = classifier or SemanticClassifier()
        self._plan: dict[str, SeedPlan] = {}

    def add(
        self,
        table: str,
        count: int | None = None,
        strategy: str = DEFAULT_STRATEGY,
        overrides: dict[str, Any] | None = None,
    ) -> "SeedBuilder":
        """
        Adjust the plan of one table.

        Args:
            table: Table name
            count: Number of rows (default: the builder's ``rows``)
            strategy: "semantic" or a registered custom strategy
            overrides: Column overrides (static value or callable)

        Returns:
            Self for chaining

        Raises:
            TableNotFoundError: If table is not part of the schema
            ValueError: If count is negative or an override names an unknown column
        """
        info = self.schema.get_table(table)
        if count is not None and count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        for column in overrides or {}:
            if info.get_column(column) is None:
                raise ValueError(f"Override for unknown column '{table}.{column}'")

        self._plan[table] = SeedPlan(
            table=table,
            count=self.rows if count is None else count,
            strategy=strategy,
            overrides=overrides or {},
        )
        return self

    def plan(self, table: str) -> TablePlan:
        """
        Build the generation plan of one table.

        Raises:
            TableNotFoundError: If table is not part of the schema
        """
        info = self.schema.get_table(table)
        seed_plan = self._plan.get(table) or SeedPlan(table=table, count=self.rows)
        return TablePlan.build(
            info,
            seed_plan.count,
            classifier=self.classifier,
            strategy=seed_plan.strategy,
            overrides=seed_plan.overrides,
        )

    def ordered_tables(self) -> list[TableInfo]:
        """
        Tables in generation order.

        Raises:
            CircularDependencyError: If strict and the schema has a cycle
        """
        return sort_tables(self.schema.tables, strict=self.strict)

    def plans(self) -> list[TablePlan]:
        """Plans of every table, in generation order."""
        return [self.plan(table.name) for table in self.ordered_tables()]

    def execute(self) -> Seeds:
        """
        Generate every table and return the rows.

        Returns:
            Seeds with tables in generation order

        Raises:
            CircularDependencyError: If strict and the schema has a cycle
            GeneratorNotFoundError: If a plan names an unregistered strategy
        """
        pool = ReferencePool()
        synthesizer = ValueSynthesizer.seeded(
            self.seed, pool=pool, locale=self.locale, now=self.now
        )

        seeds = Seeds()
        for plan in self.plans():
            rows = self._generate_rows(plan, synthesizer, pool)
            seeds.add_table(plan.table, rows)
            logger.info(f"Generated {len(rows)} rows for {plan.name}")

        return seeds

    def _generate_rows(
        self,
        plan: TablePlan,
        synthesizer: ValueSynthesizer,
        pool: ReferencePool,
    ) -> list[dict[str, Any]]:
        """
        Generate rows for one table.

        Each row gets a fresh RowContext. After a row is complete its primary
        key joins the pool, so later rows of a self-referencing table can
        point at it.

        Returns:
            Row dicts keyed in declaration order
        """
        generator = None
        if plan.strategy != DEFAULT_STRATEGY:
            generator = get_generator(plan.strategy)()

        order = plan.generation_order
        pk = plan.pk_column
        if pk is None:
            logger.debug(f"Table '{plan.name}' has no primary key; nothing joins the pool")

        rows = []
        for index in range(plan.count):
            context = RowContext()
            row: dict[str, Any] = {}

            for column in order:
                value = self._column_value(
                    column, plan, synthesizer, context, row, index, generator
                )
                row[column.name] = value
                _remember(context, column, value)

            if pk is not None:
                pool.add(plan.name, row[pk.name])
            rows.append({name: row[name] for name in plan.output_order})

        return rows

    def _column_value(
        self,
        column: ColumnPlan,
        plan: TablePlan,
        synthesizer: ValueSynthesizer,
        context: RowContext,
        row: dict[str, Any],
        index: int,
        generator: BaseGenerator | None,
    ) -> Any:
        if column.name in plan.overrides:
            return _resolve_override(plan.overrides[column.name], index + 1)

        if generator is not None and not column.is_key:
            return generator.generate(
                column.name,
                column.column.pg_type,
                instance=index + 1,
                row_data=dict(row),
                table_info=plan.table,
                category=column.category,
            )

        return synthesizer.synthesize(column.category, column.column, context, index)


def _resolve_override(override: Any, instance: int) -> Any:
    """Static values are used as-is; callables may take the instance number."""
    if not callable(override):
        return override
    if len(inspect.signature(override).parameters) > 0:
        return override(instance)
    return override()


def _remember(context: RowContext, column: ColumnPlan, value: Any) -> None:
    """Record a generated value so later columns of the row can derive from it."""
    if value is None:
        return
    context.set(column.name, value)
    if column.category.context_key:
        context.set(column.category.context_key, value)

    moment = value if isinstance(value, date) else None
    if isinstance(value, str) and column.column.data_type.is_temporal:
        # Sampled values arrive as text
        moment = _parse_date(value)
    if moment is not None:
        context.set_date(column.name, moment)
        if column.category.type == SemanticType.START_DATE:
            context.set_date("start_date", moment)


def _parse_date(text: str) -> date | None:
    try:
        return datetime.fromisoformat(text.strip())
    except ValueError:
        return None
