"""Dependency graph for foreign-key ordering of tables."""

import logging
from collections import deque

from synthdb.exceptions import CircularDependencyError
from synthdb.models import TableInfo

logger = logging.getLogger(__name__)


class DependencyGraph:
    """
    Directed graph for table dependencies.

    Edges run from the referenced (parent) table to the referencing (child)
    table, so a topological order lists parents before children.
    """

    def __init__(self):
        self._tables: list[str] = []
        self._successors: dict[str, list[str]] = {}
        self._dependencies: dict[str, set[str]] = {}
        self.cyclic_tables: list[str] = []

    @classmethod
    def from_tables(cls, tables: list[TableInfo]) -> "DependencyGraph":
        """
        Build the graph from table metadata.

        Self-references and references to tables outside ``tables`` add no edge.
        """
        graph = cls()
        for table in tables:
            graph.add_table(table.name)
        known = set(graph._tables)
        for table in tables:
            for fk in table.foreign_keys:
                if fk.is_self_referencing:
                    continue
                if fk.referenced_table not in known:
                    continue
                graph.add_dependency(table.name, fk.referenced_table)
        return graph

    def add_table(self, table: str) -> None:
        """Add a table to the graph."""
        if table in self._successors:
            return
        self._tables.append(table)
        self._successors[table] = []
        self._dependencies[table] = set()

    def add_dependency(self, table: str, depends_on: str) -> None:
        """Add a dependency: table depends on depends_on."""
        if table == depends_on:
            return
        self.add_table(depends_on)
        self.add_table(table)
        if depends_on in self._dependencies[table]:
            return
        self._dependencies[table].add(depends_on)
        self._successors[depends_on].append(table)

    def get_dependencies(self, table: str) -> list[str]:
        """Get all tables that this table depends on."""
        return sorted(self._dependencies.get(table, set()))

    def topological_sort(self, strict: bool = False) -> list[str]:
        """
        Sort tables in dependency order using Kahn's algorithm.

        Ready tables are taken in insertion order. When a cycle prevents a
        complete order, the tables that could not be placed are appended in
        insertion order, recorded in ``cyclic_tables``, and a warning is logged.

        Args:
            strict: Raise instead of falling back when a cycle is found

        Returns:
            Every table exactly once, dependencies before dependents
            (except within a cycle).

        Raises:
            CircularDependencyError: If strict and a cycle was detected
        """
        in_degree = {table: len(self._dependencies[table]) for table in self._tables}

        queue = deque(table for table in self._tables if in_degree[table] == 0)
        result: list[str] = []

        while queue:
            table = queue.popleft()
            result.append(table)

            for dependent in self._successors[table]:
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    queue.append(dependent)

        placed = set(result)
        self.cyclic_tables = [table for table in self._tables if table not in placed]

        if self.cyclic_tables:
            if strict:
                raise CircularDependencyError(self.cyclic_tables)
            logger.warning(
                f"Circular dependency detected involving tables: "
                f"{', '.join(self.cyclic_tables)}. Falling back to declaration order "
                f"for these tables; some foreign keys may use default values."
            )
            result.extend(self.cyclic_tables)

        return result


def sort_tables(tables: list[TableInfo], strict: bool = False) -> list[TableInfo]:
    """
    Order tables so that referenced tables precede referencing tables.

    Args:
        tables: Tables in declaration order
        strict: Raise CircularDependencyError on cycles instead of falling back

    Returns:
        The same TableInfo objects in generation order
    """
    by_name = {table.name: table for table in tables}
    order = DependencyGraph.from_tables(tables).topological_sort(strict=strict)
    return [by_name[name] for name in order]
