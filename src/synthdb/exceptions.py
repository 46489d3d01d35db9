"""Custom exceptions with helpful error messages."""


class SynthDBError(Exception):
    """Base exception for synthdb errors."""

    pass


class SchemaNotFoundError(SynthDBError):
    """Schema does not exist in database."""

    def __init__(self, schema: str):
        super().__init__(
            f"Schema '{schema}' not found in database.\n\n"
            f"Suggestions:\n"
            f"1. Check schema name spelling (--schema)\n"
            f"2. List schemas: SELECT schema_name FROM information_schema.schemata;\n"
            f"3. Check database connection settings"
        )


class TableNotFoundError(SynthDBError):
    """Table does not exist in the schema model."""

    def __init__(self, table: str, available: list[str] | None = None):
        known = ", ".join(available) if available else "(none)"
        super().__init__(
            f"Table '{table}' not found in schema.\n\n"
            f"Known tables: {known}\n\n"
            f"Suggestions:\n"
            f"1. Check table name spelling\n"
            f"2. Run 'synthdb classify' to see available tables"
        )


class SchemaFileError(SynthDBError):
    """Schema description file is malformed."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Invalid schema description in {source}: {reason}\n\n"
            f"Suggestions:\n"
            f"1. Top level must be a mapping with a 'tables' list\n"
            f"2. Every table needs a 'name' and a 'columns' list\n"
            f"3. Every column needs a 'name' and a 'type'"
        )


class CircularDependencyError(SynthDBError):
    """Circular dependency detected in table relationships."""

    def __init__(self, tables: list[str]):
        tables_str = ", ".join(tables)
        super().__init__(
            f"Circular dependency detected involving tables: {tables_str}\n\n"
            f"Suggestions:\n"
            f"1. Check foreign key relationships for cycles\n"
            f"2. Run without --strict to fall back to declaration order "
            f"(the dump defers constraints until COMMIT)\n"
            f"3. Temporarily remove one FK constraint, seed data, then re-add it"
        )


class GeneratorNotFoundError(SynthDBError):
    """Custom generation strategy is not registered."""

    def __init__(self, strategy: str, available: list[str]):
        known = ", ".join(sorted(available)) if available else "(none registered)"
        super().__init__(
            f"Unknown strategy '{strategy}'.\n\n"
            f"Available: 'semantic', {known}\n\n"
            f"Suggestions:\n"
            f"1. Register a custom generator:\n"
            f"   register_generator('{strategy}', MyGenerator)\n"
            f"2. Or use the default strategy: builder.add(table, strategy='semantic')"
        )
