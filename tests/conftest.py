"""Pytest configuration and shared fixtures."""

from datetime import datetime

import pytest

from synthdb import SchemaModel, SeedBuilder

# Fixed reference time so relative dates are reproducible
NOW = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def scenario_schema() -> SchemaModel:
    """Two tables: companies and employees referencing them."""
    return SchemaModel.from_dict(
        {
            "tables": [
                {
                    "name": "employees",
                    "columns": [
                        {"name": "id", "type": "integer", "primary_key": True},
                        {"name": "company_id", "type": "integer", "references": "companies.id"},
                        {"name": "email", "type": "text"},
                    ],
                },
                {
                    "name": "companies",
                    "columns": [
                        {"name": "id", "type": "integer", "primary_key": True},
                        {"name": "name", "type": "text"},
                    ],
                },
            ]
        }
    )


@pytest.fixture
def hr_schema() -> SchemaModel:
    """
    Companies, departments and employees.

    Employees reference both parents and themselves (manager_id).
    """
    return SchemaModel.from_dict(
        {
            "tables": [
                {
                    "name": "employees",
                    "columns": [
                        {"name": "id", "type": "integer", "primary_key": True, "nullable": False},
                        {"name": "company_id", "type": "integer", "nullable": False},
                        {"name": "department_id", "type": "integer"},
                        {"name": "manager_id", "type": "integer", "nullable": True},
                        {"name": "email", "type": "text"},
                        {"name": "username", "type": "varchar(50)"},
                        {"name": "first_name", "type": "varchar(100)"},
                        {"name": "last_name", "type": "varchar(100)"},
                        {"name": "salary", "type": "numeric(10,2)"},
                        {"name": "hire_date", "type": "date"},
                        {"name": "end_date", "type": "date"},
                        {"name": "status", "type": "text"},
                        {"name": "notes", "type": "text"},
                    ],
                    "foreign_keys": [
                        {"column": "company_id", "references": "companies.id"},
                        {"column": "department_id", "referenced_table": "departments"},
                        {"column": "manager_id", "referenced_table": "employees"},
                    ],
                },
                {
                    "name": "departments",
                    "columns": [
                        {"name": "id", "type": "integer", "primary_key": True},
                        {"name": "company_id", "type": "integer", "references": "companies"},
                        {"name": "department", "type": "text"},
                    ],
                },
                {
                    "name": "companies",
                    "columns": [
                        {"name": "id", "type": "integer", "primary_key": True},
                        {"name": "name", "type": "text"},
                        {"name": "domain", "type": "text"},
                        {"name": "contact_email", "type": "text"},
                        {"name": "established_date", "type": "date"},
                    ],
                },
            ]
        }
    )


@pytest.fixture
def cyclic_schema() -> SchemaModel:
    """Two tables referencing each other."""
    return SchemaModel.from_dict(
        {
            "tables": [
                {
                    "name": "authors",
                    "columns": [
                        {"name": "id", "type": "integer", "primary_key": True},
                        {"name": "featured_book_id", "type": "integer", "references": "books.id"},
                    ],
                },
                {
                    "name": "books",
                    "columns": [
                        {"name": "id", "type": "integer", "primary_key": True},
                        {"name": "author_id", "type": "integer", "references": "authors.id"},
                    ],
                },
            ]
        }
    )


@pytest.fixture
def seeds(request, hr_schema: SchemaModel):
    """
    Fixture for seed data - works with @seed_data() decorator.

    Only tables named by a decorator get rows.
    """
    if not hasattr(request.function, "_seed_plans"):
        return None

    builder = SeedBuilder(hr_schema, rows=0, seed=1234, now=NOW)
    for plan in request.function._seed_plans:
        builder.add(
            plan["table"],
            count=plan["count"],
            strategy=plan["strategy"],
            overrides=plan["overrides"],
        )
    return builder.execute()
