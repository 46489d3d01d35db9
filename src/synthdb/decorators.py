"""Pytest decorators for seed data generation."""

from collections.abc import Callable
from typing import Any


def seed_data(
    table: str,
    count: int | None = None,
    strategy: str = "semantic",
    overrides: dict[str, Any] | None = None,
):
    """
    Decorator to inject generated data into pytest test functions.

    Usage:
        @seed_data("companies", count=5)
        @seed_data("employees", count=20, overrides={"status": "active"})
        def test_payroll(seeds):
            assert len(seeds.employees) == 20

    The decorator only records the plan; the ``seeds`` fixture (see
    ``tests/conftest.py``) builds and executes it. Tables not named by a
    decorator get no rows.
    """

    def decorator(func: Callable) -> Callable:
        if not hasattr(func, "_seed_plans"):
            func._seed_plans = []

        func._seed_plans.append(
            {
                "table": table,
                "count": count,
                "strategy": strategy,
                "overrides": overrides or {},
            }
        )
        return func

    return decorator
