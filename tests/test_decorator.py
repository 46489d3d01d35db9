"""Tests for the @seed_data decorator."""

from synthdb import seed_data


@seed_data("companies", count=3)
def test_seed_data_decorator(seeds):
    """Decorator plans are executed by the seeds fixture."""
    assert len(seeds.companies) == 3
    assert seeds.employees == []


@seed_data("companies", count=2)
@seed_data("employees", count=5, overrides={"status": "active"})
def test_seed_data_multiple_tables(seeds):
    assert len(seeds.companies) == 2
    assert len(seeds.employees) == 5
    assert all(e.status == "active" for e in seeds.employees)
    assert all(e.company_id in (1, 2) for e in seeds.employees)


def test_decorator_records_plans():
    @seed_data("companies", count=1)
    @seed_data("employees")
    def decorated():
        pass

    assert decorated._seed_plans == [
        {"table": "employees", "count": None, "strategy": "semantic", "overrides": {}},
        {"table": "companies", "count": 1, "strategy": "semantic", "overrides": {}},
    ]


def test_seeds_fixture_without_decorator(seeds):
    assert seeds is None
