"""Tests for custom generator plugin system."""

import pytest

from synthdb import (
    BaseGenerator,
    SeedBuilder,
    clear_generators,
    list_generators,
    register_generator,
)
from synthdb.exceptions import GeneratorNotFoundError
from synthdb.generators.registry import get_generator


@pytest.fixture(autouse=True)
def registry():
    clear_generators()
    yield
    clear_generators()


class InstanceGenerator(BaseGenerator):
    def generate(self, column, data_type, **context):
        return f"{column}-{context['instance']:03d}"


def test_register_and_list():
    register_generator("instance", InstanceGenerator)

    assert list_generators() == ["instance"]
    assert get_generator("instance") is InstanceGenerator

    clear_generators()
    assert list_generators() == []


def test_register_rejects_invalid_classes():
    class NoGenerate:
        pass

    with pytest.raises(ValueError, match="generate"):
        register_generator("broken", NoGenerate)
    with pytest.raises(ValueError, match="reserved"):
        register_generator("semantic", InstanceGenerator)


def test_unknown_generator_lists_available():
    register_generator("instance", InstanceGenerator)

    with pytest.raises(GeneratorNotFoundError) as exc_info:
        get_generator("sku")

    assert "instance" in str(exc_info.value)


def test_custom_strategy_generates_non_key_columns(hr_schema, now):
    """Keys stay valid while every other column comes from the plugin."""
    register_generator("instance", InstanceGenerator)

    seeds = (
        SeedBuilder(hr_schema, rows=2, seed=1, now=now)
        .add("departments", count=3, strategy="instance")
        .execute()
    )

    assert [d.id for d in seeds.departments] == [1, 2, 3]
    assert all(d.company_id in (1, 2) for d in seeds.departments)
    assert [d.department for d in seeds.departments] == [
        "department-001",
        "department-002",
        "department-003",
    ]


def test_custom_generator_receives_context(hr_schema, now):
    seen = []

    class RecordingGenerator(BaseGenerator):
        def generate(self, column, data_type, **context):
            seen.append((column, data_type, dict(context["row_data"]), context["table_info"].name))
            return "x"

    register_generator("recording", RecordingGenerator)
    SeedBuilder(hr_schema, rows=1, seed=1, now=now).add("departments", strategy="recording").execute()

    assert seen == [("department", "text", {"id": 1, "company_id": 1}, "departments")]


def test_overrides_win_over_custom_strategy(hr_schema, now):
    register_generator("instance", InstanceGenerator)

    seeds = (
        SeedBuilder(hr_schema, rows=1, seed=1, now=now)
        .add("departments", strategy="instance", overrides={"department": "Research"})
        .execute()
    )

    assert seeds.departments[0].department == "Research"
