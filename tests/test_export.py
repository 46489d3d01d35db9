"""Tests for exporting generated data."""

import csv
import json

from synthdb import SeedBuilder


def test_to_json(hr_schema, now, tmp_path):
    seeds = SeedBuilder(hr_schema, rows=2, seed=1, now=now).execute()
    path = tmp_path / "seeds.json"

    seeds.to_json(path)
    data = json.loads(path.read_text())

    assert list(data) == ["companies", "departments", "employees"]
    assert len(data["employees"]) == 2
    # Dates and decimals become strings
    assert isinstance(data["employees"][0]["hire_date"], str)
    assert isinstance(data["employees"][0]["salary"], str)


def test_to_csv(hr_schema, now, tmp_path):
    seeds = SeedBuilder(hr_schema, rows=3, seed=1, now=now).execute()
    path = tmp_path / "employees.csv"

    seeds.to_csv("employees", path)
    with open(path, newline="") as f:
        rows = list(csv.DictReader(f))

    assert len(rows) == 3
    assert list(rows[0]) == hr_schema.get_table("employees").column_names
    # NULL becomes an empty field
    assert rows[0]["manager_id"] == ""
