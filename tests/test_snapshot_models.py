"""Tests for service-info snapshot parsing."""

from __future__ import annotations

import pytest

from pynibe.exceptions import NibeSnapshotError
from pynibe.models.snapshot import Category, Snapshot


def _payload() -> dict:
    return {
        "unitData": [
            {
                "systemUnitId": 0,
                "name": "F750",
                "categories": [
                    {
                        "categoryId": "SYSTEM_INFO",
                        "name": "system info",
                        "parameters": [
                            {"parameterId": 0, "key": "COUNTRY", "displayValue": "SE", "rawValue": -32768},
                            {"parameterId": 1, "key": "PRODUCT", "displayValue": "F750", "title": "product"},
                        ],
                    },
                    {"categoryId": "STATUS", "name": "status", "parameters": []},
                ],
            }
        ]
    }


def test_snapshot_parses_camel_case_payload() -> None:
    snapshot = Snapshot.from_api(_payload())

    assert len(snapshot.units) == 1
    unit = snapshot.units[0]
    assert unit.system_unit_id == "0"
    assert unit.name == "F750"
    category = unit.categories[0]
    assert category.category_id == "SYSTEM_INFO"
    assert category.parameter("COUNTRY").display_value == "SE"
    assert category.parameter("COUNTRY").raw_value == -32768
    assert category.parameter("MISSING") is None
    assert snapshot.raw["unitData"][0]["systemUnitId"] == 0


def test_snapshot_iterates_categories_in_order() -> None:
    snapshot = Snapshot.from_api(_payload())

    tags = [category.category_id for _unit, category in snapshot.iter_categories()]

    assert tags == ["SYSTEM_INFO", "STATUS"]


@pytest.mark.parametrize("payload", [None, [], "unitData", {}, {"unitData": None}, {"unitData": {"a": 1}}])
def test_structurally_invalid_snapshot_rejected(payload) -> None:
    with pytest.raises(NibeSnapshotError):
        Snapshot.from_api(payload)


def test_malformed_unit_is_dropped() -> None:
    payload = _payload()
    payload["unitData"].insert(0, {"name": "no id"})
    payload["unitData"].append("garbage")

    snapshot = Snapshot.from_api(payload)

    assert [unit.system_unit_id for unit in snapshot.units] == ["0"]


def test_malformed_category_and_parameter_are_dropped() -> None:
    payload = _payload()
    categories = payload["unitData"][0]["categories"]
    categories.append(["not", "a", "category"])
    categories[0]["parameters"].append({"parameterId": "not-a-number", "key": "BROKEN"})

    snapshot = Snapshot.from_api(payload)

    unit = snapshot.units[0]
    assert [category.category_id for category in unit.categories] == ["SYSTEM_INFO", "STATUS"]
    assert [parameter.key for parameter in unit.categories[0].parameters] == ["COUNTRY", "PRODUCT"]


def test_missing_containers_are_none() -> None:
    snapshot = Snapshot.from_api(
        {"unitData": [{"systemUnitId": "1"}, {"systemUnitId": 2, "categories": [{"categoryId": "X"}]}]}
    )

    assert snapshot.units[0].categories is None
    assert snapshot.units[1].categories[0].parameters is None
    assert snapshot.units[1].categories[0].name == ""


def test_numeric_display_value_coerced_to_text() -> None:
    category = Category.model_validate({"categoryId": "X", "parameters": [{"key": "K", "displayValue": 21}]})

    assert category.parameters[0].display_value == "21"
