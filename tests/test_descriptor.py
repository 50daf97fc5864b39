from __future__ import annotations

from pynibe.ingestion.descriptor import extract_descriptor
from pynibe.models.snapshot import Descriptor, Snapshot


def _unit(unit_id: str, *categories: dict) -> dict:
    return {"systemUnitId": unit_id, "categories": list(categories)}


def _system_info(**params: str) -> dict:
    return {
        "categoryId": "SYSTEM_INFO",
        "name": "system info",
        "parameters": [{"key": key, "displayValue": value} for key, value in params.items()],
    }


def test_descriptor_from_system_info() -> None:
    snapshot = Snapshot.from_api(
        {"unitData": [_unit("0", _system_info(COUNTRY="SE", PRODUCT="F750", SERIAL_NUMBER="12345"))]}
    )

    assert extract_descriptor(snapshot) == Descriptor(country="SE", product="F750", serial_number="12345")


def test_descriptor_unset_without_system_info() -> None:
    snapshot = Snapshot.from_api(
        {"unitData": [_unit("0", {"categoryId": "STATUS", "parameters": [{"key": "COUNTRY", "displayValue": "SE"}]})]}
    )

    descriptor = extract_descriptor(snapshot)

    assert descriptor.country is None
    assert descriptor.product is None
    assert descriptor.serial_number is None


def test_descriptor_missing_key_left_unset() -> None:
    snapshot = Snapshot.from_api({"unitData": [_unit("0", _system_info(PRODUCT="F750", OTHER="x"))]})

    descriptor = extract_descriptor(snapshot)

    assert descriptor.product == "F750"
    assert descriptor.country is None
    assert descriptor.serial_number is None


def test_descriptor_last_system_info_wins_per_field() -> None:
    snapshot = Snapshot.from_api(
        {
            "unitData": [
                _unit("0", _system_info(COUNTRY="SE", PRODUCT="F750")),
                _unit("1", _system_info(PRODUCT="S1255")),
            ]
        }
    )

    descriptor = extract_descriptor(snapshot)

    assert descriptor.product == "S1255"
    assert descriptor.country == "SE"


def test_descriptor_ignores_system_info_without_parameters() -> None:
    snapshot = Snapshot.from_api({"unitData": [_unit("0", {"categoryId": "SYSTEM_INFO"})]})

    assert extract_descriptor(snapshot) == Descriptor()
