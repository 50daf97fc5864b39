from __future__ import annotations

import itertools
import uuid

from pynibe._constants import PLUGIN_NAME
from pynibe.state.identity import entity_identity, identity_seed, normalize_category_id, uuid5_generate


def test_identity_is_deterministic() -> None:
    assert entity_identity("0", "SYSTEM_INFO") == entity_identity("0", "SYSTEM_INFO")


def test_identity_is_stable_uuid() -> None:
    identity = entity_identity("0", "SYSTEM_INFO")
    assert str(uuid.UUID(identity)) == identity
    assert identity == uuid5_generate(f"{PLUGIN_NAME}-0-SYSTEM_INFO")


def test_seed_matches_plain_form_without_hyphens() -> None:
    assert identity_seed("12", "CLIMATE") == f"{PLUGIN_NAME}-12-CLIMATE"


def test_category_case_is_normalized() -> None:
    assert normalize_category_id(" system_info ") == "SYSTEM_INFO"
    assert entity_identity("0", "system_info") == entity_identity("0", "SYSTEM_INFO")


def test_identities_unique_across_shared_prefixes() -> None:
    units = ["0", "1", "10", "1-0", "1\\", "U1", "U1A", "", "a-b"]
    categories = ["A", "AB", "B", "A-B", "B-", "-", "\\-", "SYSTEM_INFO", "SYSTEM_INFO_1"]
    pairs = list(itertools.product(units, categories))

    identities = {entity_identity(unit, category) for unit, category in pairs}

    assert len(identities) == len(pairs)


def test_hyphenated_components_do_not_collide() -> None:
    assert identity_seed("1-A", "B") != identity_seed("1", "A-B")
    assert entity_identity("1-A", "B") != entity_identity("1", "A-B")


def test_custom_generator_receives_seed() -> None:
    seen: list[str] = []

    def generate(seed: str) -> str:
        seen.append(seed)
        return f"id:{seed}"

    assert entity_identity("3", "CLIMATE", namespace="ns", generate=generate) == "id:ns-3-CLIMATE"
    assert seen == ["ns-3-CLIMATE"]
