from __future__ import annotations

import json
from pathlib import Path

import pytest

from pynibe.exceptions import NibeLocaleError
from pynibe.i18n import Translator, load_locale


def _write(directory: Path, locale: str, table: object) -> None:
    (directory / f"{locale}.json").write_text(json.dumps(table), encoding="utf-8")


def test_translate_nested_leaf() -> None:
    translator = Translator({"a": {"b": "X"}})

    assert translator.translate("a.b") == "X"


def test_translate_missing_key_returns_none() -> None:
    translator = Translator({"a": {"b": "X"}})

    assert translator.translate("a.c") is None
    assert translator.translate("z") is None


def test_translate_returns_first_string_reached() -> None:
    translator = Translator({"a": "Y"})

    assert translator.translate("a.b") == "Y"
    assert translator.translate("a.b.c") == "Y"


def test_translate_stops_on_absent_segment() -> None:
    translator = Translator({"a": {"b": "X"}})

    assert translator.translate("a.x.b") is None


def test_translate_path_ending_on_mapping_returns_none() -> None:
    translator = Translator({"a": {"b": {"c": "X"}}})

    assert translator.translate("a.b") is None


def test_load_falls_back_to_default_locale(tmp_path: Path) -> None:
    _write(tmp_path, "en", {"category": {"status": "Status"}})

    translator = Translator.load("sv", directory=tmp_path)

    assert translator.locale == "en"
    assert translator.translate("category.status") == "Status"


def test_load_configured_locale(tmp_path: Path) -> None:
    _write(tmp_path, "en", {"category": {"hot_water": "Hot water"}})
    _write(tmp_path, "sv", {"category": {"hot_water": "Varmvatten"}})

    translator = Translator.load("sv", directory=tmp_path)

    assert translator.locale == "sv"
    assert translator.translate("category.hot_water") == "Varmvatten"


def test_load_fails_when_default_missing(tmp_path: Path) -> None:
    with pytest.raises(NibeLocaleError):
        Translator.load("en", directory=tmp_path)
    with pytest.raises(NibeLocaleError):
        Translator.load("sv", directory=tmp_path)


def test_load_locale_rejects_non_object(tmp_path: Path) -> None:
    _write(tmp_path, "en", ["not", "an", "object"])

    with pytest.raises(NibeLocaleError):
        load_locale("en", directory=tmp_path)


def test_load_locale_rejects_path_like_codes(tmp_path: Path) -> None:
    with pytest.raises(NibeLocaleError):
        load_locale("../en", directory=tmp_path)


def test_load_locale_drops_non_text_leaves(tmp_path: Path) -> None:
    _write(tmp_path, "en", {"a": {"n": 1, "s": "text"}})

    table = load_locale("en", directory=tmp_path)

    assert table == {"a": {"s": "text"}}


def test_bundled_locales_agree_on_labels() -> None:
    english = Translator.load("en")
    swedish = Translator.load("sv")

    assert english.translate("category.system_info.country") == "Country"
    assert swedish.translate("category.system_info.country") == "Land"
    assert Translator.load("xx").locale == "en"
