"""Tests for the concept dictionary and keyword matcher."""

from __future__ import annotations

import json

import pytest

from backend.concepts import (
    DEFAULT_CONCEPTS,
    ConceptDictionary,
    ConceptRecord,
    configured_dictionary,
    load_dictionary,
)


def _record(tag: str) -> ConceptRecord:
    return ConceptRecord(
        overview=f"{tag} overview",
        explanation=f"{tag} explanation",
        example=f"{tag} example",
        mistakes=f"{tag} mistakes",
    )


class TestMatch:
    def test_case_insensitive_substring(self) -> None:
        matched = DEFAULT_CONCEPTS.match("This post is about SIGNALS in modern apps.")
        assert matched == [DEFAULT_CONCEPTS["Signals"]]

    def test_multiple_terms_in_dictionary_order(self) -> None:
        text = "standalone components changed how Angular apps are built."
        assert DEFAULT_CONCEPTS.match(text) == [
            DEFAULT_CONCEPTS["Angular"],
            DEFAULT_CONCEPTS["Standalone Components"],
        ]

    def test_repeated_mentions_yield_one_record(self) -> None:
        matched = DEFAULT_CONCEPTS.match("Angular, angular and ANGULAR again.")
        assert matched == [DEFAULT_CONCEPTS["Angular"]]

    def test_no_partial_term_match(self) -> None:
        assert DEFAULT_CONCEPTS.match("standalone widgets and signal flags") == []

    def test_terms_sharing_a_record_are_not_duplicated(self) -> None:
        shared = _record("shared")
        dictionary = ConceptDictionary({"foo": shared, "bar": shared})
        assert dictionary.match("foo and bar") == [shared]

    def test_dictionary_is_read_only(self) -> None:
        source = {"foo": _record("foo")}
        dictionary = ConceptDictionary(source)
        source["bar"] = _record("bar")

        assert list(dictionary) == ["foo"]
        assert len(dictionary) == 1


class TestLoadDictionary:
    def test_loads_json_file(self, tmp_path) -> None:
        path = tmp_path / "concepts.json"
        path.write_text(json.dumps({"Python": _record("py").to_dict()}), encoding="utf-8")

        dictionary = load_dictionary(path)
        assert dictionary.match("I write python") == [_record("py")]

    def test_missing_field_is_rejected(self, tmp_path) -> None:
        path = tmp_path / "concepts.json"
        path.write_text(json.dumps({"Python": {"overview": "only"}}), encoding="utf-8")

        with pytest.raises(ValueError, match="missing fields"):
            load_dictionary(path)

    def test_non_object_is_rejected(self, tmp_path) -> None:
        path = tmp_path / "concepts.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ValueError):
            load_dictionary(path)


class TestConfiguredDictionary:
    def test_defaults_to_builtin_terms(self, monkeypatch) -> None:
        monkeypatch.setattr("backend.config.settings.concepts_path", None)
        assert configured_dictionary() is DEFAULT_CONCEPTS

    def test_uses_configured_file(self, tmp_path, monkeypatch) -> None:
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"Rust": _record("rs").to_dict()}), encoding="utf-8")
        monkeypatch.setattr("backend.config.settings.concepts_path", path)

        assert list(configured_dictionary()) == ["Rust"]
