"""Concept dictionary package: keyword lookup over extracted text."""

from backend.concepts.dictionary import (
    DEFAULT_CONCEPTS,
    ConceptDictionary,
    ConceptRecord,
    configured_dictionary,
    load_dictionary,
)

__all__ = [
    "DEFAULT_CONCEPTS",
    "ConceptDictionary",
    "ConceptRecord",
    "configured_dictionary",
    "load_dictionary",
]
