"""Keyword → concept dictionary and the matcher that queries it.

The dictionary is a read-only collaborator: it is built once (from the
built-in terms or a JSON file) and only ever queried by substring.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, List, Mapping

from backend.config import settings

_FIELDS = ("overview", "explanation", "example", "mistakes")


@dataclass(frozen=True)
class ConceptRecord:
    overview: str
    explanation: str
    example: str
    mistakes: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConceptRecord":
        missing = [f for f in _FIELDS if f not in data]
        if missing:
            raise ValueError(f"Concept record is missing fields: {', '.join(missing)}")
        return cls(**{f: str(data[f]) for f in _FIELDS})


class ConceptDictionary:
    """Immutable mapping from term to :class:`ConceptRecord`."""

    def __init__(self, concepts: Mapping[str, ConceptRecord]) -> None:
        self._concepts = MappingProxyType(dict(concepts))
        self._lowered = tuple((term.lower(), term) for term in self._concepts)

    def __len__(self) -> int:
        return len(self._concepts)

    def __iter__(self) -> Iterator[str]:
        return iter(self._concepts)

    def __getitem__(self, term: str) -> ConceptRecord:
        return self._concepts[term]

    def match(self, text: str) -> List[ConceptRecord]:
        """Return the records whose term occurs in *text* (case-insensitive).

        One record per matched term, no duplicates, dictionary order.
        """
        haystack = text.lower()
        found: List[ConceptRecord] = []
        for lowered, term in self._lowered:
            record = self._concepts[term]
            if lowered in haystack and record not in found:
                found.append(record)
        return found


def load_dictionary(path: Path | str) -> ConceptDictionary:
    """Load a dictionary from a JSON object of ``{term: {overview, ...}}``."""
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a JSON object of terms")
    return ConceptDictionary(
        {term: ConceptRecord.from_dict(entry) for term, entry in raw.items()}
    )


# ---------------------------------------------------------------------------
# Built-in terms
# ---------------------------------------------------------------------------

DEFAULT_CONCEPTS = ConceptDictionary(
    {
        "Angular": ConceptRecord(
            overview=(
                "A comprehensive platform and framework for building single-page "
                "client applications using HTML and TypeScript."
            ),
            explanation=(
                "Angular is a full-fledged framework developed by Google. It provides "
                "a structured way to build large, maintainable applications. It "
                "includes features like a component-based architecture, dependency "
                "injection, a powerful routing system, and forms handling right out "
                "of the box."
            ),
            example=(
                "A real-world analogy is a complete LEGO Technic set. You get all the "
                "specialized bricks (components), connectors (dependency injection), "
                "and a detailed instruction manual (Angular CLI) to build a complex "
                "model (your application) in a standardized way."
            ),
            mistakes=(
                "A common mistake is thinking of Angular as just a library like "
                "React. It's a complete framework, meaning it has more opinions on "
                "how you should structure your app, which can be a huge benefit for "
                "team collaboration and scalability."
            ),
        ),
        "Standalone Components": ConceptRecord(
            overview=(
                "A modern way to write Angular components that are self-contained "
                "and do not require NgModules."
            ),
            explanation=(
                "Standalone components, directives, and pipes simplify the authoring "
                "experience by reducing boilerplate. They explicitly manage their own "
                "dependencies through an `imports` array in the decorator, making "
                "them easier to understand, reuse, and lazy load."
            ),
            example=(
                "// A standalone component imports its dependencies directly.\n"
                "import { Component } from '@angular/core';\n"
                "import { CommonModule } from '@angular/common';\n\n"
                "@Component({\n"
                "  selector: 'app-greeting',\n"
                "  template: '<p *ngIf=\"showGreeting\">Hello, {{ name }}!</p>',\n"
                "  imports: [CommonModule] // No NgModule needed!\n"
                "})\n"
                "export class GreetingComponent {\n"
                "  name = 'World';\n"
                "  showGreeting = true;\n"
                "}\n"
            ),
            mistakes=(
                "Forgetting to add necessary dependencies to the `imports` array is "
                "the most common issue. If you use `*ngIf`, you must import "
                "`CommonModule`. If you use a child component, you must import it "
                "directly."
            ),
        ),
        "Signals": ConceptRecord(
            overview=(
                "A system that allows Angular to track how and where your state is "
                "used in the application, enabling fine-grained change detection."
            ),
            explanation=(
                "Signals are reactive primitives that hold a value and notify "
                "interested consumers when that value changes. When a signal is "
                "updated, Angular knows exactly which components in the template "
                "need to be updated, without having to re-check the entire component "
                "tree. This leads to significant performance improvements."
            ),
            example=(
                "import { Component, signal, computed } from '@angular/core';\n\n"
                "@Component({ selector: 'app-todo-list' })\n"
                "export class TodoListComponent {\n"
                "  tasks = signal([{ title: 'Learn Signals', done: true }]);\n"
                "  remainingTasks = computed(() => this.tasks().filter(t => !t.done).length);\n\n"
                "  addTask(title: string) {\n"
                "    this.tasks.update(currentTasks => [...currentTasks, { title, done: false }]);\n"
                "  }\n"
                "}\n"
            ),
            mistakes=(
                "Calling a signal like a regular property (e.g., `this.tasks`) "
                "instead of as a function (e.g., `this.tasks()`) to get its value. "
                "Another mistake is putting complex, expensive calculations inside a "
                "`computed` signal that runs too often."
            ),
        ),
    }
)


@lru_cache(maxsize=4)
def _load_cached(path: str) -> ConceptDictionary:
    return load_dictionary(path)


def configured_dictionary() -> ConceptDictionary:
    """The dictionary selected by ``settings.concepts_path`` (built-ins if unset)."""
    if settings.concepts_path:
        return _load_cached(str(settings.concepts_path))
    return DEFAULT_CONCEPTS
