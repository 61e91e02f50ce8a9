# rulekit/core/facts/facts.py
"""
Fact Context

A mutable name -> value mapping handed to one firing call.

Each fact carries a type tag next to its value. Type-based parameter
binding queries the tags (find_by_type) instead of inspecting values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Union

from .tags import tag_matches


def _check_name(name: Any) -> str:
    if not isinstance(name, str) or not name:
        raise ValueError("fact name must be a non-empty str")
    return name


@dataclass(frozen=True)
class Fact:
    """
    A named value.

    Attributes:
        name: Fact name (case-sensitive, unique within a Facts instance)
        value: Fact value (may be None)
        type: Type tag used for type-based binding (defaults to type(value))
    """
    name: str
    value: Any = None
    type: Optional[type] = None

    def __post_init__(self) -> None:
        _check_name(self.name)
        if self.type is None:
            object.__setattr__(self, "type", type(self.value))

    @classmethod
    def of(cls, name: str, value: Any, type_: Optional[type] = None) -> "Fact":
        return cls(name=name, value=value, type=type_)


class Facts:
    """
    Fact context for one firing cycle.

    Putting an existing name replaces the previous fact. Not thread-safe.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._facts: Dict[str, Fact] = {}
        for name, value in (initial or {}).items():
            self.put(name, value)

    def put(self, name: str, value: Any, type_: Optional[type] = None) -> Any:
        """
        Add or replace a fact.

        Args:
            name: Fact name
            value: Fact value
            type_: Explicit type tag (defaults to type(value))

        Returns:
            The value previously stored under this name, or None
        """
        return self.add(Fact.of(name, value, type_))

    def add(self, fact: Fact) -> Any:
        """Add or replace a fact, returning the previous value (or None)."""
        previous = self._facts.pop(fact.name, None)
        self._facts[fact.name] = fact
        return previous.value if previous is not None else None

    def remove(self, name: Union[str, Fact]) -> Any:
        """Remove a fact by name, returning its value (or None if absent)."""
        if isinstance(name, Fact):
            name = name.name
        removed = self._facts.pop(name, None)
        return removed.value if removed is not None else None

    def get(self, name: str, default: Any = None) -> Any:
        fact = self._facts.get(name)
        return fact.value if fact is not None else default

    def get_fact(self, name: str) -> Optional[Fact]:
        return self._facts.get(name)

    def find_by_type(self, tp: Any) -> List[Fact]:
        """
        Find facts whose type tag is compatible with ``tp``.

        Matching is done on the stored tags, see tags.tag_matches.
        """
        return [fact for fact in self._facts.values() if tag_matches(fact.type, tp)]

    def as_dict(self) -> Dict[str, Any]:
        return {name: fact.value for name, fact in self._facts.items()}

    def clear(self) -> None:
        self._facts.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._facts

    def __iter__(self) -> Iterator[Fact]:
        return iter(list(self._facts.values()))

    def __len__(self) -> int:
        return len(self._facts)

    def __repr__(self) -> str:
        inner = ", ".join(f"{f.name}={f.value!r}" for f in self._facts.values())
        return f"Facts({inner})"
