# rulekit/core/rules/binding.py
"""
Binding descriptors: how one condition/action parameter gets its value.

Three strategies, chosen once when a rule is bound:
- ByName: a named fact (parameter annotated Annotated[T, fact("name")])
- ByType: the single fact whose type tag is compatible with T
- WholeFacts: the Facts object itself

Resolution failures raise BindingMiss. It is an internal signal: the engine
and rule groups treat it as "rule not eligible / rule skipped" and it never
leaves a firing call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, get_args, get_origin

from ..facts import Facts
from ..facts.tags import NUMBER_TYPES, is_union

_NONE_TYPE = type(None)


class BindingMiss(Exception):
    """A parameter could not be resolved against the current facts."""


def is_assignable(value: Any, annotation: Any) -> bool:
    """
    Check that ``value`` can be passed to a parameter typed ``annotation``.

    bool is not accepted for int/float/complex parameters even though it
    subclasses int. int is accepted for float (and int/float for complex).
    """
    if annotation is Any or annotation is object:
        return True
    if is_union(annotation):
        return any(is_assignable(value, member) for member in get_args(annotation))
    origin = get_origin(annotation)
    if origin is Literal:
        return value in get_args(annotation)
    if value is None:
        return annotation is _NONE_TYPE or annotation is None
    if origin is not None:
        annotation = origin
    if not isinstance(annotation, type):
        return False
    if isinstance(value, bool) and annotation in NUMBER_TYPES:
        return False
    if annotation is float and isinstance(value, int):
        return True
    if annotation is complex and isinstance(value, (int, float)):
        return True
    return isinstance(value, annotation)


class Binding:
    """Base class for binding descriptors."""

    def resolve(self, facts: Facts) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class ByName(Binding):
    fact_name: str
    annotation: Any = Any

    def resolve(self, facts: Facts) -> Any:
        fact = facts.get_fact(self.fact_name)
        if fact is None:
            raise BindingMiss(f"fact '{self.fact_name}' is missing")
        if not is_assignable(fact.value, self.annotation):
            raise BindingMiss(
                f"fact '{self.fact_name}' value {fact.value!r} is not assignable to {self.annotation!r}"
            )
        return fact.value


@dataclass(frozen=True)
class ByType(Binding):
    annotation: Any

    def resolve(self, facts: Facts) -> Any:
        matches = facts.find_by_type(self.annotation)
        if len(matches) != 1:
            raise BindingMiss(
                f"expected exactly one fact of type {self.annotation!r}, found {len(matches)}"
            )
        return matches[0].value


@dataclass(frozen=True)
class WholeFacts(Binding):

    def resolve(self, facts: Facts) -> Any:
        return facts
