# rulekit/core/rules/markers.py
"""
Declaration markers for class-based rule definitions.

Usage:
```python
@rule(name="adult", priority=1)
class AgeRule:
    executed = False

    @condition
    def is_adult(self, age: Annotated[int, fact("age")]) -> bool:
        return age >= 18

    @action(order=1)
    def then(self, facts: Facts) -> None:
        self.executed = True
```

The markers only attach metadata; rulekit.core.rules.binder reads it.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

RULE_META_ATTR = "__rulekit_rule__"
ROLE_ATTR = "__rulekit_role__"

CONDITION = "condition"
ACTION = "action"
PRIORITY = "priority"

F = TypeVar("F", bound=Callable[..., Any])

# Monotonic declaration counter, used to keep actions in declaration order
_declarations = itertools.count()


@dataclass(frozen=True)
class RuleMeta:
    """Metadata declared with @rule. None means "use the default"."""
    name: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[int] = None


@dataclass(frozen=True)
class Role:
    """Role of a method inside a rule definition."""
    kind: str
    order: int = 0
    sequence: int = 0


@dataclass(frozen=True)
class FactName:
    """Parameter tag: bind this parameter to the fact with this name."""
    name: str


def fact(name: str) -> FactName:
    """
    Tag a parameter for binding by fact name.

    Use inside typing.Annotated: ``age: Annotated[int, fact("age")]``.
    """
    if not isinstance(name, str) or not name:
        raise ValueError("fact name must be a non-empty str")
    return FactName(name)


def rule(
    cls: Optional[type] = None,
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    priority: Optional[int] = None,
):
    """Mark a class as a rule definition. Usable with or without arguments."""

    def wrap(target: type) -> type:
        setattr(target, RULE_META_ATTR, RuleMeta(name=name, description=description, priority=priority))
        return target

    if cls is None:
        return wrap
    return wrap(cls)


def _mark(func: F, kind: str, order: int = 0) -> F:
    setattr(func, ROLE_ATTR, Role(kind=kind, order=order, sequence=next(_declarations)))
    return func


def condition(func: F) -> F:
    """Mark the method returning the rule's condition (must return bool)."""
    return _mark(func, CONDITION)


def action(func: Optional[F] = None, *, order: int = 0):
    """Mark an action method. Actions run by ``order``, then declaration order."""
    if func is None:
        return lambda f: _mark(f, ACTION, order)
    return _mark(func, ACTION, order)


def priority(func: F) -> F:
    """Mark a zero-argument method returning the rule priority (int)."""
    return _mark(func, PRIORITY)
