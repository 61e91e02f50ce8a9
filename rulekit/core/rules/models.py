# rulekit/core/rules/models.py
"""
Rule Models

Defines the Rule abstraction the engine fires and the BasicRule base class.

Ordering: rules sort by priority ascending (lower fires first), then by name.
Identity: two rules are the same rule when their names are equal.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import total_ordering
from typing import Any

from ..facts import Facts

DEFAULT_RULE_NAME = "rule"
DEFAULT_RULE_DESCRIPTION = "description"
# Low priority: anything declared explicitly fires before it
DEFAULT_RULE_PRIORITY = 2**31 - 2


@total_ordering
class Rule(ABC):
    """
    Something the engine can evaluate and execute.

    Subclasses provide name, description and priority plus the
    evaluate / execute pair.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    def description(self) -> str:
        return DEFAULT_RULE_DESCRIPTION

    @property
    def priority(self) -> int:
        return DEFAULT_RULE_PRIORITY

    @abstractmethod
    def evaluate(self, facts: Facts) -> bool:
        """Return True when the rule's condition holds for ``facts``."""

    @abstractmethod
    def execute(self, facts: Facts) -> None:
        """Run the rule's actions against ``facts``."""

    def sort_key(self) -> tuple:
        return (self.priority, self.name)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Rule):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Rule):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, priority={self.priority})"


class BasicRule(Rule):
    """
    Concrete rule base with fixed metadata.

    By default the condition is false and the action does nothing; subclass
    and override evaluate / execute.
    """

    def __init__(
        self,
        name: str = DEFAULT_RULE_NAME,
        description: str = DEFAULT_RULE_DESCRIPTION,
        priority: int = DEFAULT_RULE_PRIORITY,
    ):
        self._name = name
        self._description = description
        self._priority = priority

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def priority(self) -> int:
        return self._priority

    def evaluate(self, facts: Facts) -> bool:
        return False

    def execute(self, facts: Facts) -> None:
        pass
