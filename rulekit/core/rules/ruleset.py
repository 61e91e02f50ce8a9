# rulekit/core/rules/ruleset.py
"""
Rule Set

Ordered, name-keyed collection of rules.

Design principles:
- Definitions are bound when registered, so DefinitionError surfaces here
- Iteration order is priority ascending, then name ascending
- Duplicate names are never silent: rejected or replaced per DuplicatePolicy
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Union

from ..errors import DuplicateRuleError
from .binder import bind
from .models import Rule

logger = logging.getLogger(__name__)


class DuplicatePolicy(str, Enum):
    """What to do when a registered name is already present"""
    REJECT = "reject"    # raise DuplicateRuleError
    REPLACE = "replace"  # replace the existing rule (logged)


def _name_of(item: Union[str, Any]) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, Rule):
        return item.name
    return bind(item).name


class Rules:
    """
    Ordered set of rules keyed by name.

    Usage:
    ```python
    rules = Rules(WeatherRule(), AgeRule())
    rules.register(other_rule)
    rules.unregister("weather")
    for rule in rules:
        ...
    ```
    """

    def __init__(self, *definitions: Any, duplicate_policy: DuplicatePolicy = DuplicatePolicy.REJECT):
        self.duplicate_policy = DuplicatePolicy(duplicate_policy)
        self._rules: Dict[str, Rule] = {}
        self._ordered: Optional[List[Rule]] = None
        self.register(*definitions)

    def register(self, *definitions: Any) -> None:
        """
        Register rule definitions.

        All definitions are bound and checked before the set is modified.

        Raises:
            DefinitionError: If a definition is invalid
            DuplicateRuleError: If a name is already taken (REJECT policy)
        """
        bound = [bind(definition) for definition in definitions]

        if self.duplicate_policy is DuplicatePolicy.REJECT:
            seen = set(self._rules)
            for rule in bound:
                if rule.name in seen:
                    raise DuplicateRuleError(
                        message=f"Rule '{rule.name}' is already registered",
                        rule_name=rule.name,
                        details={"rule": rule.name},
                    )
                seen.add(rule.name)

        for rule in bound:
            if rule.name in self._rules:
                logger.warning("Replacing rule '%s'", rule.name)
            self._rules[rule.name] = rule
        self._invalidate()

    def unregister(self, *items: Union[str, Any]) -> None:
        """Unregister rules by name, Rule, or rule definition. Unknown names are ignored."""
        for item in items:
            name = _name_of(item)
            if self._rules.pop(name, None) is None:
                logger.debug("Rule '%s' is not registered, nothing to unregister", name)
        self._invalidate()

    def get(self, name: str) -> Optional[Rule]:
        """Get rule by name"""
        return self._rules.get(name)

    def is_empty(self) -> bool:
        return not self._rules

    def clear(self) -> None:
        self._rules.clear()
        self._invalidate()

    def names(self) -> List[str]:
        """Rule names in firing order"""
        return [rule.name for rule in self]

    def _invalidate(self) -> None:
        self._ordered = None

    def __iter__(self) -> Iterator[Rule]:
        if self._ordered is None:
            self._ordered = sorted(self._rules.values(), key=lambda rule: rule.sort_key())
        return iter(list(self._ordered))

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return item in self._rules
        if isinstance(item, Rule):
            return item.name in self._rules
        return False

    def __repr__(self) -> str:
        return f"Rules({self.names()!r})"
