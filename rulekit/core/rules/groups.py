# rulekit/core/rules/groups.py
"""
Rule Groups

Composite rules whose condition and action are synthesized from children:
- UnitRuleGroup: all children match -> all children fire (all-or-nothing)
- ActivationRuleGroup: first matching child fires (first-match-wins)
- ConditionalRuleGroup: every matching child fires independently

A group may carry its own condition, which gates entry to its children.
Children are kept in firing order (priority, then name) and may be groups.

ActivationRuleGroup remembers the child it selected between evaluate() and
the following execute(), so one group instance must not be fired from two
threads at once.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

from ..facts import Facts
from .binding import BindingMiss
from .builder import ConditionFn
from .models import BasicRule, DEFAULT_RULE_DESCRIPTION, DEFAULT_RULE_PRIORITY, Rule
from .ruleset import Rules

logger = logging.getLogger(__name__)


class RuleGroup(BasicRule):
    """Base class for composite rules."""

    def __init__(
        self,
        name: str,
        description: str = DEFAULT_RULE_DESCRIPTION,
        priority: int = DEFAULT_RULE_PRIORITY,
        condition: Optional[ConditionFn] = None,
        rules: Any = (),
    ):
        super().__init__(name=name, description=description, priority=priority)
        self.condition = condition
        self._rules = Rules()
        self.add_rule(*rules)

    def add_rule(self, *definitions: Any) -> None:
        """Add children (bound like any registered definition)."""
        self._rules.register(*definitions)

    def remove_rule(self, *items: Union[str, Any]) -> None:
        self._rules.unregister(*items)

    @property
    def rules(self) -> List[Rule]:
        """Children in firing order"""
        return list(self._rules)

    def _may_enter(self, facts: Facts) -> bool:
        if self.condition is None:
            return True
        return bool(self.condition(facts))


class UnitRuleGroup(RuleGroup):
    """Fires all children when every child's condition holds, otherwise none."""

    def evaluate(self, facts: Facts) -> bool:
        if not self._may_enter(facts):
            return False
        children = self.rules
        if not children:
            return False
        return all(child.evaluate(facts) for child in children)

    def execute(self, facts: Facts) -> None:
        for child in self._rules:
            child.execute(facts)


class ActivationRuleGroup(RuleGroup):
    """Fires only the first child (in priority order) whose condition holds."""

    def __init__(self, *args: Any, **kwargs: Any):
        self._selected: Optional[Rule] = None
        super().__init__(*args, **kwargs)

    def evaluate(self, facts: Facts) -> bool:
        self._selected = None
        if not self._may_enter(facts):
            return False
        for child in self._rules:
            if child.evaluate(facts):
                self._selected = child
                return True
        return False

    def execute(self, facts: Facts) -> None:
        if self._selected is not None:
            self._selected.execute(facts)


class ConditionalRuleGroup(RuleGroup):
    """
    Fires every child whose condition holds, each independently.

    Children run one full cycle each, in order: a child sees the facts
    written by the actions of the children before it. A child whose
    actions cannot be bound is skipped; its siblings still fire.
    """

    def evaluate(self, facts: Facts) -> bool:
        if not self._may_enter(facts):
            return False
        return any(child.evaluate(facts) for child in self._rules)

    def execute(self, facts: Facts) -> None:
        for child in self._rules:
            if not child.evaluate(facts):
                continue
            try:
                child.execute(facts)
            except BindingMiss as miss:
                logger.debug("Group '%s': child '%s' skipped: %s", self.name, child.name, miss)
