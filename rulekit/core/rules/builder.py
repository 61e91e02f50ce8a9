# rulekit/core/rules/builder.py
"""
Closure-based rules.

DefaultRule holds a condition and an ordered list of actions, each a plain
callable over Facts. RuleBuilder assembles one fluently:

```python
weather = (
    RuleBuilder()
    .name("weather")
    .priority(1)
    .when(lambda facts: facts.get("rain") is True)
    .then(lambda facts: facts.put("umbrella", True))
    .build()
)
```
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from ..facts import Facts
from .models import (
    BasicRule,
    DEFAULT_RULE_DESCRIPTION,
    DEFAULT_RULE_NAME,
    DEFAULT_RULE_PRIORITY,
)

ConditionFn = Callable[[Facts], bool]
ActionFn = Callable[[Facts], None]


def never(facts: Facts) -> bool:
    return False


def always(facts: Facts) -> bool:
    return True


class DefaultRule(BasicRule):
    """Rule made of a condition callable and ordered action callables."""

    def __init__(
        self,
        name: str = DEFAULT_RULE_NAME,
        description: str = DEFAULT_RULE_DESCRIPTION,
        priority: int = DEFAULT_RULE_PRIORITY,
        condition: ConditionFn = never,
        actions: Optional[Sequence[ActionFn]] = None,
    ):
        super().__init__(name=name, description=description, priority=priority)
        self.condition = condition
        self.actions: List[ActionFn] = list(actions or [])

    def evaluate(self, facts: Facts) -> bool:
        return bool(self.condition(facts))

    def execute(self, facts: Facts) -> None:
        for run in self.actions:
            run(facts)


class RuleBuilder:
    """Fluent builder for DefaultRule."""

    def __init__(self) -> None:
        self._name = DEFAULT_RULE_NAME
        self._description = DEFAULT_RULE_DESCRIPTION
        self._priority = DEFAULT_RULE_PRIORITY
        self._condition: ConditionFn = never
        self._actions: List[ActionFn] = []

    def name(self, name: str) -> "RuleBuilder":
        self._name = name
        return self

    def description(self, description: str) -> "RuleBuilder":
        self._description = description
        return self

    def priority(self, priority: int) -> "RuleBuilder":
        self._priority = priority
        return self

    def when(self, condition: ConditionFn) -> "RuleBuilder":
        self._condition = condition
        return self

    def then(self, action: ActionFn) -> "RuleBuilder":
        self._actions.append(action)
        return self

    def build(self) -> DefaultRule:
        return DefaultRule(
            name=self._name,
            description=self._description,
            priority=self._priority,
            condition=self._condition,
            actions=self._actions,
        )
