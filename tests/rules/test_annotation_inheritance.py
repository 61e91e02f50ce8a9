# tests/rules/test_annotation_inheritance.py
from __future__ import annotations

from rulekit import DefaultRulesEngine, Facts, Rules, action, condition, rule


@rule
class MyBaseRule:
    def __init__(self):
        self.executed = False

    @condition
    def when(self) -> bool:
        return True

    @action
    def then(self) -> None:
        self.executed = True


class MyChildRule(MyBaseRule):
    pass


class MyOverridingRule(MyBaseRule):
    @condition
    def when(self) -> bool:
        return False


class BaseBehavior:
    def __init__(self):
        self.executed = False

    @condition
    def when(self) -> bool:
        return True

    @action
    def then(self) -> None:
        self.executed = True


@rule(name="delegating")
class DelegatingRule:
    def __init__(self, behavior):
        self.__rule_delegate__ = behavior


def test_annotations_are_inherited():
    child = MyChildRule()
    rules = Rules(child)

    DefaultRulesEngine().fire(rules, Facts())

    assert child.executed is True
    assert rules.names() == ["MyChildRule"]


def test_overridden_condition_takes_precedence():
    overriding = MyOverridingRule()

    DefaultRulesEngine().fire(Rules(overriding), Facts())

    assert overriding.executed is False


def test_roles_are_taken_from_delegate():
    behavior = BaseBehavior()
    delegating = DelegatingRule(behavior)
    rules = Rules(delegating)

    DefaultRulesEngine().fire(rules, Facts())

    assert behavior.executed is True
    assert rules.names() == ["delegating"]
