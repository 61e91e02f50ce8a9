# tests/rules/test_ruleset.py
"""
Tests for Rules: ordering, duplicate handling and registration round-trips.
"""

from __future__ import annotations

import logging

import pytest

from rulekit import BasicRule, DefinitionError, DuplicatePolicy, DuplicateRuleError, Rules, action, condition, rule


@rule(name="declared", priority=5)
class DeclaredRule:
    @condition
    def when(self) -> bool:
        return True

    @action
    def then(self) -> None:
        pass


@rule
class BrokenRule:
    @action
    def then(self) -> None:
        pass


class TestOrdering:
    """Iteration order is priority ascending, then name ascending"""

    def test_priority_then_name(self):
        rules = Rules(
            BasicRule(name="c", priority=2),
            BasicRule(name="b", priority=1),
            BasicRule(name="a", priority=2),
            BasicRule(name="z", priority=0),
        )

        assert rules.names() == ["z", "b", "a", "c"]

    def test_annotated_definitions_are_ordered_with_others(self):
        rules = Rules(BasicRule(name="late", priority=10), DeclaredRule(), BasicRule(name="early", priority=1))

        assert rules.names() == ["early", "declared", "late"]


class TestRegistration:
    """register / unregister"""

    def test_register_then_unregister_restores_state(self):
        rules = Rules(BasicRule(name="a", priority=1), BasicRule(name="b", priority=2))
        before = list(rules)

        definition = DeclaredRule()
        rules.register(definition)
        assert "declared" in rules
        rules.unregister(definition)

        assert list(rules) == before
        assert len(rules) == 2

    def test_unregister_by_name(self):
        rules = Rules(BasicRule(name="a"), BasicRule(name="b"))

        rules.unregister("a", "missing")

        assert rules.names() == ["b"]

    def test_duplicate_rejected_by_default(self):
        rules = Rules(BasicRule(name="a", priority=1))

        with pytest.raises(DuplicateRuleError) as exc_info:
            rules.register(BasicRule(name="a", priority=2))

        assert exc_info.value.rule_name == "a"
        assert rules.get("a").priority == 1

    def test_duplicate_inside_one_call_leaves_set_unchanged(self):
        rules = Rules()

        with pytest.raises(DuplicateRuleError):
            rules.register(BasicRule(name="x"), BasicRule(name="y"), BasicRule(name="x"))

        assert rules.is_empty()

    def test_duplicate_replaced_when_requested(self, caplog):
        rules = Rules(BasicRule(name="a", priority=1), duplicate_policy=DuplicatePolicy.REPLACE)

        with caplog.at_level(logging.WARNING, logger="rulekit.core.rules.ruleset"):
            rules.register(BasicRule(name="a", priority=9))

        assert rules.get("a").priority == 9
        assert len(rules) == 1
        assert "Replacing rule 'a'" in caplog.text

    def test_invalid_definition_is_rejected_at_registration(self):
        rules = Rules()

        with pytest.raises(DefinitionError):
            rules.register(BasicRule(name="ok"), BrokenRule())

        assert rules.is_empty()

    def test_clear(self):
        rules = Rules(BasicRule(name="a"))
        rules.clear()

        assert rules.is_empty()
        assert list(rules) == []
