# rulekit/core/engine/listeners.py
"""
Listener hooks.

Both listener kinds are optional, synchronous and called in registration
order. Every hook defaults to a no-op; subclass and override what you need.
Listeners observe: they must not change the firing order.
"""

from __future__ import annotations

from ..facts import Facts
from ..rules import Rule, Rules


class RuleListener:
    """Hooks around one rule's evaluate / execute cycle."""

    def before_evaluate(self, rule: Rule, facts: Facts) -> bool:
        """Return False to skip the rule (no further hooks for it)."""
        return True

    def after_evaluate(self, rule: Rule, facts: Facts, matched: bool) -> None:
        pass

    def on_evaluation_error(self, rule: Rule, facts: Facts, exc: Exception) -> None:
        pass

    def before_execute(self, rule: Rule, facts: Facts) -> None:
        pass

    def on_success(self, rule: Rule, facts: Facts) -> None:
        pass

    def on_failure(self, rule: Rule, facts: Facts, exc: Exception) -> None:
        """Override to consume action faults: they no longer propagate from fire()."""
        pass


class RulesEngineListener:
    """Hooks around a whole firing call."""

    def before_firing(self, rules: Rules, facts: Facts) -> None:
        pass

    def after_executed(self, rule: Rule, facts: Facts) -> None:
        pass

    def after_skipped(self, rule: Rule, facts: Facts) -> None:
        pass

    def after_firing(self, rules: Rules, facts: Facts) -> None:
        pass
