# rulekit/core/engine/engine.py
"""
Firing Engine: evaluates a rule set against a fact context.

The engine is responsible for:
- Iterating rules in priority order (then name)
- Running each rule's evaluate -> execute cycle
- Notifying rule and engine listeners
- Applying the skip / threshold parameters
- Failing fast on faults unless they are consumed

Fault policy:
- A condition fault is reported to on_evaluation_error and propagates as
  ExecutionFault, unless continue_on_error is set (then: not matched)
- An action fault is consumed when a registered rule listener overrides
  on_failure (every on_failure is called) or continue_on_error is set;
  otherwise it propagates as ExecutionFault
- A binding miss is never a fault: the rule is not matched / skipped

The engine holds no per-call state and may be reused across sequential calls.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from ..errors import ExecutionFault, codes
from ..facts import Facts
from ..rules import BindingMiss, Rule, Rules
from .listeners import RuleListener, RulesEngineListener
from .parameters import RulesEngineParameters

logger = logging.getLogger(__name__)


class DefaultRulesEngine:
    """
    Default rules engine.

    Usage:
    ```python
    engine = DefaultRulesEngine(RulesEngineParameters(skip_on_first_applied_rule=True))
    engine.register_rule_listener(MyListener())
    engine.fire(rules, facts)
    ```
    """

    def __init__(
        self,
        parameters: Optional[RulesEngineParameters] = None,
        rule_listeners: Optional[Iterable[RuleListener]] = None,
        engine_listeners: Optional[Iterable[RulesEngineListener]] = None,
    ):
        self.parameters = parameters or RulesEngineParameters()
        self._rule_listeners: List[RuleListener] = list(rule_listeners or [])
        self._engine_listeners: List[RulesEngineListener] = list(engine_listeners or [])

    @classmethod
    def from_config(cls, path: Optional[Union[str, Path]] = None, **kwargs: Any) -> "DefaultRulesEngine":
        """Create an engine with parameters loaded by rulekit.config.load_parameters."""
        from ...config import load_parameters

        return cls(parameters=load_parameters(path), **kwargs)

    # ---------------------------
    # Listeners
    # ---------------------------

    def register_rule_listener(self, *listeners: RuleListener) -> None:
        self._rule_listeners.extend(listeners)

    def register_engine_listener(self, *listeners: RulesEngineListener) -> None:
        self._engine_listeners.extend(listeners)

    @property
    def rule_listeners(self) -> List[RuleListener]:
        return list(self._rule_listeners)

    @property
    def engine_listeners(self) -> List[RulesEngineListener]:
        return list(self._engine_listeners)

    # ---------------------------
    # Public API
    # ---------------------------

    def fire(self, rules: Union[Rules, Iterable[Any]], facts: Facts) -> None:
        """
        Fire all rules against facts.

        Args:
            rules: Rule set (any iterable of definitions is wrapped in Rules)
            facts: Fact context, read and written by rules

        Raises:
            ExecutionFault: If a condition or action raised and nothing consumed it
        """
        rules = self._as_rules(rules)
        for listener in self._engine_listeners:
            listener.before_firing(rules, facts)
        self._do_fire(rules, facts)
        for listener in self._engine_listeners:
            listener.after_firing(rules, facts)

    def check(self, rules: Union[Rules, Iterable[Any]], facts: Facts) -> Dict[Rule, bool]:
        """
        Evaluate conditions only, without executing any action.

        Returns:
            Mapping rule -> condition result, for every rule that was evaluated
        """
        rules = self._as_rules(rules)
        for listener in self._engine_listeners:
            listener.before_firing(rules, facts)
        results: Dict[Rule, bool] = {}
        for rule in rules:
            if self._should_be_evaluated(rule, facts):
                results[rule] = self._evaluate(rule, facts)
        for listener in self._engine_listeners:
            listener.after_firing(rules, facts)
        return results

    # ---------------------------
    # Firing cycle
    # ---------------------------

    def _do_fire(self, rules: Rules, facts: Facts) -> None:
        if rules.is_empty():
            logger.warning("No rules registered! Nothing to apply")
            return
        self._log_state(rules, facts)
        logger.debug("Rules evaluation started")

        params = self.parameters
        for rule in rules:
            name = rule.name
            if rule.priority > params.priority_threshold:
                logger.debug(
                    "Rule priority threshold (%s) exceeded at rule '%s' with priority=%s, next rules will be skipped",
                    params.priority_threshold, name, rule.priority,
                )
                break
            if not self._should_be_evaluated(rule, facts):
                logger.debug("Rule '%s' has been skipped before being evaluated", name)
                self._notify_skipped(rule, facts)
                continue

            matched = self._evaluate(rule, facts)
            for listener in self._rule_listeners:
                listener.after_evaluate(rule, facts, matched)

            if not matched:
                logger.debug("Rule '%s' has been evaluated to false, it has not been executed", name)
                self._notify_skipped(rule, facts)
                if params.skip_on_first_non_triggered_rule:
                    logger.debug("Next rules will be skipped since parameter skip_on_first_non_triggered_rule is set")
                    break
                continue

            logger.debug("Rule '%s' triggered", name)
            for listener in self._rule_listeners:
                listener.before_execute(rule, facts)
            try:
                rule.execute(facts)
            except BindingMiss as miss:
                logger.debug("Rule '%s' skipped, action parameters not resolved: %s", name, miss)
                self._notify_skipped(rule, facts)
                continue
            except Exception as exc:
                if not (self._consumes_failures() or params.continue_on_error):
                    raise ExecutionFault.from_exception(name, exc, error_code=codes.ACTION_RAISED) from exc
                logger.error("Rule '%s' performed with error", name, exc_info=exc)
                for listener in self._rule_listeners:
                    listener.on_failure(rule, facts, exc)
                self._notify_skipped(rule, facts)
                if params.skip_on_first_failed_rule:
                    logger.debug("Next rules will be skipped since parameter skip_on_first_failed_rule is set")
                    break
                continue

            logger.debug("Rule '%s' performed successfully", name)
            for listener in self._rule_listeners:
                listener.on_success(rule, facts)
            for listener in self._engine_listeners:
                listener.after_executed(rule, facts)
            if params.skip_on_first_applied_rule:
                logger.debug("Next rules will be skipped since parameter skip_on_first_applied_rule is set")
                break

    def _evaluate(self, rule: Rule, facts: Facts) -> bool:
        try:
            return bool(rule.evaluate(facts))
        except BindingMiss as miss:
            logger.debug("Rule '%s' condition not satisfied: %s", rule.name, miss)
            return False
        except Exception as exc:
            for listener in self._rule_listeners:
                listener.on_evaluation_error(rule, facts, exc)
            if not self.parameters.continue_on_error:
                raise ExecutionFault.from_exception(rule.name, exc, error_code=codes.CONDITION_RAISED) from exc
            logger.error("Rule '%s' evaluated with error", rule.name, exc_info=exc)
            return False

    def _should_be_evaluated(self, rule: Rule, facts: Facts) -> bool:
        # every listener is asked, even after a veto
        decisions = [listener.before_evaluate(rule, facts) for listener in self._rule_listeners]
        return all(decisions)

    def _consumes_failures(self) -> bool:
        return any(
            type(listener).on_failure is not RuleListener.on_failure for listener in self._rule_listeners
        )

    def _notify_skipped(self, rule: Rule, facts: Facts) -> None:
        for listener in self._engine_listeners:
            listener.after_skipped(rule, facts)

    # ---------------------------
    # Helpers
    # ---------------------------

    @staticmethod
    def _as_rules(rules: Union[Rules, Iterable[Any]]) -> Rules:
        if isinstance(rules, Rules):
            return rules
        return Rules(*rules)

    def _log_state(self, rules: Rules, facts: Facts) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        logger.debug("Engine parameters: %s", self.parameters)
        logger.debug("Registered rules:")
        for rule in rules:
            logger.debug(
                "Rule { name = '%s', description = '%s', priority = '%s'}",
                rule.name, rule.description, rule.priority,
            )
        logger.debug("Known facts:")
        for fact in facts:
            logger.debug("Fact { %s : %r }", fact.name, fact.value)
