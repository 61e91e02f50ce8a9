"""
rulekit - Declarative rule evaluation engine

User-facing API:
- Facts: fact context (name -> value) for one firing
- @rule / @condition / @action / @priority / fact(): class-based rule definitions
- RuleBuilder: closure-based rules
- Rules: ordered rule set
- UnitRuleGroup / ActivationRuleGroup / ConditionalRuleGroup: composite rules
- DefaultRulesEngine: fires a rule set against facts
- fire(): one-line firing with a default engine

Basic usage:

    >>> from typing import Annotated
    >>> from rulekit import Facts, Rules, rule, condition, action, fact, fire
    >>> @rule(name="adult")
    ... class AgeRule:
    ...     executed = False
    ...     @condition
    ...     def is_adult(self, age: Annotated[int, fact("age")]) -> bool:
    ...         return age >= 18
    ...     @action
    ...     def then(self) -> None:
    ...         self.executed = True
    >>> age_rule = AgeRule()
    >>> fire(Rules(age_rule), Facts({"age": 18}))
    >>> age_rule.executed
    True
"""

__version__ = "0.1.0"

from typing import Any, Iterable, Union

from .core.errors import (
    RulekitError,
    DefinitionError,
    DuplicateRuleError,
    ExecutionFault,
    ConfigError,
)
from .core.facts import Fact, Facts
from .core.rules import (
    Rule,
    BasicRule,
    DEFAULT_RULE_PRIORITY,
    rule,
    condition,
    action,
    priority,
    fact,
    bind,
    RuleDescriptor,
    DefaultRule,
    RuleBuilder,
    Rules,
    DuplicatePolicy,
    RuleGroup,
    UnitRuleGroup,
    ActivationRuleGroup,
    ConditionalRuleGroup,
)
from .core.engine import (
    DefaultRulesEngine,
    RulesEngineParameters,
    RuleListener,
    RulesEngineListener,
)
from .config import load_parameters


def fire(rules: Union[Rules, Iterable[Any]], facts: Facts) -> None:
    """Fire rules against facts with a default engine."""
    DefaultRulesEngine().fire(rules, facts)


__all__ = [
    "__version__",
    "RulekitError",
    "DefinitionError",
    "DuplicateRuleError",
    "ExecutionFault",
    "ConfigError",
    "Fact",
    "Facts",
    "Rule",
    "BasicRule",
    "DEFAULT_RULE_PRIORITY",
    "rule",
    "condition",
    "action",
    "priority",
    "fact",
    "bind",
    "RuleDescriptor",
    "DefaultRule",
    "RuleBuilder",
    "Rules",
    "DuplicatePolicy",
    "RuleGroup",
    "UnitRuleGroup",
    "ActivationRuleGroup",
    "ConditionalRuleGroup",
    "DefaultRulesEngine",
    "RulesEngineParameters",
    "RuleListener",
    "RulesEngineListener",
    "load_parameters",
    "fire",
]
