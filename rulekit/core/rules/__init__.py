"""
Rule System

Rule abstraction, declaration markers, binder, rule set and rule groups.
"""

from .models import (
    Rule,
    BasicRule,
    DEFAULT_RULE_NAME,
    DEFAULT_RULE_DESCRIPTION,
    DEFAULT_RULE_PRIORITY,
)

from .markers import (
    rule,
    condition,
    action,
    priority,
    fact,
    FactName,
)

from .binding import (
    Binding,
    BindingMiss,
    ByName,
    ByType,
    WholeFacts,
    is_assignable,
)

from .builder import (
    DefaultRule,
    RuleBuilder,
)

from .binder import (
    bind,
    Invoker,
    RuleDescriptor,
)

from .ruleset import (
    Rules,
    DuplicatePolicy,
)

from .groups import (
    RuleGroup,
    UnitRuleGroup,
    ActivationRuleGroup,
    ConditionalRuleGroup,
)

__all__ = [
    "Rule",
    "BasicRule",
    "DEFAULT_RULE_NAME",
    "DEFAULT_RULE_DESCRIPTION",
    "DEFAULT_RULE_PRIORITY",
    "rule",
    "condition",
    "action",
    "priority",
    "fact",
    "FactName",
    "Binding",
    "BindingMiss",
    "ByName",
    "ByType",
    "WholeFacts",
    "is_assignable",
    "DefaultRule",
    "RuleBuilder",
    "bind",
    "Invoker",
    "RuleDescriptor",
    "Rules",
    "DuplicatePolicy",
    "RuleGroup",
    "UnitRuleGroup",
    "ActivationRuleGroup",
    "ConditionalRuleGroup",
]
