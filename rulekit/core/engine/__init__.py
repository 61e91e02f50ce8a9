"""
Firing engine, its parameters and listener hooks.
"""

from .parameters import RulesEngineParameters, DEFAULT_PRIORITY_THRESHOLD
from .listeners import RuleListener, RulesEngineListener
from .engine import DefaultRulesEngine

__all__ = [
    "RulesEngineParameters",
    "DEFAULT_PRIORITY_THRESHOLD",
    "RuleListener",
    "RulesEngineListener",
    "DefaultRulesEngine",
]
