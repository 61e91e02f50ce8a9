# rulekit/core/errors/__init__.py
"""
Core error types for rulekit.

This package defines:
- Stable error codes (codes.py)
- The exception taxonomy (exceptions.py)

No side effects on import.
"""

from . import codes
from .exceptions import (
    RulekitError,
    DefinitionError,
    DuplicateRuleError,
    ExecutionFault,
    ConfigError,
)

__all__ = [
    "codes",
    "RulekitError",
    "DefinitionError",
    "DuplicateRuleError",
    "ExecutionFault",
    "ConfigError",
]
