# rulekit/core/errors/exceptions.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from . import codes


@dataclass(eq=False)
class RulekitError(Exception):
    """
    The one public base exception type for rulekit.
    """
    message: str
    error_code: str = codes.UNKNOWN
    phase: str = "unknown"              # bind / fire / config
    details: Dict[str, Any] = field(default_factory=dict)
    cause: Optional[BaseException] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": type(self).__name__,
            "error_code": self.error_code,
            "message": self.message,
            "phase": self.phase,
            "details": self.details,
        }


@dataclass(eq=False)
class DefinitionError(RulekitError):
    """
    A rule definition is structurally invalid.

    Raised synchronously from binding / registration, never while firing.
    """
    phase: str = "bind"
    definition: Any = None

    @classmethod
    def invalid(
        cls,
        message: str,
        *,
        error_code: str,
        definition: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> "DefinitionError":
        details = dict(details or {})
        if definition is not None:
            details.setdefault("definition", type(definition).__name__)
        return cls(
            message=message,
            error_code=error_code,
            details=details,
            definition=definition,
        )


@dataclass(eq=False)
class DuplicateRuleError(DefinitionError):
    """A rule with the same name is already registered."""
    error_code: str = codes.DUPLICATE_RULE
    rule_name: str = ""


@dataclass(eq=False)
class ExecutionFault(RulekitError):
    """
    A condition or action body raised while firing.

    The original exception is kept both as ``cause`` and as ``__cause__``.
    """
    phase: str = "fire"
    rule_name: str = ""

    @classmethod
    def from_exception(
        cls,
        rule_name: str,
        exc: BaseException,
        *,
        error_code: str = codes.ACTION_RAISED,
    ) -> "ExecutionFault":
        where = "condition" if error_code == codes.CONDITION_RAISED else "action"
        return cls(
            message=f"Rule '{rule_name}' {where} raised {type(exc).__name__}: {exc}",
            error_code=error_code,
            details={"exception_type": type(exc).__name__},
            cause=exc,
            rule_name=rule_name,
        )


@dataclass(eq=False)
class ConfigError(RulekitError):
    """Engine configuration could not be loaded or validated."""
    error_code: str = codes.CONFIG_INVALID
    phase: str = "config"
