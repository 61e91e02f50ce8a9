# rulekit/core/errors/codes.py
from __future__ import annotations

from typing import Final


# ---- canonical error codes (stable public contract) ----
# generic
UNKNOWN: Final[str] = "UNKNOWN"

# definition / binding
NOT_A_RULE: Final[str] = "NOT_A_RULE"
CONDITION_MISSING: Final[str] = "CONDITION_MISSING"
CONDITION_DUPLICATED: Final[str] = "CONDITION_DUPLICATED"
CONDITION_NOT_BOOLEAN: Final[str] = "CONDITION_NOT_BOOLEAN"
ACTION_MISSING: Final[str] = "ACTION_MISSING"
PRIORITY_INVALID: Final[str] = "PRIORITY_INVALID"
BINDING_UNRESOLVABLE: Final[str] = "BINDING_UNRESOLVABLE"
DUPLICATE_RULE: Final[str] = "DUPLICATE_RULE"

# firing
CONDITION_RAISED: Final[str] = "CONDITION_RAISED"
ACTION_RAISED: Final[str] = "ACTION_RAISED"

# config
CONFIG_INVALID: Final[str] = "CONFIG_INVALID"


# ---- semantic groups (internal helpers) ----

DEFINITION_CODES: Final[set[str]] = {
    NOT_A_RULE,
    CONDITION_MISSING,
    CONDITION_DUPLICATED,
    CONDITION_NOT_BOOLEAN,
    ACTION_MISSING,
    PRIORITY_INVALID,
    BINDING_UNRESOLVABLE,
    DUPLICATE_RULE,
}

EXECUTION_CODES: Final[set[str]] = {
    CONDITION_RAISED,
    ACTION_RAISED,
}
