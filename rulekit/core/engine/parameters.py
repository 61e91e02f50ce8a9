# rulekit/core/engine/parameters.py
"""
RulesEngineParameters: firing behavior switches.

Serializable (YAML/JSON-compatible), see rulekit.config.loader.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PRIORITY_THRESHOLD = 2**31 - 1


class RulesEngineParameters(BaseModel):
    """
    Engine parameters.

    - skip_on_first_applied_rule: stop after the first rule fires
    - skip_on_first_non_triggered_rule: stop at the first rule whose condition is false
    - skip_on_first_failed_rule: stop after the first consumed action fault
    - priority_threshold: stop at the first rule with a greater priority
    - continue_on_error: consume condition/action faults even without listeners
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    skip_on_first_applied_rule: bool = Field(default=False, description="Stop after the first fired rule")
    skip_on_first_non_triggered_rule: bool = Field(
        default=False, description="Stop at the first rule whose condition is false"
    )
    skip_on_first_failed_rule: bool = Field(default=False, description="Stop after the first failed rule")
    priority_threshold: int = Field(
        default=DEFAULT_PRIORITY_THRESHOLD, description="Rules with a greater priority are not fired"
    )
    continue_on_error: bool = Field(
        default=False, description="Treat condition/action faults as consumed instead of failing fast"
    )
