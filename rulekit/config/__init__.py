# rulekit/config/__init__.py
"""
rulekit Configuration

YAML is input parameters, code has defaults (YAML can be deleted).
"""

from .loader import load_parameters, parameters_from_dict, CONFIG_ENV_VAR

__all__ = [
    "load_parameters",
    "parameters_from_dict",
    "CONFIG_ENV_VAR",
]
