# rulekit/config/loader.py
"""
Configuration Loader

Loads engine parameters from YAML files with code defaults as fallback.

Design principle:
- Code = truth (RulesEngineParameters has all defaults)
- YAML = input parameters (optional)
- System works without YAML

YAML layout:
```yaml
engine:
  skip_on_first_applied_rule: false
  skip_on_first_non_triggered_rule: false
  skip_on_first_failed_rule: false
  priority_threshold: 100
  continue_on_error: false
```
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from rulekit.core.engine.parameters import RulesEngineParameters
from rulekit.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "RULEKIT_CONFIG"
ENGINE_SECTION = "engine"


def _candidate_paths(config_path: Optional[Union[str, Path]]) -> List[Path]:
    if config_path:
        return [Path(config_path)]
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return [Path(env_path)]
    return [Path.home() / ".rulekit" / "config.yml"]


def _load_yaml(config_path: Optional[Union[str, Path]] = None) -> Optional[Dict[str, Any]]:
    """
    Load the first YAML file found.

    An explicitly requested file (argument or environment variable) must
    exist; the default location is optional.
    """
    explicit = bool(config_path) or bool(os.environ.get(CONFIG_ENV_VAR))
    for path in _candidate_paths(config_path):
        if not path.exists():
            if explicit:
                raise ConfigError(message=f"Config file not found: {path}", details={"path": str(path)})
            continue
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(
                message=f"Config file {path} is not valid YAML: {e}",
                details={"path": str(path)},
                cause=e,
            ) from e
        logger.debug("Loaded config from %s", path)
        return data
    return None  # No YAML found, use code defaults


def parameters_from_dict(data: Optional[Dict[str, Any]]) -> RulesEngineParameters:
    """
    Build engine parameters from a parsed config mapping.

    Args:
        data: Whole config mapping (the "engine" section is used) or None

    Raises:
        ConfigError: If the section is malformed or has unknown/invalid fields
    """
    if not data:
        return RulesEngineParameters()
    if not isinstance(data, dict):
        raise ConfigError(message="Config root must be a mapping")

    section = data.get(ENGINE_SECTION) or {}
    if not isinstance(section, dict):
        raise ConfigError(message=f"Config section '{ENGINE_SECTION}' must be a mapping")

    try:
        return RulesEngineParameters(**section)
    except ValidationError as e:
        raise ConfigError(
            message=f"Invalid engine parameters: {e}",
            details={"errors": e.errors(include_url=False)},
            cause=e,
        ) from e


def load_parameters(config_path: Optional[Union[str, Path]] = None) -> RulesEngineParameters:
    """
    Load engine parameters.

    Args:
        config_path: Path to YAML file. If None, tries:
            1. $RULEKIT_CONFIG
            2. ~/.rulekit/config.yml

    Returns:
        RulesEngineParameters (code defaults when no file is found)
    """
    return parameters_from_dict(_load_yaml(config_path))
