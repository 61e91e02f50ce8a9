# tests/config/test_config_loader.py
"""
Tests for engine parameter loading from YAML.
"""

from __future__ import annotations

import pytest

from rulekit import ConfigError, DefaultRulesEngine, RulesEngineParameters, load_parameters
from rulekit.config import CONFIG_ENV_VAR, parameters_from_dict
from rulekit.core.engine.parameters import DEFAULT_PRIORITY_THRESHOLD
from rulekit.core.errors import codes


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep the user's real ~/.rulekit/config.yml out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    return home


def write_config(path, text: str):
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_any_file():
    params = load_parameters()

    assert params == RulesEngineParameters()
    assert params.priority_threshold == DEFAULT_PRIORITY_THRESHOLD
    assert params.continue_on_error is False


def test_explicit_path(tmp_path):
    path = write_config(
        tmp_path / "rules.yml",
        "engine:\n  skip_on_first_applied_rule: true\n  priority_threshold: 10\n",
    )

    params = load_parameters(path)

    assert params.skip_on_first_applied_rule is True
    assert params.priority_threshold == 10
    assert params.skip_on_first_failed_rule is False


def test_env_var_path(tmp_path, monkeypatch):
    path = write_config(tmp_path / "env.yml", "engine:\n  continue_on_error: true\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert load_parameters().continue_on_error is True


def test_default_location_in_home(isolated_home):
    config_dir = isolated_home / ".rulekit"
    config_dir.mkdir()
    write_config(config_dir / "config.yml", "engine:\n  skip_on_first_non_triggered_rule: true\n")

    assert load_parameters().skip_on_first_non_triggered_rule is True


def test_missing_engine_section_uses_defaults(tmp_path):
    path = write_config(tmp_path / "other.yml", "logging:\n  level: DEBUG\n")

    assert load_parameters(path) == RulesEngineParameters()


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigError) as exc_info:
        load_parameters(tmp_path / "nope.yml")

    assert exc_info.value.error_code == codes.CONFIG_INVALID
    assert exc_info.value.details["path"].endswith("nope.yml")


def test_invalid_yaml(tmp_path):
    path = write_config(tmp_path / "broken.yml", "engine: [unclosed\n")

    with pytest.raises(ConfigError) as exc_info:
        load_parameters(path)

    assert exc_info.value.__cause__ is not None


def test_unknown_field_rejected():
    with pytest.raises(ConfigError) as exc_info:
        parameters_from_dict({"engine": {"skip_everything": True}})

    errors = exc_info.value.details["errors"]
    assert errors[0]["loc"] == ("skip_everything",)


def test_wrong_type_rejected():
    with pytest.raises(ConfigError):
        parameters_from_dict({"engine": {"priority_threshold": "high"}})


@pytest.mark.parametrize("data", [["engine"], {"engine": ["not", "a", "mapping"]}])
def test_malformed_structure(data):
    with pytest.raises(ConfigError):
        parameters_from_dict(data)


def test_engine_from_config(tmp_path):
    path = write_config(tmp_path / "engine.yml", "engine:\n  skip_on_first_failed_rule: true\n")

    engine = DefaultRulesEngine.from_config(path)

    assert engine.parameters.skip_on_first_failed_rule is True
    assert engine.rule_listeners == []
