# tests/rules/test_rule_builder.py
from __future__ import annotations

from rulekit import DEFAULT_RULE_PRIORITY, DefaultRule, DefaultRulesEngine, Facts, RuleBuilder, Rules


def test_builder_sets_metadata():
    built = (
        RuleBuilder()
        .name("weather")
        .description("if it rains then take an umbrella")
        .priority(1)
        .build()
    )

    assert isinstance(built, DefaultRule)
    assert (built.name, built.description, built.priority) == (
        "weather",
        "if it rains then take an umbrella",
        1,
    )


def test_builder_defaults_to_false_condition():
    built = RuleBuilder().then(lambda facts: facts.put("ran", True)).build()
    facts = Facts()

    DefaultRulesEngine().fire(Rules(built), facts)

    assert built.priority == DEFAULT_RULE_PRIORITY
    assert "ran" not in facts


def test_actions_run_in_call_order():
    calls = []
    built = (
        RuleBuilder()
        .name("ordered")
        .when(lambda facts: True)
        .then(lambda facts: calls.append(1))
        .then(lambda facts: calls.append(2))
        .build()
    )

    DefaultRulesEngine().fire(Rules(built), Facts())

    assert calls == [1, 2]


def test_actions_write_facts():
    built = (
        RuleBuilder()
        .name("umbrella")
        .when(lambda facts: facts.get("rain") is True)
        .then(lambda facts: facts.put("umbrella", True))
        .build()
    )
    facts = Facts({"rain": True})

    DefaultRulesEngine().fire(Rules(built), facts)

    assert facts.get("umbrella") is True
