# tests/rules/test_fact_injection.py
from __future__ import annotations

from typing import Annotated

from rulekit import DefaultRulesEngine, Facts, Rules, action, condition, fact, rule


@rule
class AgeRule:
    def __init__(self):
        self.executed = False

    @condition
    def is_adult(self, age: Annotated[int, fact("age")]) -> bool:
        return age >= 18

    @action
    def print_you_are_adult(self) -> None:
        self.executed = True


@rule
class WeatherRule:
    def __init__(self):
        self.executed = False

    @condition
    def it_rains(self, rain: Annotated[bool, fact("rain")]) -> bool:
        return rain

    @action
    def take_an_umbrella(self, facts: Facts) -> None:
        self.executed = True


@rule
class NeedsFooRule:
    def __init__(self):
        self.executed = False

    @condition
    def when(self) -> bool:
        return True

    @action
    def then(self, foo: Annotated[object, fact("foo")]) -> None:
        self.executed = True


@rule
class CapturingRule:
    def __init__(self):
        self.fact1 = None
        self.fact2 = None
        self.facts = None

    @condition
    def when(self, fact1: Annotated[object, fact("fact1")], fact2: Annotated[object, fact("fact2")]) -> bool:
        self.fact1 = fact1
        self.fact2 = fact2
        return True

    @action
    def then(self, facts: Facts) -> None:
        self.facts = facts


class Temperature:
    def __init__(self, celsius: float):
        self.celsius = celsius


@rule
class HeatRule:
    def __init__(self):
        self.seen = None

    @condition
    def is_hot(self, temperature: Temperature) -> bool:
        return temperature.celsius > 30

    @action
    def then(self, temperature: Temperature) -> None:
        self.seen = temperature


def test_declared_facts_are_injected_by_name_and_whole_facts():
    fact1, fact2 = object(), object()
    facts = Facts()
    facts.put("fact1", fact1)
    facts.put("fact2", fact2)
    capturing = CapturingRule()

    DefaultRulesEngine().fire(Rules(capturing), facts)

    assert capturing.fact1 is fact1
    assert capturing.fact2 is fact2
    assert capturing.facts is facts


def test_rules_fire_when_facts_are_injected():
    facts = Facts({"rain": True, "age": 18})
    weather, age = WeatherRule(), AgeRule()

    DefaultRulesEngine().fire(Rules(weather, age), facts)

    assert age.executed is True
    assert weather.executed is True


def test_missing_fact_in_condition_prevents_firing():
    age = AgeRule()

    DefaultRulesEngine().fire(Rules(age), Facts())

    assert age.executed is False


def test_missing_fact_in_action_prevents_firing():
    needs_foo = NeedsFooRule()

    DefaultRulesEngine().fire(Rules(needs_foo), Facts())

    assert needs_foo.executed is False


def test_fact_type_mismatch_prevents_firing():
    age = AgeRule()

    DefaultRulesEngine().fire(Rules(age), Facts({"age": "foo"}))

    assert age.executed is False


def test_bool_fact_does_not_bind_to_int_parameter():
    age = AgeRule()

    DefaultRulesEngine().fire(Rules(age), Facts({"age": True}))

    assert age.executed is False


def test_untagged_parameter_binds_by_type():
    hot = Temperature(35.0)
    heat = HeatRule()

    DefaultRulesEngine().fire(Rules(heat), Facts({"today": hot, "city": "Rome"}))

    assert heat.seen is hot


def test_type_binding_with_several_candidates_does_not_fire():
    heat = HeatRule()

    DefaultRulesEngine().fire(Rules(heat), Facts({"a": Temperature(35.0), "b": Temperature(40.0)}))

    assert heat.seen is None


def test_type_binding_uses_explicit_type_tag():
    class Hot(Temperature):
        pass

    facts = Facts()
    facts.put("reading", Hot(45.0), type_=Temperature)
    heat = HeatRule()

    DefaultRulesEngine().fire(Rules(heat), facts)

    assert isinstance(heat.seen, Hot)
