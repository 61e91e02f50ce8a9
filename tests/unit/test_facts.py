# tests/unit/test_facts.py
from __future__ import annotations

from typing import Optional

import pytest

from rulekit import Fact, Facts
from rulekit.core.facts import tag_matches
from rulekit.core.rules import is_assignable


def test_put_overwrites_and_returns_previous():
    facts = Facts()

    assert facts.put("age", 17) is None
    assert facts.put("age", 18) == 17
    assert facts.get("age") == 18
    assert len(facts) == 1


def test_names_are_case_sensitive():
    facts = Facts({"Age": 1, "age": 2})

    assert facts.get("Age") == 1
    assert facts.get("age") == 2


def test_none_values_are_kept():
    facts = Facts({"nothing": None})

    assert "nothing" in facts
    assert facts.get_fact("nothing").value is None


def test_remove_by_name_and_by_fact():
    facts = Facts({"a": 1, "b": 2})

    assert facts.remove("a") == 1
    assert facts.remove(Fact("b", 2)) == 2
    assert facts.remove("missing") is None
    assert len(facts) == 0


def test_invalid_name():
    facts = Facts()

    with pytest.raises(ValueError):
        facts.put("", 1)
    with pytest.raises(ValueError):
        facts.put(None, 1)


def test_type_tags():
    facts = Facts()
    facts.put("count", 3)
    facts.put("number", 3, type_=float)
    facts.put("flag", True)

    assert facts.get_fact("count").type is int
    assert facts.get_fact("number").type is float
    assert [f.name for f in facts.find_by_type(int)] == ["count"]
    assert [f.name for f in facts.find_by_type(float)] == ["number"]
    assert [f.name for f in facts.find_by_type(bool)] == ["flag"]


def test_iteration_and_as_dict():
    facts = Facts({"a": 1, "b": 2})

    assert [f.name for f in facts] == ["a", "b"]
    assert facts.as_dict() == {"a": 1, "b": 2}

    facts.clear()
    assert facts.as_dict() == {}


@pytest.mark.parametrize(
    "value, annotation, expected",
    [
        (18, int, True),
        ("foo", int, False),
        (True, int, False),
        (True, bool, True),
        (3, float, True),
        (None, int, False),
        (None, Optional[int], True),
        ([1, 2], list[int], True),
        ("x", int | str, True),
    ],
)
def test_is_assignable(value, annotation, expected):
    assert is_assignable(value, annotation) is expected


@pytest.mark.parametrize(
    "tag, requested, expected",
    [
        (int, int, True),
        (int, float, False),
        (bool, int, False),
        (bool, bool, True),
        (type(None), Optional[int], False),
        (str, int | str, True),
        (list, list[int], True),
    ],
)
def test_tag_matches(tag, requested, expected):
    assert tag_matches(tag, requested) is expected
