# rulekit/core/facts/tags.py
"""
Type tags: matching a fact's stored type tag against a requested type.
"""

from __future__ import annotations

import types
from typing import Any, Union, get_args, get_origin

_NONE_TYPE = type(None)
NUMBER_TYPES = (int, float, complex)


def is_union(annotation: Any) -> bool:
    origin = get_origin(annotation)
    return origin is Union or origin is types.UnionType


def tag_matches(tag: Any, annotation: Any) -> bool:
    """
    Check a fact type tag against a requested type.

    No numeric promotion (an int tag does not match float), bool never
    matches a number type, and None-valued facts never match.
    """
    if tag is _NONE_TYPE or not isinstance(tag, type):
        return False
    if annotation is Any or annotation is object:
        return True
    if is_union(annotation):
        return any(tag_matches(tag, member) for member in get_args(annotation))
    origin = get_origin(annotation)
    if origin is not None:
        annotation = origin
    if not isinstance(annotation, type):
        return False
    if issubclass(tag, bool) and annotation in NUMBER_TYPES:
        return False
    return issubclass(tag, annotation)
