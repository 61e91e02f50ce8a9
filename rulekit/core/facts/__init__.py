"""
Fact context: the name -> value mapping rules are evaluated against.
"""

from .facts import Fact, Facts
from .tags import tag_matches

__all__ = [
    "Fact",
    "Facts",
    "tag_matches",
]
