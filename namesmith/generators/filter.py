#!/usr/bin/env python3
"""
Name Filter
===========
Rejects names that match any "invalidating" regular expression.

Patterns are evaluated with ``re.search`` and are not anchored implicitly;
include ``^``/``$`` yourself where needed. Bad patterns fail when added,
never during generation.
"""

import re
from typing import List, Union

from .mutation import compile_pattern
from .name import Name


class NameFilter:
    """
    Ordered set of invalidating patterns.

    Usage:
        f = (NameFilter()
             .do_not_allow_ending("j", "p", "q", "w")
             .do_not_allow_pattern(r"(\\w)\\1\\1"))
        f.is_valid(Name(["ta", "rop"]))   # False
    """

    def __init__(self, ignore_case: bool = False):
        self.ignore_case = ignore_case
        self.patterns: List[str] = []
        self.syllable_patterns: List[str] = []
        self._compiled: List["re.Pattern"] = []
        self._compiled_syllable: List["re.Pattern"] = []

    @property
    def _flags(self) -> int:
        return re.IGNORECASE if self.ignore_case else 0

    def do_not_allow_pattern(self, *patterns: str) -> "NameFilter":
        """Reject names whose rendered text matches any of these regexes."""
        compiled = [compile_pattern(p, self._flags) for p in patterns]
        self.patterns.extend(patterns)
        self._compiled.extend(compiled)
        return self

    def do_not_allow_substring(self, *substrings: str) -> "NameFilter":
        return self.do_not_allow_pattern(*(re.escape(s) for s in substrings))

    def do_not_allow_start(self, *prefixes: str) -> "NameFilter":
        return self.do_not_allow_pattern(*('^' + re.escape(p) for p in prefixes))

    def do_not_allow_ending(self, *suffixes: str) -> "NameFilter":
        return self.do_not_allow_pattern(*(re.escape(s) + '$' for s in suffixes))

    def do_not_allow_syllable_pattern(self, *patterns: str) -> "NameFilter":
        """Reject names in which any single syllable matches one of these regexes."""
        compiled = [compile_pattern(p, self._flags) for p in patterns]
        self.syllable_patterns.extend(patterns)
        self._compiled_syllable.extend(compiled)
        return self

    def is_valid(self, name: Union[Name, str]) -> bool:
        """True iff no pattern matches. Plain strings skip syllable patterns."""
        return self.first_match(name) is None

    def first_match(self, name: Union[Name, str]):
        """Return the first invalidating pattern that matches, or None."""
        text = str(name)
        for pattern, regex in zip(self.patterns, self._compiled):
            if regex.search(text):
                return pattern
        if isinstance(name, Name):
            for pattern, regex in zip(self.syllable_patterns, self._compiled_syllable):
                if any(regex.search(s) for s in name.syllables):
                    return pattern
        return None

    def __len__(self) -> int:
        return len(self.patterns) + len(self.syllable_patterns)
