#!/usr/bin/env python3
"""Name model: an ordered, mutable list of syllables."""

from dataclasses import dataclass, field
from typing import Iterator, List


@dataclass
class Name:
    """
    A generated name.

    Equality compares the syllable sequence. ``str(name)`` is the plain
    concatenation of the syllables; use ``display()`` for a capitalized form.
    """
    syllables: List[str] = field(default_factory=list)

    def render(self) -> str:
        return ''.join(self.syllables)

    def display(self) -> str:
        text = self.render()
        return text[:1].upper() + text[1:]

    def copy(self) -> "Name":
        return Name(list(self.syllables))

    def __str__(self) -> str:
        return self.render()

    def __len__(self) -> int:
        return len(self.syllables)

    def __iter__(self) -> Iterator[str]:
        return iter(self.syllables)

    def __getitem__(self, index: int) -> str:
        return self.syllables[index]
