#!/usr/bin/env python3
"""
Error Taxonomy
==============
Exceptions raised by the generation engine, plus a result type for callers
that prefer not to use exceptions for control flow.

Configuration errors (bad counts, bad patterns, bad probabilities) are fatal:
fix the configuration and start again. ``RetriesExhausted`` means the filter
rejected everything the generator produced; relax the filter or widen the
pools.
"""

from dataclasses import dataclass
from typing import Optional, Any


class NamesmithError(Exception):
    """Base class for every namesmith failure."""


class EmptyPool(NamesmithError):
    """A pool was sampled but has no graphemes or zero total weight."""

    def __init__(self, category: Any = None, message: str = None):
        self.category = category
        if message is None:
            label = getattr(category, 'label', category)
            message = f"No {label} graphemes available to sample." if label else "Pool is empty."
        super().__init__(message)


class DegenerateOutput(NamesmithError):
    """A syllable came out as an empty string and empty output is disallowed."""


class InvalidConfiguration(NamesmithError, ValueError):
    """A configuration value is outside its domain."""


class InvalidSyllableCount(NamesmithError, ValueError):
    """An explicit syllable count was less than one."""


class RetriesExhausted(NamesmithError):
    """The filter rejected every attempt up to the retry ceiling."""

    def __init__(self, attempts: int, message: str = None):
        self.attempts = attempts
        if message is None:
            message = (
                f"Ran out of attempts after {attempts} tries. The generator may be "
                f"configured so that it cannot produce a name its filter accepts."
            )
        super().__init__(message)


class IndexOutOfRange(NamesmithError, IndexError):
    """A mutation step referenced a syllable that does not exist."""


class InvalidPattern(NamesmithError, ValueError):
    """A filter or condition pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str = ""):
        self.pattern = pattern
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid pattern {pattern!r}{detail}")


class InvalidOperation(NamesmithError):
    """A mutation step would leave a name in an unsupported state."""


CONFIGURATION_ERRORS = (
    EmptyPool,
    DegenerateOutput,
    InvalidConfiguration,
    InvalidSyllableCount,
    InvalidPattern,
)


@dataclass
class GenerationResult:
    """Outcome of a generation call: either a value or the error that stopped it."""
    value: Optional[Any] = None
    error: Optional[NamesmithError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def name(self) -> Any:
        return self.value

    @property
    def is_configuration_error(self) -> bool:
        return isinstance(self.error, CONFIGURATION_ERRORS)

    @property
    def is_exhausted(self) -> bool:
        return isinstance(self.error, RetriesExhausted)

    def unwrap(self) -> Any:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value
