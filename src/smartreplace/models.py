"""Data models for smart-replace."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import regex


class Capability(str, Enum):
    """Which mutating operation a pattern enables."""

    MATCH = "match"
    REMOVE = "remove"
    APPLY = "apply"
    REMOVE_INVALID = "remove_invalid"


class BaseNumber(int, Enum):
    """Supported base-N alphabets."""

    BASE2 = 2
    BASE3 = 3
    BASE4 = 4
    BASE6 = 6
    BASE8 = 8
    BASE10 = 10
    BASE12 = 12
    BASE16 = 16
    BASE20 = 20
    BASE32 = 32
    BASE36 = 36
    BASE45 = 45
    BASE58 = 58
    BASE64 = 64


@dataclass(frozen=True)
class InputElementData:
    """Current text of an input field and, optionally, its caret offset."""

    value: str
    caret_pos: Optional[int] = None


@dataclass(frozen=True)
class CaretOptions:
    """How a match count translates into a caret shift."""

    add: int = 0
    multiplier: int = 1
    ignore: bool = False


@dataclass(frozen=True)
class PatternSpec:
    """Regex plus replacement template.

    ``is_global`` stands in for the global match flag: when set every match
    is counted and replaced, otherwise only the first one.
    """

    pattern: regex.Pattern
    replace: Optional[str] = None
    is_global: bool = True

    def __hash__(self) -> int:
        return hash((self.pattern.pattern, self.pattern.flags, self.replace, self.is_global))


@dataclass(frozen=True)
class Case:
    """Expected outcome of a mutating pattern on one input."""

    value: str
    expected: str
    caret_pos: Optional[int] = None
    expected_caret: Optional[int] = None


@dataclass(frozen=True)
class Examples:
    """Pattern validation examples."""

    match: tuple[str, ...] = ()
    nomatch: tuple[str, ...] = ()
    cases: tuple[Case, ...] = ()


@dataclass
class ValidationResult:
    """Result from validate operation."""

    text: str
    ns_id: str
    is_valid: bool
