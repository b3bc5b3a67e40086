"""Caret-aware regex replacement."""

import logging
from typing import Optional

import regex

from smartreplace.models import CaretOptions, InputElementData, PatternSpec

logger = logging.getLogger(__name__)

DEFAULT_CARET_OPTIONS = CaretOptions()


def smart_replace(
    spec: PatternSpec,
    data: InputElementData,
    caret_options: Optional[CaretOptions] = None,
) -> InputElementData:
    """
    Apply ``spec`` to ``data.value`` and shift the caret to compensate.

    The caret moves left by ``matches * multiplier + add``. It is left alone
    when ``data`` has no caret or ``caret_options.ignore`` is set. When the
    pattern does not match at all, ``data`` is returned as is.

    Args:
        spec: Pattern and replacement template (absent template deletes)
        data: Current field value and caret
        caret_options: Caret shift policy, defaults to one char per match

    Returns:
        New InputElementData; ``data`` itself is never modified
    """
    if caret_options is None:
        caret_options = DEFAULT_CARET_OPTIONS

    if spec.is_global:
        match_count = sum(1 for _ in spec.pattern.finditer(data.value))
    else:
        match_count = 1 if spec.pattern.search(data.value) else 0

    if match_count == 0:
        return data

    value = spec.pattern.sub(
        spec.replace or "", data.value, count=0 if spec.is_global else 1
    )
    logger.debug(f"Replaced {match_count} match(es) of {spec.pattern.pattern!r}")

    caret_pos = data.caret_pos
    if caret_pos is not None and not caret_options.ignore:
        caret_change = match_count * caret_options.multiplier + caret_options.add
        caret_pos = min(max(caret_pos - caret_change, 0), len(value))

    return InputElementData(value=value, caret_pos=caret_pos)


def derive_inverse(pattern: regex.Pattern) -> PatternSpec:
    """
    Build the pattern that matches any single character outside the
    allow-list of an anchored character class.

    ``^[a-z0-9]+$`` becomes ``[^a-z0-9]``, compiled with the same flags and
    matched globally, so every invalid character is one match.

    Raises:
        ValueError: If the source does not start with an un-negated ``^[``
    """
    source = pattern.pattern
    if not source.startswith("^[") or source.startswith("^[^"):
        raise ValueError(
            f"Pattern {source!r} must start with an anchored character class '^['"
        )

    # A ']' right after '[' is a literal member, not the end of the class.
    i = 3 if source[2:3] == "]" else 2
    while i < len(source):
        char = source[i]
        if char == "\\":
            i += 2
            continue
        if char == "]":
            break
        i += 1
    else:
        raise ValueError(f"Pattern {source!r} has an unterminated character class")

    body = source[2:i]
    return PatternSpec(pattern=regex.compile(f"[^{body}]", pattern.flags), is_global=True)
