"""Preconfigured pattern objects."""

from dataclasses import dataclass, field
from typing import Optional

import regex

from smartreplace.models import (
    Capability,
    CaretOptions,
    Examples,
    InputElementData,
    PatternSpec,
)
from smartreplace.replace import derive_inverse, smart_replace


@dataclass(frozen=True)
class Pattern:
    """
    A fixed regex, replacement and caret policy.

    Every pattern can ``test`` and ``match``. The capability decides which
    single mutating operation is available: ``remove``, ``apply_to`` or
    ``remove_invalid``.
    """

    id: str
    namespace: str
    capability: Capability
    spec: PatternSpec
    caret_options: CaretOptions = field(default_factory=CaretOptions)
    inverse: Optional[PatternSpec] = None
    description: str = ""
    flags: tuple[str, ...] = ()
    examples: Optional[Examples] = None

    def __post_init__(self) -> None:
        if self.capability == Capability.REMOVE_INVALID and self.inverse is None:
            object.__setattr__(self, "inverse", derive_inverse(self.spec.pattern))

    @classmethod
    def create(
        cls,
        id: str,
        namespace: str,
        capability: Capability,
        pattern: str,
        replace: Optional[str] = None,
        caret_options: Optional[CaretOptions] = None,
        flags: int = 0,
        is_global: bool = True,
        description: str = "",
        flag_names: tuple[str, ...] = (),
        examples: Optional[Examples] = None,
    ) -> "Pattern":
        """Compile ``pattern`` and build a Pattern around it."""
        try:
            compiled = regex.compile(pattern, flags)
        except regex.error as e:
            raise ValueError(f"Failed to compile pattern {namespace}/{id}: {e}") from e

        return cls(
            id=id,
            namespace=namespace,
            capability=capability,
            spec=PatternSpec(pattern=compiled, replace=replace, is_global=is_global),
            caret_options=caret_options or CaretOptions(),
            description=description,
            flags=flag_names,
            examples=examples,
        )

    @property
    def full_id(self) -> str:
        """Return full namespace/id identifier."""
        return f"{self.namespace}/{self.id}"

    @property
    def pattern(self) -> str:
        """Regex source."""
        return self.spec.pattern.pattern

    @property
    def compiled(self) -> regex.Pattern:
        return self.spec.pattern

    def test(self, text: str) -> bool:
        """Return True if the pattern matches anywhere in ``text``."""
        return self.spec.pattern.search(text) is not None

    def match(self, text: str) -> Optional[regex.Match]:
        """Return the first match in ``text``, if any."""
        return self.spec.pattern.search(text)

    def remove(self, value: str, caret_pos: Optional[int] = None) -> InputElementData:
        """Delete (or replace) matches in ``value``."""
        self._require(Capability.REMOVE)
        return smart_replace(
            self.spec, InputElementData(value, caret_pos), self.caret_options
        )

    def apply_to(self, value: str, caret_pos: Optional[int] = None) -> InputElementData:
        """Transform ``value`` with the replacement template."""
        self._require(Capability.APPLY)
        return smart_replace(
            self.spec, InputElementData(value, caret_pos), self.caret_options
        )

    def remove_invalid(
        self, value: str, caret_pos: Optional[int] = None
    ) -> InputElementData:
        """Delete every character outside the pattern's allow-list."""
        self._require(Capability.REMOVE_INVALID)
        assert self.inverse is not None
        return smart_replace(
            self.inverse, InputElementData(value, caret_pos), self.caret_options
        )

    def apply(self, data: InputElementData) -> InputElementData:
        """Run whichever mutating operation this pattern enables."""
        if self.capability == Capability.REMOVE:
            return self.remove(data.value, data.caret_pos)
        if self.capability == Capability.APPLY:
            return self.apply_to(data.value, data.caret_pos)
        if self.capability == Capability.REMOVE_INVALID:
            return self.remove_invalid(data.value, data.caret_pos)
        raise TypeError(f"Pattern {self.full_id} is read-only")

    def _require(self, capability: Capability) -> None:
        if self.capability != capability:
            raise TypeError(
                f"Pattern {self.full_id} does not support {capability.value} "
                f"(capability: {self.capability.value})"
            )
