"""Apply registered patterns by id."""

import logging
from typing import Optional

from smartreplace.matcher import Pattern
from smartreplace.models import InputElementData, ValidationResult
from smartreplace.registry import PatternRegistry, load_registry

logger = logging.getLogger(__name__)


class Engine:
    """
    Runs patterns from a PatternRegistry by their ``namespace/id``.

    Lets a host keep pattern ids in its own field configuration instead of
    importing pattern objects.
    """

    def __init__(self, registry: Optional[PatternRegistry] = None) -> None:
        """
        Initialize engine with pattern registry.

        Args:
            registry: PatternRegistry with loaded patterns. If None, the
                      default pattern files are loaded.
        """
        self.registry = registry if registry is not None else load_registry()

    def apply(self, ns_id: str, data: InputElementData) -> InputElementData:
        """
        Run the mutating operation of one pattern.

        Raises:
            ValueError: If pattern not found
            TypeError: If the pattern is read-only
        """
        return self._get(ns_id).apply(data)

    def normalize(self, data: InputElementData, ns_ids: list[str]) -> InputElementData:
        """Run several patterns in order, threading value and caret through."""
        for ns_id in ns_ids:
            data = self.apply(ns_id, data)
        return data

    def validate(self, text: str, ns_id: str) -> ValidationResult:
        """
        Check text against a pattern without modifying it.

        Raises:
            ValueError: If pattern not found
        """
        pattern = self._get(ns_id)
        return ValidationResult(text=text, ns_id=ns_id, is_valid=pattern.test(text))

    def _get(self, ns_id: str) -> Pattern:
        pattern = self.registry.get_pattern(ns_id)
        if pattern is None:
            raise ValueError(f"Pattern not found: {ns_id}")
        return pattern
