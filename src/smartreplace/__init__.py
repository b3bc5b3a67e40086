"""
smart-replace: regex-driven input normalization with caret correction.

This package provides preconfigured patterns for cleaning up text-input
values (numbers, hex colors, base-N strings) and a replace primitive that
keeps the caret where the user expects it after the text changes.
"""

__version__ = "0.1.0"

from smartreplace.engine import Engine
from smartreplace.matcher import Pattern
from smartreplace.models import (
    BaseNumber,
    Capability,
    CaretOptions,
    InputElementData,
    PatternSpec,
    ValidationResult,
)
from smartreplace.registry import PatternRegistry, base, load_registry, patterns
from smartreplace.replace import smart_replace

__all__ = [
    "Engine",
    "Pattern",
    "BaseNumber",
    "Capability",
    "CaretOptions",
    "InputElementData",
    "PatternSpec",
    "ValidationResult",
    "PatternRegistry",
    "base",
    "load_registry",
    "patterns",
    "smart_replace",
]
