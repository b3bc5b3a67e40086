"""Pattern registry for loading and managing input patterns."""

import logging
from functools import cached_property, lru_cache
from pathlib import Path
from typing import Any, Optional

import jsonschema
import regex
import yaml

from smartreplace.matcher import Pattern
from smartreplace.models import (
    BaseNumber,
    Capability,
    CaretOptions,
    Case,
    Examples,
    InputElementData,
)

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).parent
DEFAULT_PATTERN_FILES = ["string.yml", "number.yml", "hex.yml"]

ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

FLAG_NAMES = {
    "IGNORECASE": regex.IGNORECASE,
    "MULTILINE": regex.MULTILINE,
    "DOTALL": regex.DOTALL,
    "UNICODE": regex.UNICODE,
    "VERBOSE": regex.VERBOSE,
}


class PatternRegistry:
    """Registry for compiled patterns."""

    def __init__(self) -> None:
        """Initialize empty pattern registry."""
        self.patterns: dict[str, Pattern] = {}  # full_id -> Pattern
        self.namespaces: dict[str, list[Pattern]] = {}  # namespace -> [Pattern]
        self._version: int = 0

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern to the registry."""
        full_id = pattern.full_id
        if full_id in self.patterns:
            logger.warning(f"Pattern {full_id} already exists, overwriting")
            old = self.patterns[full_id]
            self.namespaces[old.namespace] = [
                p for p in self.namespaces[old.namespace] if p.full_id != full_id
            ]

        self.patterns[full_id] = pattern
        self.namespaces.setdefault(pattern.namespace, []).append(pattern)

        self._version += 1

    def get_pattern(self, ns_id: str) -> Optional[Pattern]:
        """Get pattern by full namespace/id."""
        return self.patterns.get(ns_id)

    def get_namespace_patterns(self, namespace: str) -> list[Pattern]:
        """Get all patterns for a namespace."""
        return self.namespaces.get(namespace, [])

    def get_all_patterns(self) -> list[Pattern]:
        """Get all patterns in registry."""
        return list(self.patterns.values())

    @property
    def version(self) -> int:
        """Get current registry version (increments on changes)."""
        return self._version

    def __len__(self) -> int:
        """Return number of patterns."""
        return len(self.patterns)

    def __repr__(self) -> str:
        """String representation."""
        return f"PatternRegistry(patterns={len(self.patterns)}, namespaces={list(self.namespaces.keys())})"


def load_registry(
    paths: Optional[list[str]] = None,
    validate_schema: bool = True,
    validate_examples: bool = True,
) -> PatternRegistry:
    """
    Load patterns from YAML files into registry.

    Args:
        paths: List of file paths to load. If None, loads default patterns.
        validate_schema: Whether to validate against JSON schema
        validate_examples: Whether to validate examples against patterns

    Returns:
        PatternRegistry with loaded patterns

    Raises:
        ValueError: If pattern validation fails
    """
    registry = PatternRegistry()

    if paths is None:
        paths = [str(PACKAGE_DIR / "patterns" / name) for name in DEFAULT_PATTERN_FILES]

    for path_str in paths:
        path = Path(path_str)
        if not path.exists():
            logger.warning(f"Pattern file not found: {path}")
            continue

        logger.info(f"Loading patterns from {path}")
        data = _load_yaml_file(path)

        if validate_schema:
            _validate_schema(data)

        for pattern in _parse_pattern_file(data):
            if validate_examples and pattern.examples:
                _validate_examples(pattern)
            registry.add_pattern(pattern)

    logger.info(f"Loaded {len(registry)} patterns from {len(registry.namespaces)} namespaces")
    return registry


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _validate_schema(data: dict[str, Any]) -> None:
    """Validate pattern data against JSON schema."""
    schema_path = PACKAGE_DIR / "schemas" / "pattern-schema.json"

    with open(schema_path, "r", encoding="utf-8") as f:
        schema = yaml.safe_load(f)

    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValueError(f"Pattern schema validation failed: {e.message}") from e


def _parse_pattern_file(data: dict[str, Any]) -> list[Pattern]:
    """Parse pattern file data into Pattern objects."""
    namespace = data["namespace"]
    return [_compile_pattern(namespace, p) for p in data.get("patterns", [])]


def _compile_pattern(namespace: str, data: dict[str, Any]) -> Pattern:
    """Compile a single pattern definition."""
    pattern_id = data["id"]
    flag_names = data.get("flags", [])

    flags = 0
    for flag_name in flag_names:
        if flag_name in FLAG_NAMES:
            flags |= FLAG_NAMES[flag_name]

    caret_data = data.get("caret", {})
    caret_options = CaretOptions(
        add=caret_data.get("add", 0),
        multiplier=caret_data.get("multiplier", 1),
        ignore=caret_data.get("ignore", False),
    )

    examples = None
    if "examples" in data:
        examples_data = data["examples"]
        examples = Examples(
            match=tuple(examples_data.get("match", [])),
            nomatch=tuple(examples_data.get("nomatch", [])),
            cases=tuple(
                Case(
                    value=c["value"],
                    expected=c["expected"],
                    caret_pos=c.get("caret"),
                    expected_caret=c.get("expected_caret"),
                )
                for c in examples_data.get("cases", [])
            ),
        )

    return Pattern.create(
        id=pattern_id,
        namespace=namespace,
        capability=Capability(data.get("kind", "match")),
        pattern=data["pattern"],
        replace=data.get("replace"),
        caret_options=caret_options,
        flags=flags,
        is_global="GLOBAL" in flag_names,
        description=data.get("description", ""),
        flag_names=tuple(flag_names),
        examples=examples,
    )


def _validate_examples(pattern: Pattern) -> None:
    """Validate pattern examples and cases against expectations."""
    if not pattern.examples:
        return

    errors = []

    for example in pattern.examples.match:
        if not pattern.test(example):
            errors.append(f"Example should match but doesn't: '{example}'")

    for example in pattern.examples.nomatch:
        if pattern.test(example):
            errors.append(f"Example should NOT match but does: '{example}'")

    for case in pattern.examples.cases:
        result = pattern.apply(InputElementData(case.value, case.caret_pos))
        if result.value != case.expected:
            errors.append(
                f"Case '{case.value}' should give '{case.expected}' but gives '{result.value}'"
            )
        elif case.expected_caret is not None and result.caret_pos != case.expected_caret:
            errors.append(
                f"Case '{case.value}' should leave caret at {case.expected_caret} "
                f"but leaves it at {result.caret_pos}"
            )

    if errors:
        error_msg = f"Pattern {pattern.full_id} example validation failed:\n" + "\n".join(
            errors
        )
        raise ValueError(error_msg)

    logger.debug(f"Pattern {pattern.full_id} examples validated successfully")


@lru_cache(maxsize=None)
def base(n: int) -> Pattern:
    """
    Return a pattern that strips characters outside a base-N alphabet.

    Raises:
        ValueError: If ``n`` is not a supported BaseNumber
    """
    n = BaseNumber(n)

    if n == BaseNumber.BASE32:
        charset = "".join(c for c in ALPHABET if c not in "0189")
        flags = regex.IGNORECASE | regex.MULTILINE
    elif n == BaseNumber.BASE45:
        charset = ALPHABET + regex.escape(" $%*+-./:")
        flags = regex.IGNORECASE
    elif n == BaseNumber.BASE58:
        charset = BASE58_ALPHABET
        flags = regex.MULTILINE
    elif n < 32 or n == BaseNumber.BASE36:
        charset = ALPHABET[: n - 1]
        flags = regex.IGNORECASE | regex.MULTILINE
    else:
        charset = ALPHABET + regex.escape("+/")
        flags = regex.IGNORECASE | regex.MULTILINE

    return Pattern.create(
        id=f"base{n.value}",
        namespace="string",
        capability=Capability.REMOVE_INVALID,
        pattern=f"^[{charset}]+$",
        flags=flags,
        description=f"Base{n.value} alphabet",
    )


class PatternNamespace:
    """Attribute access to the patterns of one namespace."""

    def __init__(self, registry: PatternRegistry, namespace: str) -> None:
        self._registry = registry
        self._namespace = namespace

    def __getattr__(self, name: str) -> Pattern:
        if name.startswith("_"):
            raise AttributeError(name)
        pattern = self._registry.get_pattern(f"{self._namespace}/{name}")
        if pattern is None:
            raise AttributeError(f"No pattern '{name}' in namespace '{self._namespace}'")
        return pattern

    def __dir__(self) -> list[str]:
        return [p.id for p in self._registry.get_namespace_patterns(self._namespace)]

    def __repr__(self) -> str:
        return f"PatternNamespace({self._namespace!r}, patterns={self.__dir__()})"


class StringNamespace(PatternNamespace):
    """String patterns plus the base-N alphabet builder."""

    def base(self, n: int) -> Pattern:
        return base(n)


class PatternTable:
    """Default pattern table, loaded on first use."""

    @cached_property
    def registry(self) -> PatternRegistry:
        return load_registry()

    @cached_property
    def string(self) -> StringNamespace:
        return StringNamespace(self.registry, "string")

    @cached_property
    def number(self) -> PatternNamespace:
        return PatternNamespace(self.registry, "number")

    @cached_property
    def hex(self) -> PatternNamespace:
        return PatternNamespace(self.registry, "hex")


patterns = PatternTable()
