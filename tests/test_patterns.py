"""Tests for the default pattern table."""

import pytest

from smartreplace import BaseNumber, Capability, InputElementData, base, load_registry, patterns


@pytest.fixture
def registry():
    """Load default registry."""
    return load_registry()


class TestPatternLoading:
    """Tests for pattern loading."""

    def test_registry_loads_patterns(self, registry):
        """Test that registry loads patterns successfully."""
        assert len(registry) == 12
        assert set(registry.namespaces) == {"string", "number", "hex"}

    def test_number_patterns_loaded(self, registry):
        """Test that number patterns are loaded."""
        pattern_ids = {p.id for p in registry.get_namespace_patterns("number")}

        assert pattern_ids == {
            "any_minus",
            "minus_inside_number",
            "leading_zeros",
            "is_valid_number",
            "has_invalid_chars",
            "comma_to_dot",
            "dot_to_comma",
            "multiple_decimal_separators",
            "fix_leading_decimal_point",
        }

    def test_hex_patterns_loaded(self, registry):
        """Test that hex patterns are loaded."""
        pattern_ids = {p.id for p in registry.get_namespace_patterns("hex")}
        assert pattern_ids == {"multiple_hash_signs", "has_invalid_chars"}

    def test_lazy_table_reuses_registry(self):
        """Test attribute access returns the same objects each time."""
        assert patterns.number.comma_to_dot is patterns.number.comma_to_dot
        assert patterns.string.base(16) is base(16)

    def test_unknown_attribute(self):
        """Test unknown pattern names raise AttributeError."""
        with pytest.raises(AttributeError):
            patterns.number.no_such_pattern


class TestStringPatterns:
    """Tests for string patterns."""

    def test_date(self):
        """Test ISO-8601 timestamp pattern."""
        date = patterns.string.date

        assert date.capability == Capability.MATCH
        assert date.test("2022-08-26T20:52:42.905Z")
        assert date.match("2022-08-26T20:52:42.905Z").group(8) == "Z"
        assert not date.test("2022-08-26T20:52:42Z")
        assert not date.test("2022-08-26T20:52:42.905Z\n")

    def test_base58_excludes_ambiguous(self):
        """Test 0, O, I and l are not Base58 characters."""
        result = base(58).remove_invalid("0OIl")
        assert result.value == ""

    def test_base58_case_sensitive(self):
        """Test Base58 keeps case significant."""
        assert base(58).test("abcXYZ")
        assert base(58).remove_invalid("Il1").value == "1"

    def test_base64(self):
        """Test padding is not part of the Base64 allow-list."""
        result = base(64).remove_invalid("A+/9==", caret_pos=6)

        assert result.value == "A+/9"
        assert result.caret_pos == 4

    def test_base32_drops_ambiguous_digits(self):
        """Test 0, 1, 8 and 9 are removed for Base32."""
        assert base(32).remove_invalid("AB01892z").value == "AB2z"

    def test_base45_symbols(self):
        """Test Base45 keeps its punctuation."""
        assert base(45).remove_invalid("A $%*+-./:=").value == "A $%*+-./:"

    def test_small_base_uses_alphabet_prefix(self):
        """Test bases below 32 allow the first n-1 alphabet characters."""
        assert base(4).remove_invalid("abcdABCD").value == "abcABC"
        assert base(2).remove_invalid("ab").value == "a"

    def test_base36(self):
        """Test base 36 allows the first 35 alphabet characters."""
        assert base(36).remove_invalid("z08").value == "z08"
        assert base(36).remove_invalid("9").value == ""

    def test_multiline(self):
        """Test validation and cleanup across several lines."""
        assert base(16).test("ab\ncd")
        assert not base(16).test("x!\nz?")
        assert base(16).remove_invalid("ab!\ncd?").value == "abcd"

    def test_every_base_number(self):
        """Test every supported base builds a remove_invalid pattern."""
        for n in BaseNumber:
            pattern = base(n)
            assert pattern.capability == Capability.REMOVE_INVALID
            assert pattern.pattern.startswith("^[")
            assert pattern.pattern.endswith("]+$")

    def test_clean_input_is_noop(self):
        """Test remove_invalid leaves valid input and caret alone."""
        assert base(64).remove_invalid("Ab+/", 2) == InputElementData("Ab+/", 2)
        assert base(58).remove_invalid("3xY9", 1) == InputElementData("3xY9", 1)
        assert base(16).remove_invalid("abc", 0) == InputElementData("abc", 0)

    def test_patterns_are_hashable(self):
        """Test built patterns can be used as set members and dict keys."""
        assert len({base(16), base(16), base(64)}) == 2
        assert {patterns.number.any_minus: 1}[patterns.number.any_minus] == 1

    def test_unsupported_base(self):
        """Test unsupported bases are rejected."""
        with pytest.raises(ValueError):
            base(7)


class TestNumberPatterns:
    """Tests for number patterns."""

    def test_any_minus(self):
        assert patterns.number.any_minus.remove("-1-2", 4) == InputElementData("12", 2)

    def test_minus_inside_number(self):
        result = patterns.number.minus_inside_number.remove("-1-2", 4)
        assert result == InputElementData("-12", 3)

    def test_leading_zeros(self):
        """Test leading zeros are dropped but the sign is kept."""
        leading_zeros = patterns.number.leading_zeros

        assert leading_zeros.remove("-007").value == "-7"
        assert leading_zeros.remove("0").value == "0"
        assert leading_zeros.remove("0.5").value == "0.5"

    def test_leading_zeros_caret(self):
        """Test the caret moves by one per removed zero."""
        leading_zeros = patterns.number.leading_zeros

        assert leading_zeros.remove("-007.5", 5) == InputElementData("-7.5", 3)
        assert leading_zeros.remove("0003", 3) == InputElementData("3", 0)
        assert leading_zeros.remove("00.25", 4) == InputElementData("0.25", 3)

    def test_is_valid_number(self):
        """Test validator gives stable answers and leaves input alone."""
        text = "12.5"
        is_valid_number = patterns.number.is_valid_number

        assert is_valid_number.test(text) is True
        assert is_valid_number.test(text) is True
        assert text == "12.5"
        assert not is_valid_number.test("1.2.3")
        assert not is_valid_number.test("12\n")
        with pytest.raises(TypeError):
            is_valid_number.remove(text)

    def test_has_invalid_chars_idempotent(self):
        """Test stripping invalid chars twice equals stripping once."""
        has_invalid_chars = patterns.number.has_invalid_chars
        for text in ["1a2b", "x-1,5y", "", "€12.00", "12"]:
            once = has_invalid_chars.remove(text, len(text))
            twice = has_invalid_chars.remove(once.value, once.caret_pos)
            assert twice == once

    def test_comma_to_dot_keeps_caret(self):
        """Test separator conversion never moves the caret."""
        result = patterns.number.comma_to_dot.apply_to("3,14", 2)

        assert result == InputElementData("3.14", 2)

    def test_dot_to_comma_keeps_caret(self):
        result = patterns.number.dot_to_comma.apply_to("3.14", 2)
        assert result == InputElementData("3,14", 2)

    def test_comma_dot_round_trip(self):
        """Test dot_to_comma undoes comma_to_dot."""
        dotted = patterns.number.comma_to_dot.apply_to("3,14")
        assert patterns.number.dot_to_comma.apply_to(dotted.value).value == "3,14"

    def test_multiple_decimal_separators(self):
        """Test only the first decimal point survives."""
        result = patterns.number.multiple_decimal_separators.remove("1.2.3.4", 7)

        assert result == InputElementData("1.234", 5)

    def test_fix_leading_decimal_point(self):
        """Test a zero is inserted and the caret follows it."""
        result = patterns.number.fix_leading_decimal_point.apply_to(".5", 1)

        assert result == InputElementData("0.5", 2)

    def test_fix_leading_decimal_point_caret_at_start(self):
        """Test a caret in front of the separator stays in front of it."""
        result = patterns.number.fix_leading_decimal_point.apply_to(".5", 0)

        assert result == InputElementData("0.5", 1)

    def test_no_match_is_noop(self):
        """Test every number mutator leaves clean input alone."""
        for pattern in load_registry().get_namespace_patterns("number"):
            if pattern.capability == Capability.MATCH:
                continue
            assert pattern.apply(InputElementData("12", 1)) == InputElementData("12", 1)


class TestHexPatterns:
    """Tests for hex patterns."""

    def test_multiple_hash_signs(self):
        result = patterns.hex.multiple_hash_signs.remove("##ff#0", 6)
        assert result == InputElementData("#ff0", 4)

    def test_has_invalid_chars(self):
        """Test non-hex characters are stripped case-insensitively."""
        result = patterns.hex.has_invalid_chars.remove("#GgAa09", 7)

        assert result == InputElementData("#Aa09", 5)

    def test_has_invalid_chars_idempotent(self):
        has_invalid_chars = patterns.hex.has_invalid_chars
        once = has_invalid_chars.remove("#x1y2z3")
        assert has_invalid_chars.remove(once.value) == once

    def test_clean_input_is_noop(self):
        """Test both hex mutators leave a clean color alone."""
        for pattern in load_registry().get_namespace_patterns("hex"):
            assert pattern.apply(InputElementData("#A1b2C3", 4)) == InputElementData("#A1b2C3", 4)


class TestPatternExamples:
    """Tests that validate pattern examples."""

    def test_all_patterns_have_valid_examples(self, registry):
        """Test that all pattern examples are valid."""
        errors = []

        for pattern in registry.get_all_patterns():
            if not pattern.examples:
                continue

            for example in pattern.examples.match:
                if not pattern.test(example):
                    errors.append(f"{pattern.full_id}: should match but doesn't: '{example}'")

            for example in pattern.examples.nomatch:
                if pattern.test(example):
                    errors.append(f"{pattern.full_id}: should NOT match but does: '{example}'")

            for case in pattern.examples.cases:
                result = pattern.apply(InputElementData(case.value, case.caret_pos))
                if result.value != case.expected:
                    errors.append(f"{pattern.full_id}: '{case.value}' gave '{result.value}'")

        if errors:
            pytest.fail("\n".join(errors))

    def test_patterns_have_required_fields(self, registry):
        """Test that all patterns have required fields."""
        for pattern in registry.get_all_patterns():
            assert pattern.id
            assert pattern.namespace
            assert pattern.capability
            assert pattern.pattern
            assert pattern.description
