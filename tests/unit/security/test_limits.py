"""
Test cases for structure and size limits.

Tests focus on rejecting pathological input with a located error.
"""

import sys
import unittest

from jsonloc.core.engine import loads
from jsonloc.core.location import Location
from jsonloc.core.source import Source
from jsonloc.security.exceptions import ParseError, SecurityError
from jsonloc.security.limits import LimitValidator
from jsonloc.utils.config import ParseConfig, ParseLimits


class TestLimitValidator(unittest.TestCase):
    """Test LimitValidator functionality."""

    def setUp(self):
        """Set up test validator with custom limits."""
        self.limits = ParseLimits(
            max_nesting_depth=2,
            max_input_size=100,
            max_string_length=5,
            max_number_length=4,
        )
        self.validator = LimitValidator(self.limits)
        self.location = Location(Source.from_text("limits.json", "[[[]]]"), 2)

    def test_nesting_depth(self):
        self.validator.enter_structure(self.location)
        self.validator.enter_structure(self.location)
        with self.assertRaises(SecurityError) as cm:
            self.validator.enter_structure(self.location)
        self.assertEqual(
            str(cm.exception), "limits.json:1:3: nesting depth 3 exceeds limit 2"
        )

    def test_exit_structure_never_goes_negative(self):
        self.validator.exit_structure()
        self.assertEqual(self.validator.nesting_depth, 0)

    def test_input_size(self):
        self.validator.validate_input_size(100, self.location)
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_input_size(101, self.location)
        self.assertIn("input size 101 exceeds limit 100", str(cm.exception))

    def test_string_length(self):
        self.validator.validate_string_length(5, self.location)
        with self.assertRaises(SecurityError):
            self.validator.validate_string_length(6, self.location)

    def test_number_length(self):
        self.validator.validate_number_length(4, self.location)
        with self.assertRaises(SecurityError):
            self.validator.validate_number_length(5, self.location)

    def test_unlimited_sizes_by_default(self):
        validator = LimitValidator(ParseLimits())
        validator.validate_input_size(10 ** 12, self.location)
        validator.validate_string_length(10 ** 9, self.location)
        validator.validate_number_length(10 ** 6, self.location)

    def test_reset(self):
        self.validator.enter_structure(self.location)
        self.validator.reset()
        self.assertEqual(self.validator.nesting_depth, 0)


class TestLimitsDuringParsing(unittest.TestCase):
    """Test that the parser enforces configured limits."""

    def _config(self, **limits):
        return ParseConfig(limits=ParseLimits(**limits))

    def test_nesting_depth_error_points_at_opening_bracket(self):
        config = self._config(max_nesting_depth=3)
        self.assertEqual(loads("[[[1]]]", config=config), [[[1]]])
        with self.assertRaises(SecurityError) as cm:
            loads('[[{"a": [1]}]]', config=config)
        self.assertIsInstance(cm.exception, ParseError)
        self.assertEqual(cm.exception.location.char_index, 8)

    def test_default_depth_limit_stops_deep_input(self):
        depth = ParseLimits().max_nesting_depth
        self.assertIsInstance(loads("[" * depth + "]" * depth), list)
        with self.assertRaises(SecurityError):
            loads("[" * (depth + 1) + "]" * (depth + 1))

    def test_stack_exhaustion_below_configured_limit(self):
        depth = sys.getrecursionlimit() + 100
        config = self._config(max_nesting_depth=depth * 10)
        with self.assertRaises(SecurityError) as cm:
            loads("[" * depth + "]" * depth, config=config, file_name="deep.json")
        self.assertIn("exceeds the interpreter recursion limit", str(cm.exception))
        self.assertTrue(str(cm.exception).startswith("deep.json:1:"))

    def test_sibling_structures_do_not_accumulate_depth(self):
        config = self._config(max_nesting_depth=2)
        self.assertEqual(loads("[[], [], {}, [1]]", config=config), [[], [], {}, [1]])

    def test_string_length_limit(self):
        config = self._config(max_string_length=3)
        self.assertEqual(loads('["abc"]', config=config), ["abc"])
        with self.assertRaises(SecurityError) as cm:
            loads('["abc", "abcd"]', config=config)
        self.assertEqual(cm.exception.location.char_index, 8)

    def test_number_length_limit(self):
        config = self._config(max_number_length=3)
        with self.assertRaises(SecurityError) as cm:
            loads("[1, -1234]", config=config)
        self.assertEqual(cm.exception.location.char_index, 4)

    def test_input_size_limit(self):
        config = self._config(max_input_size=4)
        self.assertEqual(loads("[12]", config=config), [12])
        with self.assertRaises(SecurityError):
            loads("[123]", config=config)


if __name__ == '__main__':
    unittest.main()
