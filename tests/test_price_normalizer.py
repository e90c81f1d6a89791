# tests/test_price_normalizer.py

"""Tests for the locale-naive price parser."""

import unittest

from smartlist.engine.price_normalizer import parse_price


class TestParsePrice(unittest.TestCase):
    """parse_price behaviour."""

    def test_dollar_prefix(self) -> None:
        """Currency symbols are stripped."""
        self.assertEqual(parse_price("$12.50"), 12.50)

    def test_euro_with_space(self) -> None:
        """Whitespace is noise."""
        self.assertEqual(parse_price("€ 9.99"), 9.99)

    def test_comma_is_noise_not_decimal(self) -> None:
        """'12,50' parses as 1250, not 12.5."""
        self.assertEqual(parse_price("12,50"), 1250.0)

    def test_thousands_separator_dropped(self) -> None:
        """Thousands separators vanish."""
        self.assertEqual(parse_price("NZ$1,299.00"), 1299.0)

    def test_plain_integer(self) -> None:
        """A bare integer parses to a float."""
        result = parse_price("7")
        self.assertEqual(result, 7.0)
        self.assertIsInstance(result, float)

    def test_trailing_text(self) -> None:
        """Suffix text like 'ea' is ignored."""
        self.assertEqual(parse_price("$3.49 ea"), 3.49)

    def test_none_is_absent(self) -> None:
        """Missing text is absent."""
        self.assertIsNone(parse_price(None))

    def test_empty_is_absent(self) -> None:
        """Empty text is absent."""
        self.assertIsNone(parse_price(""))

    def test_no_digits_is_absent(self) -> None:
        """Text without digits is absent."""
        for text in ("N/A", "out of stock", "$", "   ", "—"):
            with self.subTest(text=text):
                self.assertIsNone(parse_price(text))

    def test_lone_decimal_point_is_absent(self) -> None:
        """A remainder of just '.' does not parse."""
        self.assertIsNone(parse_price("Price: ."))

    def test_multiple_decimal_points_absent(self) -> None:
        """'1.2.3' is malformed."""
        self.assertIsNone(parse_price("1.2.3"))

    def test_leading_decimal_point(self) -> None:
        """'.5' is a valid float."""
        self.assertEqual(parse_price("$.50"), 0.5)

    def test_overflow_is_absent(self) -> None:
        """Values that overflow to infinity are absent."""
        self.assertIsNone(parse_price("9" * 400))

    def test_negative_sign_is_noise(self) -> None:
        """Minus signs are stripped like any other symbol."""
        self.assertEqual(parse_price("-4.00"), 4.0)


if __name__ == "__main__":
    unittest.main()
