"""Unit tests for gatehouse.core.durations: duration grammar and refresh lifetime fallback."""

import unittest
from datetime import timedelta

from gatehouse.core.durations import (
    DEFAULT_REFRESH_TTL,
    DurationParseError,
    parse_duration,
    refresh_ttl,
)


class TestParseDuration(unittest.TestCase):
    """parse_duration accepts <integer>[s|m|h|d]; bare integers are seconds."""

    def test_units(self) -> None:
        self.assertEqual(parse_duration("45s"), timedelta(seconds=45))
        self.assertEqual(parse_duration("15m"), timedelta(minutes=15))
        self.assertEqual(parse_duration("2h"), timedelta(hours=2))
        self.assertEqual(parse_duration("30d"), timedelta(days=30))

    def test_bare_integer_is_seconds(self) -> None:
        self.assertEqual(parse_duration("3600"), timedelta(hours=1))

    def test_surrounding_whitespace_ignored(self) -> None:
        self.assertEqual(parse_duration("  10m "), timedelta(minutes=10))

    def test_zero_is_allowed(self) -> None:
        self.assertEqual(parse_duration("0"), timedelta(0))

    def test_invalid_expressions(self) -> None:
        for expr in ("", "m", "15 m", "1.5h", "-5m", "10w", "15min", "abc"):
            with self.subTest(expr=expr):
                with self.assertRaises(DurationParseError):
                    parse_duration(expr)

    def test_non_string_rejected(self) -> None:
        with self.assertRaises(DurationParseError):
            parse_duration(15)  # type: ignore[arg-type]


class TestRefreshTtl(unittest.TestCase):
    """refresh_ttl falls back to the 30 day policy default and logs it."""

    def test_valid_expression_is_used(self) -> None:
        self.assertEqual(refresh_ttl("7d"), timedelta(days=7))

    def test_fallback_is_thirty_days_and_logged(self) -> None:
        with self.assertLogs("gatehouse.core.durations", level="WARNING") as logs:
            ttl = refresh_ttl("one month")
        self.assertEqual(ttl, DEFAULT_REFRESH_TTL)
        self.assertEqual(ttl, timedelta(days=30))
        self.assertIn("policy default", logs.output[0])

    def test_fallback_is_deterministic(self) -> None:
        with self.assertLogs("gatehouse.core.durations", level="WARNING"):
            self.assertEqual(refresh_ttl("bogus"), refresh_ttl("bogus"))


if __name__ == "__main__":
    unittest.main()
