"""
Unit Tests for Core Utilities.
"""

from datetime import datetime

from pocketnotes.backend.core.utils import iso_now, parse_timestamp, utc_now


class TestTimestamps:
    """Tests for note timestamp helpers."""

    def test_utc_now_is_naive(self):
        assert utc_now().tzinfo is None

    def test_iso_now_format(self):
        value = iso_now()

        assert value.endswith("Z")
        assert value[10] == "T"
        assert len(value) == len("2024-05-01T09:30:12.123456Z")

    def test_round_trip(self):
        value = "2024-05-01T09:30:12.123456Z"

        assert parse_timestamp(value) == datetime(2024, 5, 1, 9, 30, 12, 123456)

    def test_lexicographic_order_is_chronological(self):
        earlier = datetime(2024, 1, 9, 23, 59, 59, 999999)
        later = datetime(2024, 1, 10, 0, 0, 0, 1)
        fmt = "%Y-%m-%dT%H:%M:%S.%fZ"

        assert earlier.strftime(fmt) < later.strftime(fmt)
