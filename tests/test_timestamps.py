"""Timestamp codec: strict parsing, formatting and ordering."""

from datetime import datetime, timezone

import pytest

from utils.timestamps import (
    Timestamp,
    TimestampParseError,
    format_date,
    format_timestamp,
    from_epoch,
    parse_timestamp,
)


class TestParse:

    def test_valid_string_is_utc(self):
        ts = parse_timestamp("2023-05-06 07:08:09")
        assert ts.instant == datetime(2023, 5, 6, 7, 8, 9, tzinfo=timezone.utc)

    def test_epoch_seconds(self):
        assert parse_timestamp("1970-01-02 00:00:00").epoch_seconds() == 86400.0

    @pytest.mark.parametrize("raw", [
        "2023-05-06T07:08:09",      # wrong separator
        "2023/05/06 07:08:09",
        "2023-5-6 7:8:9",           # unpadded
        "2023-13-01 00:00:00",      # month out of range
        "2023-02-30 00:00:00",      # no such day
        "2023-01-01 24:00:00",
        "2023-01-01 00:00:00Z",     # trailing characters
        "2023-01-01 00:00:00\n",
        " 2023-01-01 00:00:00",
        "",
    ])
    def test_malformed_rejected(self, raw):
        with pytest.raises(TimestampParseError) as exc:
            parse_timestamp(raw)
        assert exc.value.raw == raw

    def test_non_string_rejected(self):
        with pytest.raises(TimestampParseError):
            parse_timestamp(1672531200)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_timestamp("nope")


class TestFormat:

    @pytest.mark.parametrize("raw", [
        "2023-01-01 00:00:00",
        "1999-12-31 23:59:59",
        "2024-02-29 12:00:01",
        "0999-01-01 00:00:00",
        "0001-01-01 00:00:00",
    ])
    def test_format_parse_round_trip(self, raw):
        assert format_timestamp(parse_timestamp(raw)) == raw
        assert str(parse_timestamp(raw)) == raw

    def test_parse_format_round_trip(self):
        t = from_epoch(1_700_000_000)
        assert parse_timestamp(format_timestamp(t)) == t

    def test_format_date(self):
        assert format_date(parse_timestamp("2023-03-15 23:59:59").epoch_seconds()) == "2023-03-15"

    def test_years_below_1000_are_zero_padded(self):
        t = Timestamp(datetime(999, 5, 6, 7, 8, 9, tzinfo=timezone.utc))
        assert format_timestamp(t) == "0999-05-06 07:08:09"
        assert parse_timestamp(format_timestamp(t)) == t


class TestOrdering:

    def test_ordered_by_instant(self):
        a = parse_timestamp("2023-01-01 00:00:00")
        b = parse_timestamp("2023-01-01 00:00:01")
        assert a < b
        assert sorted([b, a]) == [a, b]

    def test_equal_and_hashable(self):
        a = parse_timestamp("2023-01-01 00:00:00")
        b = Timestamp(datetime(2023, 1, 1, tzinfo=timezone.utc))
        assert a == b
        assert len({a, b}) == 1
