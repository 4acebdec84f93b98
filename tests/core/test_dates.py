from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from folio.core.dates import format_iso_utc, parse_timestamp
from folio.core.exceptions import UnparsableTimestampError


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-05-01", datetime(2024, 5, 1, tzinfo=UTC)),
        ("2024-05-01T12:30:00Z", datetime(2024, 5, 1, 12, 30, tzinfo=UTC)),
        ("2024-05-01T00:30:00-03:00", datetime(2024, 5, 1, 3, 30, tzinfo=UTC)),
        (date(2024, 5, 1), datetime(2024, 5, 1, tzinfo=UTC)),
        (datetime(2024, 5, 1, 8, 0), datetime(2024, 5, 1, 8, 0, tzinfo=UTC)),
    ],
)
def test_parse_timestamp_accepts_common_forms(value, expected):
    assert parse_timestamp(value) == expected


def test_parse_timestamp_result_is_utc():
    parsed = parse_timestamp(datetime(2024, 5, 1, 8, 0, tzinfo=timezone(timedelta(hours=2))))
    assert parsed.tzinfo is UTC
    assert parsed.hour == 6


def test_naive_values_use_default_timezone():
    parsed = parse_timestamp("2024-05-01 10:00", default_timezone=timezone(timedelta(hours=-5)))
    assert parsed == datetime(2024, 5, 1, 15, 0, tzinfo=UTC)


@pytest.mark.parametrize("value", [None, "", "   ", "not a date", 12.5, True, ["2024"]])
def test_parse_timestamp_rejects_garbage(value):
    with pytest.raises(UnparsableTimestampError):
        parse_timestamp(value)


def test_format_iso_utc_uses_zulu_suffix():
    assert format_iso_utc(datetime(2024, 5, 1, 12, 0, tzinfo=UTC)) == "2024-05-01T12:00:00Z"
    assert format_iso_utc(datetime(2024, 5, 1, 12, 0)) == "2024-05-01T12:00:00Z"


@pytest.mark.parametrize(
    "value",
    ["0001-01-01T00:00:00+01:00", datetime(1, 1, 1, tzinfo=timezone(timedelta(hours=1)))],
)
def test_values_outside_utc_range_are_unparsable(value):
    with pytest.raises(UnparsableTimestampError):
        parse_timestamp(value)
