"""UTCDateTime — values normalized to UTC in both directions."""

from datetime import datetime, timedelta, timezone

from mixit.db.types import UTCDateTime


def test_naive_result_is_marked_utc():
    loaded = UTCDateTime().process_result_value(datetime(2026, 1, 1, 12, 0), None)
    assert loaded == datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_offset_value_converted_to_utc_on_bind():
    cet = timezone(timedelta(hours=1))
    bound = UTCDateTime().process_bind_param(datetime(2026, 1, 1, 13, 0, tzinfo=cet), None)
    assert bound.utcoffset() == timedelta(0)
    assert bound.hour == 12


def test_none_passes_through():
    assert UTCDateTime().process_result_value(None, None) is None
    assert UTCDateTime().process_bind_param(None, None) is None
