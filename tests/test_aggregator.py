from datetime import datetime, timezone

from attendance_board.aggregator import UNPARSABLE_DATE_KEY, aggregate_daily, monthly_total_hours
from attendance_board.models import Action


def test_no_records_no_summaries(tokyo):
    assert aggregate_daily([], tokyo) == []


def test_check_in_and_out_same_day(tokyo, make_record):
    records = [
        make_record("2025-08-07T09:00:00+09:00", Action.CHECK_IN),
        make_record("2025-08-07T18:00:00+09:00", Action.CHECK_OUT),
    ]

    summaries = aggregate_daily(records, tokyo)

    assert len(summaries) == 1
    summary = summaries[0]
    assert summary.date_key == "2025-08-07"
    assert summary.working_hours == 9.0
    assert summary.check_in == datetime(2025, 8, 7, 0, 0, tzinfo=timezone.utc)
    assert summary.check_out == datetime(2025, 8, 7, 9, 0, tzinfo=timezone.utc)


def test_missing_check_out_gives_zero_hours(tokyo, make_record):
    summaries = aggregate_daily([make_record("2025-08-07T09:00:00+09:00")], tokyo)

    assert summaries[0].working_hours == 0
    assert summaries[0].check_out is None
    assert summaries[0].check_in is not None


def test_only_first_check_in_is_used(tokyo, make_record):
    early = make_record("2025-08-07T09:00:00+09:00", Action.CHECK_IN)
    late = make_record("2025-08-07T09:30:00+09:00", Action.CHECK_IN)
    out = make_record("2025-08-07T18:00:00+09:00", Action.CHECK_OUT)

    summary = aggregate_daily([late, out, early], tokyo)[0]

    assert summary.check_in == datetime(2025, 8, 7, 9, 0, tzinfo=tokyo)
    assert summary.records == (early, late, out)
    assert summary.working_hours == 9.0


def test_second_session_kept_in_records_only(tokyo, make_record):
    records = [
        make_record("2025-08-07T09:00:00+09:00", Action.CHECK_IN),
        make_record("2025-08-07T12:00:00+09:00", Action.CHECK_OUT),
        make_record("2025-08-07T13:00:00+09:00", Action.CHECK_IN),
        make_record("2025-08-07T17:00:00+09:00", Action.CHECK_OUT),
    ]

    summary = aggregate_daily(records, tokyo)[0]

    assert summary.working_hours == 3.0
    assert len(summary.records) == 4


def test_grouping_uses_display_zone(tokyo, make_record):
    record = make_record("2025-08-06T23:30:00Z")

    assert aggregate_daily([record], tokyo)[0].date_key == "2025-08-07"
    assert aggregate_daily([record], timezone.utc)[0].date_key == "2025-08-06"


def test_days_sorted_most_recent_first(tokyo, make_record):
    records = [
        make_record("2025-08-05T09:00:00+09:00"),
        make_record("2025-08-20T09:00:00+09:00"),
        make_record("2025-08-11 09:00:00.5 +0900 JST"),
    ]

    keys = [summary.date_key for summary in aggregate_daily(records, tokyo)]

    assert keys == ["2025-08-20", "2025-08-11", "2025-08-05"]


def test_unparsable_records_grouped_last(tokyo, make_record):
    broken = make_record("undefined", Action.CHECK_OUT)
    records = [
        broken,
        make_record("2025-08-07T09:00:00+09:00", Action.CHECK_IN),
    ]

    summaries = aggregate_daily(records, tokyo)

    assert [summary.date_key for summary in summaries] == ["2025-08-07", UNPARSABLE_DATE_KEY]
    assert summaries[0].working_hours == 0
    assert summaries[1].records == (broken,)
    assert summaries[1].working_hours == 0
    assert summaries[1].check_out is None


def test_check_out_before_check_in_is_not_clamped(tokyo, make_record):
    records = [
        make_record("2025-08-07T09:00:00+09:00", Action.CHECK_IN),
        make_record("2025-08-07T08:00:00+09:00", Action.CHECK_OUT),
    ]

    summary = aggregate_daily(records, tokyo)[0]

    assert summary.working_hours == -1.0
    assert summary.is_misordered


def test_monthly_total(tokyo, make_record):
    records = [
        make_record("2025-08-07T09:00:00+09:00", Action.CHECK_IN),
        make_record("2025-08-07T17:30:00+09:00", Action.CHECK_OUT),
        make_record("2025-08-08T10:00:00+09:00", Action.CHECK_IN),
        make_record("2025-08-08T12:00:00+09:00", Action.CHECK_OUT),
    ]

    assert monthly_total_hours(aggregate_daily(records, tokyo)) == 10.5


def test_range_limit_timestamps_fall_into_unparsable_group(tokyo, make_record):
    edge = [
        make_record("9999-12-31T23:00:00+00:00", Action.CHECK_IN),
        make_record("0001-01-01T00:00:00+09:00", Action.CHECK_OUT),
        make_record("9999-12-31T23:00:00-05:00", Action.CHECK_OUT),
    ]
    regular = make_record("2025-08-07T09:00:00+09:00", Action.CHECK_IN)

    summaries = aggregate_daily(edge + [regular], tokyo)

    assert [summary.date_key for summary in summaries] == ["2025-08-07", UNPARSABLE_DATE_KEY]
    assert summaries[1].records == tuple(edge)
    assert summaries[1].check_in is None
    assert summaries[1].working_hours == 0
