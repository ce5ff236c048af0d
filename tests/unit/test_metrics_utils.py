"""
Unit Tests for Application Metrics

Tests rates, response times and the dashboard/analytics helpers.
"""

from datetime import datetime, timedelta, timezone

import pytest

from utils.metrics_utils import (
    average_response_time,
    build_leaderboard,
    calculate_metrics,
    filter_by_timeframe,
    has_response,
    monthly_trends,
    percentage,
    recent_applications,
    response_time_days,
    status_breakdown,
    top_companies,
)
from utils.status_utils import count_statuses


def test_percentage_guards_zero_denominator():
    assert percentage(3, 0) == 0.0
    assert percentage(0, 0) == 0.0
    assert percentage(1, 3) == 33.3
    assert percentage(2, 3) == 66.7


def test_empty_collection_has_zero_rates():
    metrics = calculate_metrics([])
    assert metrics.total == 0
    assert metrics.interview_rate == 0
    assert metrics.response_rate == 0
    assert metrics.offer_rate == 0
    assert metrics.rejection_rate == 0
    assert metrics.interview_conversion_rate == 0
    assert metrics.average_response_time_days == 0


def test_rates(make_record):
    records = [
        make_record(status="Interview"),
        make_record(status="Phone Screen"),
        make_record(status="Offer"),
        make_record(status="Rejected"),
        make_record(status="Applied"),
        make_record(status="Applied", date_heard_back=datetime(2024, 1, 3)),
    ]
    metrics = calculate_metrics(records)

    assert metrics.total == 6
    assert metrics.responses == 5
    assert metrics.interview_rate == 33.3
    assert metrics.response_rate == 83.3
    assert metrics.offer_rate == 16.7
    # Rejections are measured against responses, not the total
    assert metrics.rejection_rate == 20.0
    assert metrics.interview_conversion_rate == 50.0


def test_rates_stay_within_bounds(make_record):
    records = [make_record(status=s) for s in ("Offer", "Accepted", "Declined")]
    metrics = calculate_metrics(records)
    for rate in (metrics.interview_rate, metrics.response_rate,
                 metrics.offer_rate, metrics.rejection_rate):
        assert 0 <= rate <= 100


def test_has_response(make_record):
    assert has_response(make_record(status="Interview"))
    assert has_response(make_record(status="Applied", date_heard_back=datetime(2024, 1, 2)))
    assert not has_response(make_record(status="Applied"))


def test_one_week_response_time(make_record):
    record = make_record(application_date=datetime(2024, 1, 1),
                         date_heard_back=datetime(2024, 1, 8))
    assert response_time_days(record) == 7
    assert average_response_time([record]) == 7


def test_response_time_rounds_partial_days_up(make_record):
    record = make_record(application_date=datetime(2024, 1, 1, 9),
                         date_heard_back=datetime(2024, 1, 3, 10))
    assert response_time_days(record) == 3


def test_response_time_uses_absolute_difference(make_record):
    record = make_record(application_date=datetime(2024, 1, 8),
                         date_heard_back=datetime(2024, 1, 1))
    assert response_time_days(record) == 7


def test_average_excludes_records_missing_dates(make_record):
    records = [
        make_record(application_date=datetime(2024, 1, 1), date_heard_back=datetime(2024, 1, 3)),
        make_record(application_date=datetime(2024, 1, 1), date_heard_back=datetime(2024, 1, 6)),
        make_record(application_date=datetime(2024, 1, 1)),
        make_record(date_heard_back=datetime(2024, 1, 6)),
    ]
    assert average_response_time(records) == 3.5
    assert average_response_time(records[2:]) == 0


def test_aware_and_naive_dates_mix(make_record):
    applied = datetime(2024, 1, 1, 12, tzinfo=timezone.utc)
    heard = applied.astimezone().replace(tzinfo=None) + timedelta(days=2)
    record = make_record(application_date=applied, date_heard_back=heard)
    assert response_time_days(record) == 2


def test_status_breakdown(make_record):
    counts = count_statuses([make_record(status="Applied"), make_record(status="Offer")])
    slices = status_breakdown(counts)
    assert [(s.label, s.count) for s in slices] == [("Applied", 1), ("Offer", 1)]


def test_status_breakdown_placeholder():
    slices = status_breakdown(count_statuses([]))
    assert [(s.label, s.count) for s in slices] == [("No Data", 1)]


def test_recent_applications_newest_first(make_record):
    records = [
        make_record(id="old", application_date=datetime(2024, 1, 1)),
        make_record(id="none"),
        make_record(id="new", application_date=datetime(2024, 2, 1)),
    ]
    assert [r.id for r in recent_applications(records)] == ["new", "old", "none"]
    assert [r.id for r in recent_applications(records, limit=1)] == ["new"]


def test_filter_by_timeframe(make_record, now):
    records = [
        make_record(id="recent", application_date=now - timedelta(days=3)),
        make_record(id="month", application_date=now - timedelta(days=20)),
        make_record(id="old", application_date=now - timedelta(days=200)),
        make_record(id="undated"),
    ]
    assert [r.id for r in filter_by_timeframe(records, "7days", now)] == ["recent"]
    assert [r.id for r in filter_by_timeframe(records, "30days", now)] == ["recent", "month"]
    assert [r.id for r in filter_by_timeframe(records, "1year", now)] == ["recent", "month", "old"]
    assert len(filter_by_timeframe(records, "all", now)) == 4


def test_one_year_window_is_a_calendar_year(make_record):
    now = datetime(2024, 6, 1, 12)
    records = [
        make_record(id="year_ago", application_date=datetime(2023, 6, 1, 12)),
        make_record(id="day_before", application_date=datetime(2023, 5, 31, 12)),
    ]
    # 365 days before would be 2023-06-02, since 2024 has a Feb 29
    assert [r.id for r in filter_by_timeframe(records, "1year", now)] == ["year_ago"]


def test_one_year_window_from_leap_day(make_record):
    now = datetime(2024, 2, 29, 9)
    records = [
        make_record(id="mar1", application_date=datetime(2023, 3, 1, 9)),
        make_record(id="feb28", application_date=datetime(2023, 2, 28, 9)),
    ]
    assert [r.id for r in filter_by_timeframe(records, "1year", now)] == ["mar1"]


def test_filter_by_unknown_timeframe(make_record):
    with pytest.raises(ValueError):
        filter_by_timeframe([make_record()], "fortnight")


def test_top_companies_ties_keep_first_seen_order(make_record):
    records = [
        make_record(company="Beta"),
        make_record(company="Alpha"),
        make_record(company="Alpha"),
        make_record(company="Gamma"),
        make_record(company="Beta"),
        make_record(company="Delta"),
    ]
    top = top_companies(records, limit=3)
    assert [(c.company, c.count) for c in top] == [("Beta", 2), ("Alpha", 2), ("Gamma", 1)]


def test_leaderboard(make_record):
    records = [
        make_record(owner_id="u1", status="Interview"),
        make_record(owner_id="u2", status="Offer"),
        make_record(owner_id="u2", status="Applied"),
        make_record(owner_id="u3", status="Applied"),
    ]
    board = build_leaderboard(records, names={"u2": "Uma"})

    assert [e.owner_id for e in board] == ["u2", "u1", "u3"]
    assert board[0].display_name == "Uma"
    assert board[0].applications == 2
    assert board[0].offers == 1
    assert board[1].display_name == "u1"
    assert board[1].interviews == 1


def test_monthly_trends(make_record):
    records = [
        make_record(status="Interview", application_date=datetime(2024, 2, 10)),
        make_record(status="Applied", application_date=datetime(2024, 1, 5)),
        make_record(status="Applied", application_date=datetime(2024, 2, 1)),
        make_record(status="Applied"),
    ]
    trends = monthly_trends(records)
    assert [(t.month, t.applications, t.interviews) for t in trends] == [
        ("2024-01", 1, 0),
        ("2024-02", 2, 1),
    ]
