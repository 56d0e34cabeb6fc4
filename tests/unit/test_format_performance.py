"""
Unit tests for the class format performance table.
"""

import pytest

from class_analytics.format_performance import (
    FORMAT_METRICS,
    build_format_performance,
    metric_band,
)


class TestBuildFormatPerformance:
    """Tests for build_format_performance."""

    def test_metrics(self, studio_sessions):
        hiit, barre = build_format_performance(studio_sessions)

        assert hiit.format == "HIIT"
        assert hiit.total_sessions == 3
        assert hiit.total_capacity == 30
        assert hiit.total_checked_in == 15
        assert hiit.total_revenue == 900.0
        assert hiit.total_booked == 18
        assert hiit.total_late_cancelled == 3
        assert hiit.empty_sessions == 1
        assert hiit.revenue_generating_sessions == 2
        assert hiit.fill_rate == 50.0
        assert hiit.show_up_rate == pytest.approx(15 / 18 * 100)
        assert hiit.utilization_rate == pytest.approx(200 / 3)
        assert hiit.avg_revenue == 300.0
        assert hiit.revenue_per_attendee == 60.0
        assert hiit.efficiency == 30.0
        assert hiit.cancellation_rate == pytest.approx(3 / 18 * 100)
        assert hiit.revenue_efficiency == pytest.approx(200 / 3)

        assert barre.format == "Barre"
        assert barre.total_revenue == 2400.0

    def test_revenue_ignores_revenue_field(self, make_session):
        """The format table reads total_paid only."""
        rows = build_format_performance([make_session(revenue=500.0, totalPaid=None)])

        assert rows[0].total_revenue == 0.0
        assert rows[0].revenue_generating_sessions == 0

    def test_zero_denominators(self, make_session):
        rows = build_format_performance(
            [make_session(capacity=0, checkedInCount=0, bookedCount=0, totalPaid=0.0)]
        )

        row = rows[0]
        assert row.fill_rate == 0.0
        assert row.show_up_rate == 0.0
        assert row.revenue_per_attendee == 0.0
        assert row.efficiency == 0.0
        assert row.cancellation_rate == 0.0

    def test_ordered_by_session_count(self, make_session):
        sessions = [
            make_session(cleanedClass="Yoga"),
            make_session(cleanedClass="Spin"),
            make_session(cleanedClass="Spin"),
        ]

        assert [r.format for r in build_format_performance(sessions)] == ["Spin", "Yoga"]

    def test_format_falls_back_to_class_type(self, make_session):
        rows = build_format_performance([make_session(cleanedClass=None)])

        assert rows[0].format == "Cardio"

    def test_empty_input(self):
        assert build_format_performance([]) == []


class TestMetricBand:
    """Tests for metric_band."""

    def test_higher_is_better(self):
        assert metric_band(85.0, "fill_rate") == "good"
        assert metric_band(60.0, "show_up_rate") == "warning"
        assert metric_band(10.0, "utilization_rate") == "poor"

    def test_cancellation_rate_lower_is_better(self):
        assert metric_band(10.0, "cancellation_rate") == "good"
        assert metric_band(20.0, "cancellation_rate") == "warning"
        assert metric_band(25.0, "cancellation_rate") == "poor"

    def test_unknown_metric(self):
        with pytest.raises(ValueError, match="Unknown metric"):
            metric_band(50.0, "profit")

    def test_metric_list(self):
        assert len(FORMAT_METRICS) == 8
        assert "revenue_per_attendee" in FORMAT_METRICS
