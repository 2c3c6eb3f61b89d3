from datetime import datetime, timezone

from travelflow.services.reporting.stats_service import recent_months


def test_recent_months_oldest_first():
    now = datetime(2024, 3, 15, tzinfo=timezone.utc)
    assert recent_months(now, 4) == ["2023-12", "2024-01", "2024-02", "2024-03"]


def test_single_month():
    assert recent_months(datetime(2024, 1, 1), 1) == ["2024-01"]
