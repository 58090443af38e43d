from datetime import datetime, timedelta
from types import SimpleNamespace

from reports.analytics import (
    average_resolution_days,
    complaint_analytics,
    overdue_pending,
    resolution_rate,
)

NOW = datetime(2026, 3, 15, 12, 0)


def complaint(status, category='other', age_days=0, resolved_after_days=None):
    created = NOW - timedelta(days=age_days)
    updated = created + timedelta(days=resolved_after_days) if resolved_after_days is not None else created
    return SimpleNamespace(status=status, category=category, created_at=created, updated_at=updated)


def test_average_resolution_days_over_resolved_only():
    complaints = [
        complaint('resolved', resolved_after_days=2),
        complaint('resolved', resolved_after_days=5),
        complaint('rejected', resolved_after_days=30),
        complaint('pending', age_days=10),
    ]
    assert average_resolution_days(complaints) == 3.5


def test_average_resolution_days_without_resolved():
    assert average_resolution_days([complaint('pending')]) == 0.0


def test_resolution_rate():
    complaints = [complaint('resolved'), complaint('pending'), complaint('pending')]
    assert resolution_rate(complaints) == 33.3
    assert resolution_rate([]) == 0.0


def test_overdue_pending_counts_only_old_pending():
    complaints = [
        complaint('pending', age_days=8),
        complaint('pending', age_days=6),
        complaint('in_progress', age_days=20),
    ]
    assert overdue_pending(complaints, now=NOW) == 1


def test_complaint_analytics_includes_every_category_and_status():
    complaints = [
        complaint('pending', 'hostel', age_days=9),
        complaint('resolved', 'hostel', resolved_after_days=1),
        complaint('pending', 'finance'),
    ]
    result = complaint_analytics(complaints, now=NOW)

    assert result['by_category'] == {
        'academic': 0, 'hostel': 2, 'admin': 0, 'harassment': 0, 'finance': 1, 'other': 0,
    }
    assert result['by_status'] == {'pending': 2, 'in_progress': 0, 'resolved': 1, 'rejected': 0}
    assert result['category_percentages']['hostel'] == 66.7
    assert result['overdue_pending'] == 1
    assert result['average_resolution_days'] == 1.0
    assert result['resolution_rate'] == 33.3


def test_complaint_analytics_on_empty_list():
    result = complaint_analytics([], now=NOW)
    assert result['resolution_rate'] == 0.0
    assert set(result['status_percentages'].values()) == {0.0}
