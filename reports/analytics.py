"""Aggregates shown on the admin dashboard.

Everything here is a pure function over an already-fetched list of
complaints; nothing is cached or stored.
"""
from datetime import datetime, timedelta

from complaints.models import CATEGORIES, STATUSES

OVERDUE_AFTER = timedelta(days=7)


def average_resolution_days(complaints):
    """Mean days from creation to last update over resolved complaints."""
    durations = [
        (c.updated_at - c.created_at).total_seconds() / 86400
        for c in complaints
        if c.status == "resolved" and c.created_at and c.updated_at
    ]
    if not durations:
        return 0.0
    return round(sum(durations) / len(durations), 1)


def resolution_rate(complaints):
    """Percentage of complaints that are resolved."""
    if not complaints:
        return 0.0
    resolved = sum(1 for c in complaints if c.status == "resolved")
    return round(resolved * 100 / len(complaints), 1)


def counts_by(complaints, attr, keys):
    counts = {key: 0 for key in keys}
    for c in complaints:
        value = getattr(c, attr)
        counts[value] = counts.get(value, 0) + 1
    return counts


def overdue_pending(complaints, now=None):
    """Pending complaints created more than seven days ago."""
    cutoff = (now or datetime.utcnow()) - OVERDUE_AFTER
    return sum(1 for c in complaints if c.status == "pending" and c.created_at < cutoff)


def percentages(counts):
    total = sum(counts.values())
    return {key: (round(value * 100 / total, 1) if total else 0.0) for key, value in counts.items()}


def complaint_analytics(complaints, now=None):
    by_category = counts_by(complaints, "category", CATEGORIES)
    by_status = counts_by(complaints, "status", STATUSES)
    return {
        "average_resolution_days": average_resolution_days(complaints),
        "resolution_rate": resolution_rate(complaints),
        "by_category": by_category,
        "by_status": by_status,
        "category_percentages": percentages(by_category),
        "status_percentages": percentages(by_status),
        "overdue_pending": overdue_pending(complaints, now),
    }
