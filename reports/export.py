import csv
import io
from datetime import datetime

import pytz

CSV_COLUMNS = [
    "ID", "Title", "Category", "Status", "Student Name", "Student ID",
    "Student Email", "Description", "Admin Remarks", "Created Date", "Updated Date",
]


def export_filename(today=None, tz=pytz.utc):
    """Name the export after today's date in ``tz``, the zone the rows are dated in."""
    today = today or datetime.now(tz).date()
    return f"complaints_export_{today.isoformat()}.csv"


def format_date(value, tz):
    if value is None:
        return ""
    # Stored timestamps are naive UTC
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    return value.astimezone(tz).strftime("%Y-%m-%d")


def complaint_row(c, tz):
    profile = c.profile
    return [
        c.id,
        c.title,
        c.category,
        c.status,
        profile.full_name if profile else "",
        (profile.student_id or "") if profile else "",
        profile.email if profile else "",
        (c.description or "").replace(",", ";"),
        c.admin_remarks or "",
        format_date(c.created_at, tz),
        format_date(c.updated_at, tz),
    ]


def complaints_to_csv(complaints, today=None, tz_name="UTC"):
    """Serialize complaints to ``(filename, csv_text)``, one row each."""
    tz = pytz.timezone(tz_name)
    output = io.StringIO()

    csv.writer(output).writerow(CSV_COLUMNS)
    writer = csv.writer(output, quoting=csv.QUOTE_ALL)
    for c in complaints:
        writer.writerow(complaint_row(c, tz))

    return export_filename(today, tz), output.getvalue()
