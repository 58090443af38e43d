from flask import Blueprint, Response, request, current_app
from accounts.context import current_session_context
from accounts.decorators import login_required, role_required
from complaints.dashboards import AdminDashboard
from complaints.filters import ALL

reports_bp = Blueprint("reports", __name__, url_prefix="/reports")


@reports_bp.route("/export-csv")
@login_required
@role_required("admin")
def export_csv():
    """Download the complaints currently shown on the admin dashboard."""
    dashboard = AdminDashboard(current_session_context())
    dashboard.fetch_all_complaints()
    rows = dashboard.filter(
        request.args.get("q", ""),
        request.args.get("status", ALL) or ALL,
        request.args.get("category", ALL) or ALL,
    )
    filename, text = dashboard.export_to_csv(rows)
    current_app.logger.info("Exported %d complaint(s) to %s", len(rows), filename)

    return Response(
        text.encode("utf-8"),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment;filename={filename}"}
    )
