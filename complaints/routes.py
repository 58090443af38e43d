# complaints/routes.py
import posixpath

from flask import Blueprint, render_template, request, redirect, url_for, current_app, send_from_directory, abort
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import RequestEntityTooLarge
from extensions import db
from accounts.context import current_session_context
from accounts.decorators import login_required, role_required
from complaints.dashboards import StudentDashboard, AdminDashboard
from complaints.forms import ComplaintForm
from complaints.filters import ALL
from complaints.models import Notification, CATEGORIES, CATEGORY_LABELS, STATUSES
from complaints.notifiers import notifier_from_config
from complaints.storage import storage_from_config
from complaints.toasts import toast

complaints_bp = Blueprint("complaints", __name__, url_prefix="/complaints")


def filter_args():
    return {
        "search_term": request.args.get("q", ""),
        "status": request.args.get("status", ALL) or ALL,
        "category": request.args.get("category", ALL) or ALL,
    }


def page_context(**extra):
    return dict(categories=CATEGORIES, category_labels=CATEGORY_LABELS, statuses=STATUSES, **extra)


# ================= STUDENT DASHBOARD =================
@complaints_bp.route("/")
@login_required
@role_required("student")
def student_dashboard():
    dashboard = StudentDashboard(current_session_context())
    dashboard.fetch_own_complaints()
    filters = filter_args()
    return render_template(
        "complaints/student_dashboard.html",
        **page_context(
            complaints=dashboard.filter(**filters),
            stats=dashboard.stats,
            notifications=dashboard.unread_notifications(),
            filters=filters,
        )
    )


# ================= SUBMIT (Student) =================
@complaints_bp.route("/new", methods=["GET", "POST"])
@login_required
@role_required("student")
def new_complaint():
    form = ComplaintForm(current_session_context(), storage_from_config(current_app.config))

    if request.method == "POST":
        form.load(request.form)
        if form.validate():
            files = [f for f in request.files.getlist("attachments") if f and f.filename]
            # Every rejected file gets its own toast; nothing is saved until all are accepted
            accepted = [form.attach_file(f) for f in files]
            if all(accepted) and form.submit() is not None:
                return redirect(url_for("complaints.student_dashboard"))

    return render_template("complaints/new_complaint.html", **page_context(form=form))


@complaints_bp.route("/notifications/read", methods=["POST"])
@login_required
@role_required("student")
def mark_notifications_read():
    context = current_session_context()
    try:
        Notification.query.filter_by(user_id=context.user_id, is_read=False).update({"is_read": True})
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception("Marking notifications read for user %s failed", context.user_id)
        toast("Error updating notifications", str(e), "destructive")
    return redirect(url_for("complaints.student_dashboard"))


# ================= ADMIN DASHBOARD =================
@complaints_bp.route("/admin")
@login_required
@role_required("admin")
def admin_dashboard():
    dashboard = AdminDashboard(current_session_context())
    dashboard.fetch_all_complaints()
    filters = filter_args()
    selected = request.args.get("edit", type=int)
    dashboard.select(selected)
    return render_template(
        "complaints/admin_dashboard.html",
        **page_context(
            complaints=dashboard.filter(**filters),
            stats=dashboard.stats,
            analytics=dashboard.analytics,
            filters=filters,
            selected_id=dashboard.selected_id,
        )
    )


# ================= UPDATE (Admin) =================
@complaints_bp.route("/<int:id>/update", methods=["POST"])
@login_required
@role_required("admin")
def update_complaint(id):
    dashboard = AdminDashboard(current_session_context(), notifier=notifier_from_config(current_app.config))
    dashboard.select(id)
    # Filters ride along on the form's query string
    args = request.args.to_dict()
    args.pop("edit", None)
    if dashboard.update_complaint(id, request.form.get("status", ""), request.form.get("admin_remarks"), refresh=False):
        return redirect(url_for("complaints.admin_dashboard", **args))
    return redirect(url_for("complaints.admin_dashboard", edit=id, **args))


# ================= ATTACHMENTS =================
@complaints_bp.route("/attachments/<path:key>")
@login_required
def attachment(key):
    if key.startswith("/") or ".." in key.split("/"):
        abort(404)
    key = posixpath.normpath(key)
    owner = key.split("/", 1)[0]
    context = current_session_context()
    if context.role != "admin" and owner != str(context.user_id):
        abort(403)
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], key)


@complaints_bp.errorhandler(RequestEntityTooLarge)
def upload_too_large(e):
    current_app.logger.warning("Rejected oversized upload from %s", request.remote_addr)
    toast("File too large", "The attachments exceed the upload limit. Please upload files smaller than 5MB.", "destructive")
    return redirect(url_for("complaints.new_complaint"))
