from datetime import datetime

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from extensions import db
from accounts.models import User
from complaints.models import Complaint, Notification, STATUSES
from complaints.filters import filter_complaints, summary_counts, ALL
from complaints.toasts import toast
from reports.analytics import complaint_analytics
from reports.export import complaints_to_csv


class StudentDashboard:
    """The signed-in student's own complaints."""

    def __init__(self, context):
        self.context = context
        self.complaints = []

    def fetch_own_complaints(self):
        try:
            self.complaints = (
                Complaint.query
                .filter_by(user_id=self.context.user_id)
                .order_by(Complaint.created_at.desc(), Complaint.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.exception("Fetching complaints for user %s failed", self.context.user_id)
            toast("Error fetching complaints", str(e), "destructive")
        return self.complaints

    def filter(self, search_term="", status=ALL, category=ALL):
        return filter_complaints(self.complaints, search_term, status, category)

    @property
    def stats(self):
        return summary_counts(self.complaints)

    def unread_notifications(self):
        try:
            return (
                Notification.query
                .filter_by(user_id=self.context.user_id, is_read=False)
                .order_by(Notification.created_on.desc())
                .all()
            )
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Fetching notifications for user %s failed", self.context.user_id)
            return []


class AdminDashboard:
    """Every complaint, with submitter details, for administrators."""

    def __init__(self, context, notifier=None):
        self.context = context
        self.notifier = notifier
        self.complaints = []
        self.selected_id = None

    def fetch_all_complaints(self):
        try:
            self.complaints = (
                Complaint.query
                .options(joinedload(Complaint.student).joinedload(User.profile))
                .order_by(Complaint.created_at.desc(), Complaint.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.exception("Fetching all complaints failed")
            toast("Error fetching complaints", str(e), "destructive")
        return self.complaints

    def filter(self, search_term="", status=ALL, category=ALL):
        return filter_complaints(self.complaints, search_term, status, category, match_student_name=True)

    @property
    def stats(self):
        return summary_counts(self.complaints)

    @property
    def analytics(self):
        return complaint_analytics(self.complaints)

    def select(self, complaint_id):
        self.selected_id = complaint_id

    def update_complaint(self, complaint_id, status, remarks=None, refresh=True):
        """Set a complaint's status and, when given, its remarks.

        Any status may follow any other. Returns True when the update was
        committed. With ``refresh`` the list is refetched afterwards; callers
        that redirect straight away pass False.
        """
        if status not in STATUSES:
            toast("Invalid status", f"'{status}' is not a known complaint status.", "destructive")
            return False

        try:
            complaint = db.session.get(Complaint, complaint_id)
            if complaint is None:
                toast("Error updating complaint", "Complaint not found.", "destructive")
                return False

            previous_status = complaint.status
            complaint.status = status
            if remarks and remarks.strip():
                complaint.admin_remarks = remarks.strip()
            complaint.updated_at = datetime.utcnow()
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.exception("Updating complaint %s failed", complaint_id)
            toast("Error updating complaint", str(e), "destructive")
            return False

        current_app.logger.info(
            "Complaint %s moved from %s to %s by user %s",
            complaint.id, previous_status, status, self.context.user_id,
        )
        toast("Complaint updated", "The complaint status has been updated successfully.")

        if self.notifier is not None:
            try:
                self.notifier.notify_status_change(complaint, previous_status)
            except Exception as e:
                db.session.rollback()
                current_app.logger.exception("Notifying student about complaint %s failed", complaint.id)
                toast("Student not notified", str(e), "warning")

        if refresh:
            self.fetch_all_complaints()
        self.selected_id = None
        return True

    def export_to_csv(self, rows, today=None):
        return complaints_to_csv(rows, today=today, tz_name=current_app.config["DISPLAY_TIMEZONE"])
