from extensions import db
from datetime import datetime

CATEGORIES = ("academic", "hostel", "admin", "harassment", "finance", "other")
STATUSES = ("pending", "in_progress", "resolved", "rejected")

CATEGORY_LABELS = {
    "academic": "Academic",
    "hostel": "Hostel",
    "admin": "Administration",
    "harassment": "Harassment",
    "finance": "Finance",
    "other": "Other",
}


class Complaint(db.Model):
    __tablename__ = "complaints"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(20), nullable=False)
    status = db.Column(db.String(20), nullable=False, default="pending")
    admin_remarks = db.Column(db.Text)
    attachment_urls = db.Column(db.JSON, nullable=False, default=list)

    # Owning student
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    student = db.relationship("User", backref="complaints")

    @property
    def profile(self):
        return self.student.profile if self.student else None

    def __repr__(self):
        return f"<Complaint {self.id} ({self.status})>"


# =========================
# NOTIFICATION MODEL
# =========================
class Notification(db.Model):
    __tablename__ = "notifications"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    complaint_id = db.Column(db.Integer, db.ForeignKey("complaints.id"))
    message = db.Column(db.String(255))
    is_read = db.Column(db.Boolean, default=False)

    created_on = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Notification {self.id}>"
