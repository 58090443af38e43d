import os
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from complaints.models import Complaint, CATEGORIES
from complaints.storage import attachment_key
from complaints.toasts import toast

MAX_ATTACHMENT_SIZE = 5 * 1024 * 1024  # 5MB
MAX_UPLOAD_WORKERS = 4

IDLE = "idle"
SUBMITTING = "submitting"
ERROR = "error"


def file_size(file):
    stream = file.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def is_allowed_type(content_type):
    content_type = (content_type or "").lower()
    return content_type.startswith("image/") or content_type == "application/pdf"


class ComplaintForm:
    """A student's new complaint, with its pending attachments."""

    def __init__(self, context, storage, on_success=None):
        self.context = context
        self.storage = storage
        self.on_success = on_success
        self.state = IDLE
        self.reset()

    def reset(self):
        self.title = ""
        self.description = ""
        self.category = ""
        self.files = []

    def load(self, form):
        self.title = form.get("title") or ""
        self.description = form.get("description") or ""
        self.category = form.get("category") or ""

    def validate(self):
        if not self.title.strip() or not self.description.strip() or self.category not in CATEGORIES:
            toast("Missing information", "Please fill in all required fields.", "destructive")
            return False
        return True

    def attach_file(self, file):
        """Queue a file for upload; returns False if it was rejected."""
        if not is_allowed_type(file.mimetype):
            toast(
                "Invalid file type",
                f"{file.filename} is not a valid file type. Please upload images or PDF files only.",
                "destructive",
            )
            return False

        if file_size(file) > MAX_ATTACHMENT_SIZE:
            toast(
                "File too large",
                f"{file.filename} is too large. Please upload files smaller than 5MB.",
                "destructive",
            )
            return False

        self.files.append(file)
        return True

    def remove_file(self, index):
        if 0 <= index < len(self.files):
            del self.files[index]

    def upload_files(self):
        if not self.files:
            return []

        keys = [attachment_key(self.context.user_id, f.filename, i) for i, f in enumerate(self.files)]
        workers = min(MAX_UPLOAD_WORKERS, len(self.files))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self.storage.upload, key, f) for key, f in zip(keys, self.files)]
            # result() re-raises the first failure in submission order
            stored = [future.result() for future in futures]
        return [self.storage.public_url(key) for key in stored]

    def submit(self):
        if self.state == SUBMITTING:
            return None

        if self.context is None or self.context.user is None:
            toast("Authentication error", "You must be logged in to submit a complaint.", "destructive")
            return None

        if not self.validate():
            return None

        self.state = SUBMITTING
        try:
            attachment_urls = self.upload_files()
            now = datetime.utcnow()
            complaint = Complaint(
                user_id=self.context.user_id,
                title=self.title.strip(),
                category=self.category,
                description=self.description.strip(),
                attachment_urls=attachment_urls,
                created_at=now,
                updated_at=now,
            )
            db.session.add(complaint)
            db.session.commit()
        except (SQLAlchemyError, OSError) as e:
            db.session.rollback()
            self.state = ERROR
            current_app.logger.exception("Submitting complaint for user %s failed", self.context.user_id)
            toast("Error submitting complaint", str(e), "destructive")
            return None

        current_app.logger.info(
            "Complaint %s submitted by user %s with %d attachment(s)",
            complaint.id, self.context.user_id, len(attachment_urls),
        )
        toast("Complaint submitted successfully!", "Your complaint has been submitted and will be reviewed by the administration.")
        self.reset()
        self.state = IDLE
        if self.on_success is not None:
            self.on_success(complaint)
        return complaint
