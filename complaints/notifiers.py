from flask import current_app
from flask_mail import Message
from extensions import db, mail
from complaints.models import Notification


def _status_label(status):
    return status.replace("_", " ")


def status_message(complaint):
    message = f"Your complaint '{complaint.title}' is now {_status_label(complaint.status)}."
    if complaint.admin_remarks:
        message += " Admin remarks were added."
    return message


class Notifier:
    """Tells a student that an administrator changed their complaint."""

    def notify_status_change(self, complaint, previous_status):
        raise NotImplementedError


class InAppNotifier(Notifier):
    def notify_status_change(self, complaint, previous_status):
        notification = Notification(
            user_id=complaint.user_id,
            complaint_id=complaint.id,
            message=status_message(complaint)[:255],
        )
        db.session.add(notification)
        db.session.commit()


class MailNotifier(Notifier):
    def notify_status_change(self, complaint, previous_status):
        profile = complaint.profile
        if profile is None or not profile.email:
            current_app.logger.warning("No e-mail on file for complaint %s owner", complaint.id)
            return

        msg = Message(f"Complaint update: {complaint.title}", recipients=[profile.email])
        msg.body = (
            f"Hello {profile.full_name},\n\n"
            f"{status_message(complaint)}\n"
            f"Previous status: {_status_label(previous_status)}\n"
        )
        if complaint.admin_remarks:
            msg.body += f"\nAdmin remarks: {complaint.admin_remarks}\n"
        mail.send(msg)


class CompositeNotifier(Notifier):
    def __init__(self, notifiers):
        self.notifiers = list(notifiers)

    def notify_status_change(self, complaint, previous_status):
        for notifier in self.notifiers:
            notifier.notify_status_change(complaint, previous_status)


NOTIFIERS = {
    "inapp": InAppNotifier,
    "mail": MailNotifier,
}


def notifier_from_config(config):
    names = [n.strip() for n in (config.get("COMPLAINT_NOTIFIERS") or "").split(",") if n.strip()]
    unknown = [n for n in names if n not in NOTIFIERS]
    if unknown:
        raise ValueError(f"Unknown notifier(s): {', '.join(unknown)}")
    return CompositeNotifier(NOTIFIERS[n]() for n in names)
