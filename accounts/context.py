"""Session context and role-based view selection for the landing page."""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from flask import session
from flask_login import current_user, logout_user


class View(Enum):
    LOADING = "loading"
    LOGIN_REDIRECT = "login_redirect"
    COMPLAINT_FORM = "complaint_form"
    STUDENT = "student"
    ADMIN = "admin"
    PROFILE_MISSING = "profile_missing"


@dataclass
class SessionContext:
    """What a dashboard needs to know about the signed-in user.

    Built once per request and handed to dashboards and forms, so none of
    them reach for ``current_user`` on their own.
    """
    user: object
    profile: Optional[object]
    sign_out: Callable[[], None]

    @property
    def user_id(self):
        return self.user.id if self.user is not None else None

    @property
    def role(self):
        return self.profile.role if self.profile is not None else None


@dataclass
class GateView:
    kind: View
    context: Optional[SessionContext] = None


def sign_out():
    logout_user()
    session.clear()


def current_session_context():
    if not current_user.is_authenticated:
        return None
    return SessionContext(user=current_user, profile=current_user.profile, sign_out=sign_out)


def select_view(user, profile, loading=False, show_form=False, sign_out_fn=sign_out):
    """Pick exactly one view for the landing page."""
    if loading:
        return GateView(View.LOADING)
    if user is None:
        return GateView(View.LOGIN_REDIRECT)

    context = SessionContext(user=user, profile=profile, sign_out=sign_out_fn)
    role = context.role

    if role == "student":
        return GateView(View.COMPLAINT_FORM if show_form else View.STUDENT, context)
    if role == "admin":
        return GateView(View.ADMIN, context)
    return GateView(View.PROFILE_MISSING, context)
