from functools import wraps
from flask import redirect, url_for, flash, request
from flask_login import current_user


def _to_login():
    return redirect(url_for("accounts.login", next=request.full_path.rstrip("?")))


def login_required(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            flash("Please login first", "warning")
            return _to_login()
        return f(*args, **kwargs)
    return wrapper


def role_required(*roles):
    """Let through only users whose profile role is one of ``roles``.

    Everyone else goes back to the landing page, which picks the view
    their role allows.
    """
    def wrapper(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                return _to_login()

            if current_user.role not in roles:
                flash("Access denied", "danger")
                return redirect(url_for("index"))

            return f(*args, **kwargs)
        return decorated_function
    return wrapper
