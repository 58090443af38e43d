from flask import Blueprint, render_template, request, redirect, url_for, flash, current_app
from extensions import db
from accounts.models import User, Profile, ROLES
from accounts.context import sign_out
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime
from flask_login import login_user, current_user

accounts_bp = Blueprint("accounts", __name__, url_prefix="/accounts")


@accounts_bp.route("/register", methods=["GET", "POST"])
def register():
    if request.method == "POST":
        email = (request.form.get("email") or "").strip().lower()
        password = request.form.get("password") or ""
        full_name = (request.form.get("full_name") or "").strip()
        student_id = (request.form.get("student_id") or "").strip()
        role = request.form.get("role") or "student"

        if not email or not password or not full_name:
            flash("Please fill in all required fields.", "danger")
            return redirect(url_for("accounts.register"))
        if role not in ROLES:
            flash("Unknown role.", "danger")
            return redirect(url_for("accounts.register"))
        if role == "admin" and not current_app.config.get("ALLOW_ADMIN_SIGNUP"):
            flash("Administrator accounts cannot be created from this page.", "danger")
            return redirect(url_for("accounts.register"))
        if role == "student" and not student_id:
            flash("Student ID is required for student accounts.", "danger")
            return redirect(url_for("accounts.register"))

        user_exists = User.query.filter_by(email=email).first()
        if user_exists:
            flash("Email already registered.", "danger")
            return redirect(url_for("accounts.register"))

        new_user = User(email=email)
        new_user.set_password(password)
        new_user.profile = Profile(
            full_name=full_name,
            email=email,
            role=role,
            student_id=student_id if role == "student" else None,
        )
        try:
            db.session.add(new_user)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.exception("Registration failed for %s", email)
            flash(f"Registration failed: {e}", "danger")
            return redirect(url_for("accounts.register"))

        current_app.logger.info("Registered %s account %s", role, email)
        flash("Registration successful! Please login.", "success")
        return redirect(url_for("accounts.login"))
    return render_template("accounts/register.html", allow_admin=current_app.config.get("ALLOW_ADMIN_SIGNUP"))


@accounts_bp.route("/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("index"))

    if request.method == "POST":
        email = (request.form.get("email") or "").strip().lower()
        password = request.form.get("password") or ""
        user = User.query.filter_by(email=email).first()

        if user and user.check_password(password):
            if not user.is_active:
                flash("This account has been deactivated.", "danger")
                return redirect(url_for("accounts.login"))

            login_user(user)
            user.last_login = datetime.utcnow()
            db.session.commit()

            flash("Welcome back!", "success")
            next_url = request.args.get("next") or ""
            # Only follow local paths
            if next_url.startswith("/") and not next_url.startswith("//"):
                return redirect(next_url)
            return redirect(url_for("index"))

        flash("Invalid email or password. Please try again.", "danger")
        return redirect(url_for("accounts.login"))
    return render_template("accounts/login.html")


@accounts_bp.route("/logout")
def logout():
    sign_out()
    return redirect(url_for("accounts.login"))
