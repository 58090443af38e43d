from flask import Flask, render_template, redirect, url_for, request
from flask_login import current_user
from extensions import db, login_manager, mail
from accounts.models import User
from accounts.context import select_view, sign_out, View
import os
import pytz
from dotenv import load_dotenv

# Blueprint Imports
from accounts.routes import accounts_bp
from complaints.routes import complaints_bp
from reports.routes import reports_bp

load_dotenv()

app = Flask(__name__)

# --- DATABASE CONFIGURATION ---
uri = os.getenv("DB_URL", "sqlite:///complaints.db")
if uri.startswith("postgres://"):
    uri = uri.replace("postgres://", "postgresql://", 1)

app.config["SQLALCHEMY_DATABASE_URI"] = uri
app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
app.config['SECRET_KEY'] = os.getenv('SECRET_KEY', 'dev-secret-change-me')

# --- ATTACHMENTS ---
app.config['UPLOAD_FOLDER'] = os.getenv('UPLOAD_FOLDER', os.path.join(app.root_path, 'uploads', 'complaints'))
app.config['ATTACHMENT_URL_PREFIX'] = os.getenv('ATTACHMENT_URL_PREFIX', '/complaints/attachments')
# Whole request, several 5MB attachments included
app.config['MAX_CONTENT_LENGTH'] = int(os.getenv('MAX_CONTENT_LENGTH', 50 * 1024 * 1024))

# --- EMAIL CONFIGURATION ---
app.config['MAIL_SERVER'] = os.getenv('MAIL_SERVER', 'localhost')
app.config['MAIL_PORT'] = int(os.getenv('MAIL_PORT', 465))
app.config['MAIL_USE_SSL'] = os.getenv('MAIL_USE_SSL', 'True') == 'True'
app.config['MAIL_USE_TLS'] = os.getenv('MAIL_USE_TLS', 'False') == 'True'
app.config['MAIL_USERNAME'] = os.getenv('MAIL_USERNAME')
app.config['MAIL_PASSWORD'] = os.getenv('MAIL_PASS')
app.config['MAIL_DEFAULT_SENDER'] = os.getenv('MAIL_DEFAULT_SENDER', 'complaints@localhost')
app.config['MAIL_SUPPRESS_SEND'] = os.getenv('MAIL_SUPPRESS_SEND', 'False') == 'True'

# --- COMPLAINT SETTINGS ---
app.config['COMPLAINT_NOTIFIERS'] = os.getenv('COMPLAINT_NOTIFIERS', 'inapp')
app.config['DISPLAY_TIMEZONE'] = os.getenv('DISPLAY_TIMEZONE', 'Asia/Kolkata')
app.config['ALLOW_ADMIN_SIGNUP'] = os.getenv('ALLOW_ADMIN_SIGNUP', 'False') == 'True'

app.logger.setLevel(os.getenv('LOG_LEVEL', 'INFO').upper())

# Initialize Extensions
db.init_app(app)
login_manager.init_app(app)
mail.init_app(app)
login_manager.login_view = 'accounts.login'
login_manager.login_message_category = 'warning'

# --- REGISTER ALL BLUEPRINTS ---
app.register_blueprint(accounts_bp)
app.register_blueprint(complaints_bp)
app.register_blueprint(reports_bp)

with app.app_context():
    db.create_all()

@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))

@app.template_filter("localtime")
def localtime(value, fmt="%d %b %Y, %I:%M %p"):
    """Render a stored UTC timestamp in the display timezone."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    return value.astimezone(pytz.timezone(app.config['DISPLAY_TIMEZONE'])).strftime(fmt)

@app.template_filter("label")
def label(value):
    return (value or "").replace("_", " ").capitalize()

# ================= SESSION GATE =================

@app.route("/")
def index():
    user = current_user if current_user.is_authenticated else None
    view = select_view(
        user,
        user.profile if user else None,
        show_form=request.args.get("view") == "new",
        sign_out_fn=sign_out,
    )

    if view.kind is View.LOGIN_REDIRECT:
        return redirect(url_for('accounts.login'))
    if view.kind is View.STUDENT:
        return redirect(url_for('complaints.student_dashboard'))
    if view.kind is View.COMPLAINT_FORM:
        return redirect(url_for('complaints.new_complaint'))
    if view.kind is View.ADMIN:
        return redirect(url_for('complaints.admin_dashboard'))
    return render_template('accounts/profile_missing.html', context=view.context)

@app.route("/login")
def login_redirect():
    return redirect(url_for('accounts.login'))

@app.route("/logout")
def logout_redirect():
    return redirect(url_for('accounts.logout'))

if __name__ == "__main__":
    app.run(debug=False)
