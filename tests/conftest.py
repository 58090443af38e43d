"""
Test configuration and fixtures
"""
import os
import tempfile
import pytest

# Set testing environment before the app module reads it
os.environ['DB_URL'] = 'sqlite://'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['MAIL_SUPPRESS_SEND'] = 'True'
os.environ['UPLOAD_FOLDER'] = tempfile.mkdtemp(prefix='complaint-uploads-')
os.environ['COMPLAINT_NOTIFIERS'] = 'inapp'

from app import app as flask_app
from extensions import db
from accounts.models import User, Profile
from accounts.context import SessionContext

PASSWORD = 'testpassword123'


@pytest.fixture
def app(tmp_path):
    """Fresh tables and upload folder for each test"""
    flask_app.config.update(
        TESTING=True,
        UPLOAD_FOLDER=str(tmp_path / 'uploads'),
        COMPLAINT_NOTIFIERS='inapp',
        ALLOW_ADMIN_SIGNUP=False,
    )
    with flask_app.app_context():
        db.drop_all()
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(email, role='student', full_name='Test User', student_id='S-001'):
        user = User(email=email)
        user.set_password(PASSWORD)
        user.profile = Profile(
            full_name=full_name,
            email=email,
            role=role,
            student_id=student_id if role == 'student' else None,
        )
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


@pytest.fixture
def student(make_user):
    return make_user('asha@college.edu', full_name='Asha Rao', student_id='CS2024-17')


@pytest.fixture
def admin(make_user):
    return make_user('dean@college.edu', role='admin', full_name='Dean Office')


def _login(client, email):
    return client.post('/accounts/login', data={'email': email, 'password': PASSWORD})


@pytest.fixture
def login():
    return _login


@pytest.fixture
def student_client(client, student):
    _login(client, student.email)
    return client


@pytest.fixture
def admin_client(client, admin):
    _login(client, admin.email)
    return client


@pytest.fixture
def context_for():
    def _context_for(user):
        return SessionContext(user=user, profile=user.profile, sign_out=lambda: None)
    return _context_for
