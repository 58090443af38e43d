from types import SimpleNamespace

import pytest

from accounts.context import View, select_view


def user(id=1):
    return SimpleNamespace(id=id)


def profile(role):
    return SimpleNamespace(role=role, full_name='Someone')


def test_loading_wins_over_everything():
    assert select_view(user(), profile('admin'), loading=True).kind is View.LOADING


def test_anonymous_is_sent_to_login():
    view = select_view(None, None)
    assert view.kind is View.LOGIN_REDIRECT
    assert view.context is None


@pytest.mark.parametrize('role, show_form, expected', [
    ('student', False, View.STUDENT),
    ('student', True, View.COMPLAINT_FORM),
    ('admin', False, View.ADMIN),
    ('admin', True, View.ADMIN),
])
def test_role_selects_dashboard(role, show_form, expected):
    assert select_view(user(), profile(role), show_form=show_form).kind is expected


def test_missing_profile_renders_no_dashboard():
    view = select_view(user(), None)
    assert view.kind is View.PROFILE_MISSING
    assert view.context.role is None


def test_context_carries_identity_and_sign_out():
    calls = []
    view = select_view(user(42), profile('student'), sign_out_fn=lambda: calls.append(True))

    assert view.context.user_id == 42
    assert view.context.role == 'student'
    view.context.sign_out()
    assert calls == [True]
