import os

# config.Config reads DATABASE_URL at import time
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from types import SimpleNamespace

import pytest

from bugvisits import create_app
from bugvisits.context import RequestContext
from bugvisits.extensions import db
from bugvisits.models import Bug, BugCc, Group, User

USERS = ("alice", "bob", "carol", "dave", "quinn", "mallory", "zoe")


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "WTF_CSRF_ENABLED": False,
        "USE_QA_CONTACT": True,
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seed(app):
    """
    bug 1  public; alice reports, bob assigned, quinn QA, carol cc
    bug 2  public; bob reports and is assigned
    bug 3  "sec-hole", security group; alice reports, dave assigned
    bug 4  "login-page", public; carol reports, bob assigned
    bug 5  security group, reporter locked out; mallory reports, dave assigned
    dave is the only member of the security group; zoe is disabled.
    """
    with app.app_context():
        users = {}
        for name in USERS:
            u = User(email=f"{name}@tracker.org", name=name.title(), api_key=f"{name}-key")
            u.set_password(f"{name}-password")
            db.session.add(u)
            users[name] = u
        users["zoe"].is_active = 0

        security = Group(name="security", description="Security-sensitive bugs")
        security.members.append(users["dave"])
        db.session.add(security)
        db.session.flush()

        bugs = [
            Bug(summary="Crash on start", reporter_id=users["alice"].id,
                assigned_to_id=users["bob"].id, qa_contact_id=users["quinn"].id,
                cc_entries=[BugCc(user_id=users["carol"].id)]),
            Bug(summary="Typo in docs", reporter_id=users["bob"].id,
                assigned_to_id=users["bob"].id),
            Bug(summary="Session fixation", alias="sec-hole", reporter_id=users["alice"].id,
                assigned_to_id=users["dave"].id, groups=[security]),
            Bug(summary="Login page slow", alias="login-page", reporter_id=users["carol"].id,
                assigned_to_id=users["bob"].id),
            Bug(summary="Private report", reporter_id=users["mallory"].id,
                assigned_to_id=users["dave"].id, reporter_accessible=False, groups=[security]),
        ]
        db.session.add_all(bugs)
        db.session.commit()

        return SimpleNamespace(
            users={name: u.id for name, u in users.items()},
            bugs=[b.id for b in bugs],
        )


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def context_for(app_ctx):
    def _make(user_id, use_qa_contact=True):
        user = db.session.get(User, user_id)
        return RequestContext(user=user, session=db.session, use_qa_contact=use_qa_contact)
    return _make


@pytest.fixture
def api_headers():
    def _headers(name):
        return {"X-BUGZILLA-API-KEY": f"{name}-key"}
    return _headers
