from sqlalchemy import select

from bugvisits.extensions import db
from bugvisits.models import Bug, BugUserLastVisit, User


def test_user_create_and_api_key(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["user-create", "Zed@Tracker.org", "zed-password", "--name", "Zed"])
    assert result.exit_code == 0
    assert "Created user: zed@tracker.org" in result.output

    result = runner.invoke(args=["user-create", "zed@tracker.org", "other"])
    assert "already exists" in result.output

    result = runner.invoke(args=["api-key-create", "zed@tracker.org"])
    assert result.exit_code == 0
    key = result.output.strip()
    assert len(key) == 40

    with app.app_context():
        user = db.session.execute(select(User).where(User.email == "zed@tracker.org")).scalar_one()
        assert user.api_key == key
        assert user.check_password("zed-password")


def test_api_key_for_unknown_user_fails(app):
    result = app.test_cli_runner().invoke(args=["api-key-create", "ghost@tracker.org"])
    assert result.exit_code != 0
    assert "No such user" in result.output


def test_bug_create_with_group_and_cc(app, seed):
    result = app.test_cli_runner().invoke(args=[
        "bug-create", "Leaky tokens",
        "--reporter", "alice@tracker.org", "--assignee", "bob@tracker.org",
        "--alias", "leaky", "--cc", "carol@tracker.org", "--group", "security",
    ])
    assert result.exit_code == 0, result.output
    assert "(leaky)" in result.output

    with app.app_context():
        bug = db.session.execute(select(Bug).where(Bug.alias == "leaky")).scalar_one()
        assert bug.cc_user_ids == {seed.users["carol"]}
        assert [g.name for g in bug.groups] == ["security"]
        assert bug.creation_ts is not None and bug.creation_ts.tzinfo is None


def test_last_visits_report(app, seed, client, api_headers):
    runner = app.test_cli_runner()
    assert "No visits recorded" in runner.invoke(args=["last-visits", "bob@tracker.org"]).output

    b1, b2 = seed.bugs[:2]
    client.post("/rest/bug_user_last_visit", json={"ids": [b1, b2]}, headers=api_headers("bob"))

    result = runner.invoke(args=["last-visits", "bob@tracker.org"])
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines[0] == "Last visits for bob@tracker.org:"
    assert [int(line.split()[0]) for line in lines[1:]] == [b1, b2]

    with app.app_context():
        assert db.session.query(BugUserLastVisit).count() == 2
