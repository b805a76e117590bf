# bugvisits/cli.py
import click
from flask.cli import with_appcontext
from sqlalchemy import func, select

from bugvisits.extensions import db
from bugvisits.models import Bug, BugCc, BugUserLastVisit, Group, User
from bugvisits.utils.wire import as_datetime


def _user_by_email(email: str) -> User:
    email = (email or "").strip().lower()
    user = db.session.execute(
        select(User).where(func.lower(User.email) == email)
    ).scalar_one_or_none()
    if user is None:
        raise click.ClickException(f"No such user: {email}")
    return user


@click.command("user-create")
@click.argument("email")
@click.argument("password")
@click.option("--name", default=None)
@with_appcontext
def user_create_cmd(email, password, name):
    """Create a user with the given credentials."""
    email = email.strip().lower()
    if db.session.execute(select(User).where(User.email == email)).scalar_one_or_none():
        click.echo(f"User already exists: {email}")
        return
    u = User(name=name or email.split("@")[0], email=email)
    u.set_password(password)
    db.session.add(u)
    db.session.commit()
    click.echo(f"Created user: {email} (id {u.id})")


@click.command("api-key-create")
@click.argument("email")
@with_appcontext
def api_key_create_cmd(email):
    """Issue (or replace) the API key of a user and print it."""
    user = _user_by_email(email)
    key = user.new_api_key()
    db.session.commit()
    click.echo(key)


@click.command("bug-create")
@click.argument("summary")
@click.option("--reporter", required=True, help="Reporter email.")
@click.option("--assignee", required=True, help="Assignee email.")
@click.option("--qa", "qa_contact", default=None, help="QA contact email.")
@click.option("--alias", default=None)
@click.option("--cc", multiple=True, help="Email to add to the cc list (repeatable).")
@click.option("--group", "groups", multiple=True, help="Restrict the bug to this group (repeatable).")
@with_appcontext
def bug_create_cmd(summary, reporter, assignee, qa_contact, alias, cc, groups):
    """File a bug; mostly useful for seeding a development database."""
    bug = Bug(
        summary=summary,
        alias=alias or None,
        reporter_id=_user_by_email(reporter).id,
        assigned_to_id=_user_by_email(assignee).id,
        qa_contact_id=_user_by_email(qa_contact).id if qa_contact else None,
    )
    for email in cc:
        bug.cc_entries.append(BugCc(user_id=_user_by_email(email).id))
    for name in groups:
        group = db.session.execute(select(Group).where(Group.name == name)).scalar_one_or_none()
        if group is None:
            group = Group(name=name)
            db.session.add(group)
        bug.groups.append(group)

    db.session.add(bug)
    db.session.commit()
    click.echo(f"Created bug {bug.id}{f' ({bug.alias})' if bug.alias else ''}")


@click.command("last-visits")
@click.argument("email")
@click.option("--limit", default=50, show_default=True, type=int)
@with_appcontext
def last_visits_cmd(email, limit):
    """Print the bugs a user has visited, most recent first."""
    user = _user_by_email(email)
    rows = db.session.execute(
        select(BugUserLastVisit.bug_id, BugUserLastVisit.last_visit_ts)
        .where(BugUserLastVisit.user_id == user.id)
        .order_by(BugUserLastVisit.last_visit_ts.desc(), BugUserLastVisit.bug_id.asc())
        .limit(limit)
    ).all()

    if not rows:
        click.echo(f"No visits recorded for {user.email}")
        return
    click.echo(f"Last visits for {user.email}:")
    for bug_id, ts in rows:
        click.echo(f"  {bug_id:>6}  {as_datetime(ts)}")


def register_cli(app):
    app.cli.add_command(user_create_cmd)
    app.cli.add_command(api_key_create_cmd)
    app.cli.add_command(bug_create_cmd)
    app.cli.add_command(last_visits_cmd)
