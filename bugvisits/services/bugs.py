# bugvisits/services/bugs.py
"""Resolve caller-supplied bug ids and aliases to Bug rows."""
from __future__ import annotations

from sqlalchemy import func, select

from bugvisits.errors import AuthorizationError, NotFoundError
from bugvisits.models import Bug
from bugvisits.services.visibility import MAX_BUG_ID, bug_number


def _lookup(ctx, ident) -> Bug | None:
    number = bug_number(ident)
    if number is not None:
        if not 0 < number <= MAX_BUG_ID:
            return None
        return ctx.session.get(Bug, number)
    return ctx.session.execute(
        select(Bug).where(func.lower(Bug.alias) == ident.strip().lower())
    ).scalar_one_or_none()


def _is_usable(ident) -> bool:
    if isinstance(ident, bool):
        return False
    if isinstance(ident, int):
        return ident > 0
    return isinstance(ident, str) and bool(ident.strip())


def find_bug(ctx, ident) -> Bug | None:
    """The bug `ident` names, or None. No access check; cached per request."""
    if not _is_usable(ident):
        return None
    number = bug_number(ident)
    key = number if number is not None else ident.strip().lower()
    if key not in ctx.bugs:
        bug = _lookup(ctx, ident)
        ctx.bugs[key] = bug
        if bug is not None:
            ctx.bugs[bug.id] = bug
    return ctx.bugs[key]


def check_bug(ctx, ident) -> Bug:
    """
    Resolve `ident` and make sure the acting user may see the bug.

    Raises NotFoundError when `ident` names no bug and AuthorizationError
    (bug_access_denied) when it names one the user cannot see.
    """
    if not _is_usable(ident):
        raise NotFoundError("improper_bug_id", bug_id=ident)

    bug = find_bug(ctx, ident)
    if bug is None:
        if bug_number(ident) is not None:
            raise NotFoundError("bug_id_does_not_exist", bug_id=ident)
        raise NotFoundError("invalid_bug_id_or_alias", bug_id=ident)

    if not ctx.visibility.is_visible(bug.id):
        raise AuthorizationError.access_denied(ident)
    return bug
