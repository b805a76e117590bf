# bugvisits/services/visibility.py
"""
Request-scoped cache of "can this user see bug N" decisions.

`prime()` answers a whole batch with one query so that the per-bug checks
made later in the request never go back to the database one bug at a time.
Only numeric ids can be primed; aliases are resolved (and checked) one by
one by the bug resolver.
"""
from __future__ import annotations

import logging
import re

from sqlalchemy import and_, exists, or_, select

from bugvisits.models import Bug, BugCc, BugGroupMap, UserGroupMap

log = logging.getLogger(__name__)

_NUMERIC_RE = re.compile(r"^[0-9]+$")

# bugs.id is a 32-bit INTEGER; larger numbers can never name a bug
MAX_BUG_ID = 2**31 - 1


def bug_number(ident) -> int | None:
    """`ident` as a number when it is one (int or digit string), else None."""
    if isinstance(ident, bool):
        return None
    if isinstance(ident, int):
        return ident
    if isinstance(ident, str) and _NUMERIC_RE.match(ident.strip()):
        return int(ident.strip())
    return None


def numeric_ids(identifiers) -> list[int]:
    """Ids from `identifiers` that are plain numbers in bug id range, in input order."""
    out = []
    for ident in identifiers or []:
        number = bug_number(ident)
        if number is not None and 0 < number <= MAX_BUG_ID:
            out.append(number)
    return out


def visible_bugs_stmt(bug_ids, user_id: int | None, use_qa_contact: bool = True):
    """SELECT of the ids among `bug_ids` that `user_id` may see."""
    user_groups = select(UserGroupMap.group_id).where(UserGroupMap.user_id == user_id)
    # any group on the bug the user is not a member of locks them out...
    locked_out = exists().where(
        BugGroupMap.bug_id == Bug.id,
        BugGroupMap.group_id.not_in(user_groups),
    )
    allowed = [~locked_out]

    # ...unless they hold a role on the bug that keeps access
    if user_id is not None:
        allowed += [
            Bug.assigned_to_id == user_id,
            and_(Bug.reporter_accessible.is_(True), Bug.reporter_id == user_id),
            and_(
                Bug.cclist_accessible.is_(True),
                exists().where(BugCc.bug_id == Bug.id, BugCc.user_id == user_id),
            ),
        ]
        if use_qa_contact:
            allowed.append(Bug.qa_contact_id == user_id)

    return select(Bug.id).where(Bug.id.in_(list(bug_ids)), or_(*allowed))


class VisibilityCache:
    def __init__(self, session, user, use_qa_contact: bool = True):
        self.session = session
        self.user = user
        self.use_qa_contact = use_qa_contact
        self.lookups = 0
        self._visible: dict[int, bool] = {}

    @property
    def user_id(self) -> int | None:
        if not getattr(self.user, "is_authenticated", False):
            return None
        return getattr(self.user, "id", None)

    def prime(self, identifiers) -> None:
        wanted = [i for i in dict.fromkeys(numeric_ids(identifiers)) if i not in self._visible]
        if not wanted:
            return

        self.lookups += 1
        stmt = visible_bugs_stmt(wanted, self.user_id, self.use_qa_contact)
        visible = set(self.session.execute(stmt).scalars())
        for bug_id in wanted:
            self._visible[bug_id] = bug_id in visible

        log.debug(
            "visibility primed for user=%s: %d requested, %d visible",
            self.user_id, len(wanted), len(visible),
        )

    def is_visible(self, bug_id: int) -> bool:
        if bug_id not in self._visible:
            self.prime([bug_id])
        return self._visible.get(bug_id, False)
