# bugvisits/services/last_visit.py
"""
Record and look up when a user last looked at a bug.

Writes are all-or-nothing per call: every bug in the batch gets the same
database timestamp, and one bad id rolls back every row of the batch.
Reads only ever return bugs the caller can see.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from bugvisits.errors import AuthorizationError, ValidationError
from bugvisits.models import BugUserLastVisit
from bugvisits.services.bugs import check_bug, find_bug
from bugvisits.services.involvement import is_involved
from bugvisits.services.visibility import numeric_ids
from bugvisits.utils.db import db_now, transaction

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class VisitRecord:
    bug_id: int
    last_visit_ts: datetime | None


class BatchVisitWriter:
    def __init__(self, ctx):
        self.ctx = ctx

    def update(self, ids) -> list[VisitRecord]:
        ctx = self.ctx
        ctx.require_login()

        ids = list(ids or [])
        if not ids:
            raise ValidationError.required("ids")

        ctx.visibility.prime(ids)

        records = []
        with transaction(ctx.session):
            now = db_now(ctx.session)
            for ident in ids:
                bug = check_bug(ctx, ident)
                if not is_involved(bug, ctx.user, ctx.use_qa_contact):
                    raise AuthorizationError.not_involved(bug.id)

                BugUserLastVisit.record(ctx.session, ctx.user.id, bug.id, now)
                records.append(VisitRecord(bug.id, now))

        log.info("user=%s last visit set on %d bug(s) at %s", ctx.user.id, len(records), now)
        return records


class VisitReader:
    def __init__(self, ctx):
        self.ctx = ctx

    def get(self, ids=None) -> list[VisitRecord]:
        """
        With `ids` (even an empty list): one entry per visible bug among
        them, in input order, with None where no visit was recorded.
        Without `ids`: every visit the user has recorded on a bug they can
        still see.
        """
        ctx = self.ctx
        ctx.require_login()

        if ids is None:
            return self._history()

        ids = list(ids)
        ctx.visibility.prime(ids)

        bug_ids = []
        for ident in ids:
            bug_id = self._bug_id(ident)
            # the primed visibility query only matches bugs that exist
            if bug_id is None or not ctx.visibility.is_visible(bug_id):
                continue
            bug_ids.append(bug_id)

        stamps = dict(BugUserLastVisit.timestamps_for(ctx.session, ctx.user.id, set(bug_ids)))
        return [VisitRecord(bug_id, stamps.get(bug_id)) for bug_id in bug_ids]

    def _bug_id(self, ident) -> int | None:
        numbers = numeric_ids([ident])
        if numbers:
            return numbers[0]
        bug = find_bug(self.ctx, ident)
        return bug.id if bug is not None else None

    def _history(self) -> list[VisitRecord]:
        ctx = self.ctx
        rows = BugUserLastVisit.timestamps_for(ctx.session, ctx.user.id)
        ctx.visibility.prime([bug_id for bug_id, _ in rows])
        return [
            VisitRecord(bug_id, ts)
            for bug_id, ts in rows
            if ctx.visibility.is_visible(bug_id)
        ]
