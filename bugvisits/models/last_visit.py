# bugvisits/models/last_visit.py
from sqlalchemy import UniqueConstraint, bindparam, select, text

from bugvisits.extensions import db


class BugUserLastVisit(db.Model):
    __tablename__ = "bug_user_last_visit"
    __table_args__ = (
        UniqueConstraint("user_id", "bug_id", name="bug_user_last_visit_idx"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    bug_id = db.Column(db.Integer, db.ForeignKey("bugs.id", ondelete="CASCADE"), nullable=False, index=True)
    # naive UTC
    last_visit_ts = db.Column(db.DateTime, nullable=False)

    @classmethod
    def record(cls, session, user_id: int, bug_id: int, last_visit_ts) -> None:
        """Insert or overwrite the (user, bug) visit row."""
        session.execute(
            text("""
                INSERT INTO bug_user_last_visit (user_id, bug_id, last_visit_ts)
                VALUES (:uid, :bid, :ts)
                ON CONFLICT (user_id, bug_id)
                DO UPDATE SET last_visit_ts = excluded.last_visit_ts
            """).bindparams(bindparam("ts", type_=db.DateTime)),
            {"uid": int(user_id), "bid": int(bug_id), "ts": last_visit_ts},
        )

    @classmethod
    def timestamps_for(cls, session, user_id: int, bug_ids=None) -> list[tuple[int, object]]:
        """(bug_id, last_visit_ts) rows for one user, in store order."""
        stmt = (
            select(cls.bug_id, cls.last_visit_ts)
            .where(cls.user_id == user_id)
            .order_by(cls.id.asc())
        )
        if bug_ids is not None:
            if not bug_ids:
                return []
            stmt = stmt.where(cls.bug_id.in_(list(bug_ids)))
        return [(row.bug_id, row.last_visit_ts) for row in session.execute(stmt)]

    def __repr__(self):
        return f"<BugUserLastVisit user={self.user_id} bug={self.bug_id} ts={self.last_visit_ts}>"
