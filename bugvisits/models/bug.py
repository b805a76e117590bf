# bugvisits/models/bug.py
from datetime import datetime, timezone

from bugvisits.extensions import db


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Bug(db.Model):
    __tablename__ = "bugs"
    id = db.Column(db.Integer, primary_key=True)
    alias = db.Column(db.String(40), unique=True, nullable=True)
    summary = db.Column(db.String(255), nullable=False, default="")
    reporter_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    assigned_to_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    qa_contact_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=True, index=True)
    # reporter / cc members keep access to a group-restricted bug when set
    reporter_accessible = db.Column(db.Boolean, nullable=False, default=True)
    cclist_accessible = db.Column(db.Boolean, nullable=False, default=True)
    creation_ts = db.Column(db.DateTime, default=_utcnow, nullable=False)

    cc_entries = db.relationship(
        "BugCc",
        backref=db.backref("bug", lazy="joined"),
        cascade="all, delete-orphan",
        lazy="select",
    )
    groups = db.relationship("Group", secondary="bug_group_map", lazy="select")

    @property
    def cc_user_ids(self) -> set[int]:
        return {cc.user_id for cc in self.cc_entries}

    def __repr__(self):
        return f"<Bug {self.id}{' ' + self.alias if self.alias else ''}>"


class BugCc(db.Model):
    __tablename__ = "cc"
    bug_id = db.Column(db.Integer, db.ForeignKey("bugs.id", ondelete="CASCADE"), primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id", ondelete="CASCADE"), primary_key=True)


class BugGroupMap(db.Model):
    __tablename__ = "bug_group_map"
    bug_id = db.Column(db.Integer, db.ForeignKey("bugs.id", ondelete="CASCADE"), primary_key=True)
    group_id = db.Column(db.Integer, db.ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True)
