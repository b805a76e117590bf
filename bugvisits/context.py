# bugvisits/context.py
"""
Per-request state for the last-visit operations.

The view builds one RequestContext and hands it to everything below it;
nothing under `services/` reaches for `current_user` or `db.session` on
its own.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from flask import current_app
from flask_login import current_user

from bugvisits.errors import AuthenticationRequired
from bugvisits.extensions import db
from bugvisits.services.visibility import VisibilityCache


@dataclass
class RequestContext:
    user: object
    session: object
    use_qa_contact: bool = True
    visibility: VisibilityCache | None = None
    bugs: dict = field(default_factory=dict)

    def __post_init__(self):
        if self.visibility is None:
            self.visibility = VisibilityCache(self.session, self.user, self.use_qa_contact)

    @classmethod
    def from_request(cls) -> "RequestContext":
        user = current_user._get_current_object()
        return cls(
            user=user,
            session=db.session,
            use_qa_contact=bool(current_app.config.get("USE_QA_CONTACT", True)),
        )

    @property
    def is_authenticated(self) -> bool:
        return bool(getattr(self.user, "is_authenticated", False))

    def require_login(self) -> None:
        if not self.is_authenticated:
            raise AuthenticationRequired()
