# bugvisits/errors.py
"""
Error taxonomy for the last-visit API.

Every error carries a stable string key (``name``), a numeric ``code`` that
clients can switch on, and the HTTP status the JSON error handler answers
with. Write-path errors are raised inside the batch transaction, so raising
one is enough to roll the whole batch back.
"""
from __future__ import annotations


class LastVisitError(Exception):
    http_status = 400
    default_name = "unknown_error"

    # name -> (code, message template)
    messages: dict[str, tuple[int, str]] = {
        "unknown_error": (32000, "An unknown error occurred."),
    }

    def __init__(self, name: str | None = None, message: str | None = None, **details):
        self.name = name or self.default_name
        code, template = self.messages.get(self.name, self.messages[self.default_name])
        self.code = code
        self.details = details
        self.message = message or template.format(**details)
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "error": True,
            "code": self.code,
            "name": self.name,
            "message": self.message,
        }


class AuthenticationRequired(LastVisitError):
    http_status = 401
    default_name = "login_required"
    messages = {
        "login_required": (410, "You must log in before using this part of the API."),
        "invalid_login": (300, "The username or password you entered is not valid."),
    }


class ValidationError(LastVisitError):
    http_status = 400
    default_name = "param_required"
    messages = {
        "param_required": (50, "The function requires a '{param}' argument, and that argument was not set."),
        "param_invalid": (51, "Invalid value for '{param}': {reason}"),
    }

    @classmethod
    def required(cls, param: str) -> "ValidationError":
        return cls("param_required", param=param)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ValidationError":
        return cls("param_invalid", param=param, reason=reason)


class AuthorizationError(LastVisitError):
    http_status = 403
    default_name = "user_not_involved"
    messages = {
        "user_not_involved": (1300, "You are not involved in bug {bug_id}."),
        "bug_access_denied": (102, "You are not authorized to access bug {bug_id}."),
    }

    @classmethod
    def not_involved(cls, bug_id: int) -> "AuthorizationError":
        return cls("user_not_involved", bug_id=bug_id)

    @classmethod
    def access_denied(cls, bug_id) -> "AuthorizationError":
        return cls("bug_access_denied", bug_id=bug_id)


class NotFoundError(LastVisitError):
    http_status = 404
    default_name = "bug_id_does_not_exist"
    messages = {
        "bug_id_does_not_exist": (101, "Bug {bug_id} does not exist."),
        "invalid_bug_id_or_alias": (100, "'{bug_id}' is not a valid bug number nor an alias to a bug."),
        "improper_bug_id": (103, "'{bug_id}' is not a valid bug id."),
    }
