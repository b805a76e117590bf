# bugvisits/models/__init__.py
from .auth import User, Group, UserGroupMap
from .bug import Bug, BugCc, BugGroupMap
from .last_visit import BugUserLastVisit

__all__ = [
    "User", "Group", "UserGroupMap",
    "Bug", "BugCc", "BugGroupMap",
    "BugUserLastVisit",
]
