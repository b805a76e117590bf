# bugvisits/api/__init__.py
from flask import Blueprint

rest_bp = Blueprint("rest_bp", __name__)

from . import routes  # noqa: E402,F401
