# config.py
import os
from pathlib import Path

try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass


# ---- base directories -------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent
INSTANCE_DIR = os.environ.get("FLASK_INSTANCE_PATH", str(BASE_DIR / "instance"))


# ---- tiny helpers -----------------------------------------------------------
def _to_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return str(value).strip().lower() in {"1", "true", "yes", "on", "y"}


def _database_url() -> str:
    raw = os.getenv("DATABASE_URL", "").strip()

    # Heroku/Render style URLs; SQLAlchemy wants the dialect+driver form
    if raw.startswith("postgres://"):
        raw = raw.replace("postgres://", "postgresql+psycopg2://", 1)

    if not raw:
        raise RuntimeError("DATABASE_URL is not set.")
    return raw


# ----------------------------------------------------------------------------
class Config:
    """
    Base configuration loaded by the app factory via:
      app.config.from_object("config.Config")
    """

    # ------------ Core / Security ------------
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")

    # ------------ Database ------------
    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # ------------ Bug access rules ------------
    # QA contacts count as involved/allowed only when the tracker uses them
    USE_QA_CONTACT = _to_bool(os.getenv("USE_QA_CONTACT", "1"), default=True)

    # ------------ REST API ------------
    REST_URL_PREFIX = os.getenv("REST_URL_PREFIX", "/rest")
    API_KEY_HEADER = os.getenv("API_KEY_HEADER", "X-BUGZILLA-API-KEY")
    API_KEY_PARAM = os.getenv("API_KEY_PARAM", "api_key")

    # ------------ Logging ------------
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    REQUEST_TRACE = _to_bool(os.getenv("REQUEST_TRACE", "1"), default=True)

    # ------------ Cookies ------------
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = _to_bool(os.getenv("SESSION_COOKIE_SECURE"), default=False)
    REMEMBER_COOKIE_SAMESITE = "Lax"
    REMEMBER_COOKIE_SECURE = SESSION_COOKIE_SECURE
