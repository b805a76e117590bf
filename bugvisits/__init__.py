# bugvisits/__init__.py
import logging
import uuid
from pathlib import Path

from flask import Flask, g, jsonify, request
from flask_login import current_user

from bugvisits.errors import LastVisitError
from bugvisits.extensions import csrf, db, login_manager, migrate


def create_app(test_config=None):
    app = Flask(__name__, instance_relative_config=True)
    Path(app.instance_path).mkdir(parents=True, exist_ok=True)

    # 1) Base config object (config.py at project root)
    app.config.from_object("config.Config")

    # 2) Instance overrides (instance/config.py) – safe if missing
    app.config.from_pyfile("config.py", silent=True)

    # 3) Environment overrides (e.g., FLASK_SQLALCHEMY_DATABASE_URI)
    app.config.from_prefixed_env()

    # 4) Explicit overrides (tests)
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")), logging.INFO))

    # Init extensions AFTER config
    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)
    login_manager.init_app(app)

    from bugvisits import models  # noqa: F401  (register tables on db.metadata)

    with app.app_context():
        db.create_all()

    _register_error_handlers(app)
    if app.config.get("REQUEST_TRACE", True):
        _install_request_trace(app)

    # Blueprints
    from bugvisits.api import rest_bp
    from bugvisits.auth import auth_bp

    app.register_blueprint(rest_bp, url_prefix=app.config.get("REST_URL_PREFIX") or None)
    app.register_blueprint(auth_bp)

    # JSON API: callers authenticate with a session cookie or an API key
    csrf.exempt(rest_bp)
    csrf.exempt(auth_bp)

    from bugvisits.cli import register_cli
    register_cli(app)

    @app.route("/healthz")
    def healthz():
        return "ok", 200

    return app


def _register_error_handlers(app):
    @app.errorhandler(LastVisitError)
    def _handle_last_visit_error(err):
        app.logger.info(
            "[%s] %s %s failed: %s (%s)",
            getattr(g, "reqid", "????"), request.method, request.path, err.name, err.message,
        )
        return jsonify(err.to_dict()), err.http_status


def _install_request_trace(app):
    @app.before_request
    def _trace_in():
        g.reqid = str(uuid.uuid4())[:8]
        uid = current_user.id if getattr(current_user, "is_authenticated", False) else None
        key_param = app.config.get("API_KEY_PARAM")
        args = {k: v for k, v in request.args.items() if k != key_param}
        app.logger.info(
            "[%s] → %s %s ep=%s args=%s user_id=%s",
            g.reqid, request.method, request.path, request.endpoint, args, uid,
        )

    @app.after_request
    def _trace_out(resp):
        rid = getattr(g, "reqid", "????")
        app.logger.info("[%s] ← %s", rid, resp.status)
        return resp
