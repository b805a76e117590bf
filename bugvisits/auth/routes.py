# bugvisits/auth/routes.py
from flask import current_app, jsonify, request
from flask_login import current_user, login_user, logout_user
from sqlalchemy import func, select

from bugvisits.auth import auth_bp
from bugvisits.auth.forms import LoginForm
from bugvisits.errors import AuthenticationRequired, ValidationError
from bugvisits.extensions import db, login_manager
from bugvisits.models import User


@login_manager.user_loader
def load_user(user_id: str):
    try:
        return db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        return None


@login_manager.request_loader
def load_user_from_api_key(req):
    """Stateless login for API clients: key in a header or query param."""
    header = current_app.config.get("API_KEY_HEADER", "X-BUGZILLA-API-KEY")
    param = current_app.config.get("API_KEY_PARAM", "api_key")
    key = (req.headers.get(header) or req.args.get(param) or "").strip()
    if not key:
        return None

    user = db.session.execute(select(User).where(User.api_key == key)).scalar_one_or_none()
    if user is None or not user.is_active:
        current_app.logger.info("API key login rejected for %s %s", req.method, req.path)
        return None
    return user


@login_manager.unauthorized_handler
def _unauthorized():
    raise AuthenticationRequired()


@auth_bp.post("/login", endpoint="login")
def login():
    form = LoginForm()
    if not form.validate_on_submit():
        field, errors = next(iter(form.errors.items()))
        raise ValidationError.invalid(field, errors[0])

    email = (form.email.data or "").strip().lower()
    user = db.session.execute(
        select(User).where(func.lower(User.email) == email)
    ).scalar_one_or_none()

    if user is None or not user.check_password(form.password.data or ""):
        current_app.logger.warning("Failed login for %s", email)
        raise AuthenticationRequired("invalid_login")

    if not login_user(user, remember=bool(form.remember.data)):
        raise AuthenticationRequired("invalid_login")

    current_app.logger.info("User %s logged in", user.id)
    return jsonify(id=user.id, email=user.email, name=user.name)


@auth_bp.post("/logout", endpoint="logout")
def logout():
    uid = current_user.id if current_user.is_authenticated else None
    logout_user()
    if uid is not None:
        current_app.logger.info("User %s logged out", uid)
    return jsonify(ok=True)
