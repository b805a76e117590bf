# bugvisits/api/routes.py
from flask import current_app, jsonify, request
from flask_login import login_required
from pydantic import ValidationError as SchemaError

from bugvisits.api import rest_bp
from bugvisits.api.resource import BugUserLastVisitResource
from bugvisits.api.schemas import LastVisitParams
from bugvisits.context import RequestContext
from bugvisits.errors import ValidationError

LIST_PARAMS = ("ids", "include_fields", "exclude_fields")


def _collect_params(bug_id=None) -> LastVisitParams:
    """Merge JSON body and query string, then validate once."""
    raw = {}
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        raw.update(body)

    for key in LIST_PARAMS:
        values = request.args.getlist(key)
        if values:
            raw[key] = values

    # /bug_user_last_visit/<id> always means exactly that one bug
    if bug_id is not None:
        raw["ids"] = [bug_id]

    try:
        return LastVisitParams.model_validate(raw)
    except SchemaError as e:
        first = e.errors()[0]
        param = str(first["loc"][0]) if first.get("loc") else "params"
        raise ValidationError.invalid(param, first.get("msg", "invalid value")) from e


@rest_bp.post("/bug_user_last_visit", endpoint="update_last_visit")
@rest_bp.post("/bug_user_last_visit/<int:bug_id>", endpoint="update_last_visit")
@login_required
def update_last_visit(bug_id=None):
    params = _collect_params(bug_id)
    resource = BugUserLastVisitResource(RequestContext.from_request())
    result = resource.update(params)
    current_app.logger.debug("update_last_visit ids=%r -> %d record(s)", params.ids, len(result))
    return jsonify(result)


@rest_bp.get("/bug_user_last_visit", endpoint="get_last_visit")
@rest_bp.get("/bug_user_last_visit/<int:bug_id>", endpoint="get_last_visit")
@login_required
def get_last_visit(bug_id=None):
    params = _collect_params(bug_id)
    resource = BugUserLastVisitResource(RequestContext.from_request())
    return jsonify(resource.get(params))
