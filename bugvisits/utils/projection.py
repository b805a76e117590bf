# bugvisits/utils/projection.py
"""
Field projection for API records.

Callers narrow a response with ``include_fields`` and ``exclude_fields``.
Both accept a list of names or a comma-separated string. ``_all`` and
``_default`` in ``include_fields`` keep every field; an exclusion always
wins over an inclusion; names that are not in the record are ignored.
"""
from bugvisits.utils.wire import as_datetime, as_int

KEEP_ALL = {"_all", "_default"}


def field_names(value) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(v).strip() for v in value if str(v).strip()]


def filter_fields(record: dict, include_fields=None, exclude_fields=None) -> dict:
    include = set(field_names(include_fields))
    exclude = set(field_names(exclude_fields))

    if include and not (include & KEEP_ALL):
        record = {k: v for k, v in record.items() if k in include}
    if exclude:
        record = {k: v for k, v in record.items() if k not in exclude}
    return record


class ResultProjector:
    """Builds the wire record for one bug and trims it to the requested fields."""

    def __init__(self, include_fields=None, exclude_fields=None):
        self.include_fields = field_names(include_fields)
        self.exclude_fields = field_names(exclude_fields)

    @classmethod
    def from_params(cls, params) -> "ResultProjector":
        return cls(
            include_fields=getattr(params, "include_fields", None),
            exclude_fields=getattr(params, "exclude_fields", None),
        )

    def to_record(self, bug_id, last_visit_ts) -> dict:
        record = {
            "id": as_int(bug_id),
            "last_visit_ts": as_datetime(last_visit_ts),
        }
        return filter_fields(record, self.include_fields, self.exclude_fields)

    def render(self, visits) -> list[dict]:
        return [self.to_record(v.bug_id, v.last_visit_ts) for v in visits]
