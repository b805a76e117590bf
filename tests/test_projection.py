from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from bugvisits.utils.projection import ResultProjector, field_names, filter_fields
from bugvisits.utils.wire import as_datetime, as_int

TS = datetime(2026, 3, 1, 14, 5, 9)


def test_record_has_id_and_wire_timestamp():
    assert ResultProjector().to_record("42", TS) == {
        "id": 42,
        "last_visit_ts": "2026-03-01T14:05:09Z",
    }


def test_missing_timestamp_is_null():
    assert ResultProjector().to_record(7, None) == {"id": 7, "last_visit_ts": None}


def test_aware_timestamps_are_rendered_in_utc():
    aware = datetime(2026, 3, 1, 16, 5, 9, tzinfo=timezone(timedelta(hours=2)))
    assert as_datetime(aware) == "2026-03-01T14:05:09Z"
    assert as_int(None) is None


@pytest.mark.parametrize("include, exclude, expected", [
    (["id"], None, {"id": 1}),
    ("last_visit_ts", None, {"last_visit_ts": "2026-03-01T14:05:09Z"}),
    (["id", "bogus"], None, {"id": 1}),
    (None, ["last_visit_ts"], {"id": 1}),
    (["id", "last_visit_ts"], "id", {"last_visit_ts": "2026-03-01T14:05:09Z"}),
    (["_all"], None, {"id": 1, "last_visit_ts": "2026-03-01T14:05:09Z"}),
    (["_default"], ["id"], {"last_visit_ts": "2026-03-01T14:05:09Z"}),
])
def test_field_selection(include, exclude, expected):
    projector = ResultProjector(include_fields=include, exclude_fields=exclude)
    assert projector.to_record(1, TS) == expected


def test_filter_fields_with_nothing_requested_keeps_record():
    record = {"id": 1, "last_visit_ts": None}
    assert filter_fields(record) == record
    assert field_names(" id , ,last_visit_ts") == ["id", "last_visit_ts"]


def test_render_keeps_input_order():
    visits = [SimpleNamespace(bug_id=3, last_visit_ts=TS), SimpleNamespace(bug_id=1, last_visit_ts=None)]
    params = SimpleNamespace(include_fields=["id"], exclude_fields=None)
    assert ResultProjector.from_params(params).render(visits) == [{"id": 3}, {"id": 1}]
