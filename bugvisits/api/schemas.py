# bugvisits/api/schemas.py
"""Request parameters accepted by the last-visit endpoints."""
from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

_NUMERIC_RE = re.compile(r"[0-9]+")


class LastVisitParams(BaseModel):
    """
    `ids` holds bug numbers and/or aliases. Numeric strings (as they arrive
    from a query string) become ints; anything else must be a non-empty
    alias string. `None` means "not supplied", which `get` treats as
    "all of my visits".
    """

    model_config = ConfigDict(extra="ignore")

    ids: list[int | str] | None = Field(default=None, description="Bug ids or aliases")
    include_fields: list[str] | None = None
    exclude_fields: list[str] | None = None

    @field_validator("ids", mode="before")
    @classmethod
    def _normalize_ids(cls, value):
        if value is None:
            return None
        if not isinstance(value, (list, tuple)):
            value = [value]

        out = []
        for item in value:
            if isinstance(item, bool):
                raise ValueError("ids must be bug numbers or aliases")
            if isinstance(item, int):
                out.append(item)
            elif isinstance(item, str) and item.strip():
                item = item.strip()
                out.append(int(item) if _NUMERIC_RE.fullmatch(item) else item)
            else:
                raise ValueError("ids must be bug numbers or aliases")
        return out

    @field_validator("include_fields", "exclude_fields", mode="before")
    @classmethod
    def _split_fields(cls, value):
        if value is None:
            return None
        if isinstance(value, str):
            value = [value]
        names = []
        for item in value:
            names.extend(part.strip() for part in str(item).split(",") if part.strip())
        return names
