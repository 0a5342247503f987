from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..core.domain.enums import ResponseOutcome


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


class APIResponse(BaseModel):
    """Normalized envelope returned by every client operation.

    ``data`` is passed through opaquely; its shape depends on the endpoint.
    A non-string ``status`` or ``message`` is rendered as text, and a
    ``pagination`` that is not an object is dropped.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    status: str = "error"
    data: Any = None
    message: Optional[str] = None
    pagination: Optional[dict[str, Any]] = None

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> str:
        return "error" if value is None else _as_text(value)

    @field_validator("message", mode="before")
    @classmethod
    def _coerce_message(cls, value: Any) -> Optional[str]:
        # servers send validation details as objects, e.g. {"cve_id": ["invalid"]}
        return None if value is None else _as_text(value)

    @field_validator("pagination", mode="before")
    @classmethod
    def _only_object_pagination(cls, value: Any) -> Optional[dict[str, Any]]:
        return value if isinstance(value, dict) else None

    def is_success(self) -> bool:
        return self.status == "success"

    def is_error(self) -> bool:
        return self.status == "error"

    def outcome(self) -> ResponseOutcome:
        if self.is_success():
            return ResponseOutcome.SUCCESS
        if self.is_error():
            return ResponseOutcome.ERROR
        return ResponseOutcome.UNKNOWN


