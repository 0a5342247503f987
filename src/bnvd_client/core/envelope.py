from __future__ import annotations

import json
from typing import Any

from ..config.endpoints import API_INFO_PATH
from ..infra.schemas import APIResponse
from .errors import DecodeError


def _wrap_api_info(payload: Any) -> dict[str, Any]:
    # The root route returns bare metadata instead of an envelope
    return {"status": "success", "data": payload}


def decode(raw_body: str, endpoint_path: str) -> APIResponse:
    """Parse a raw response body into an APIResponse.

    A missing ``status`` becomes ``"error"``; missing ``data``, ``message`` and
    ``pagination`` become None. An application error (``status == "error"``)
    is returned, not raised.

    Raises:
        DecodeError: If the body is not valid JSON, or is not a JSON object (except on the root info route).
    """
    try:
        payload = json.loads(raw_body)
    except (json.JSONDecodeError, TypeError) as e:
        raise DecodeError(f"JSON decode error: {e}", endpoint=endpoint_path, body=raw_body) from e

    if endpoint_path == API_INFO_PATH:
        payload = _wrap_api_info(payload)
    elif not isinstance(payload, dict):
        raise DecodeError(
            f"Expected a JSON object envelope, got {type(payload).__name__}",
            endpoint=endpoint_path,
            body=raw_body,
        )

    return APIResponse.model_validate(payload)


