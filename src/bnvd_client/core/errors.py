from __future__ import annotations


class BnvdError(Exception):
    """Base class for failures raised by the BNVD client."""


class RequestError(BnvdError):
    """Transport-level failure: connection refused, timeout, DNS, malformed URL.

    The client performs a single attempt per call; nothing is retried.
    """

    def __init__(self, message: str, *, url: str | None = None, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.cause = cause


class DecodeError(BnvdError):
    """Response body could not be decoded into an envelope."""

    _BODY_PREVIEW = 200

    def __init__(self, message: str, *, endpoint: str | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.body = body[: self._BODY_PREVIEW] if body is not None else None
