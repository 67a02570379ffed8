"""Gateway error taxonomy and upstream error mapping."""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    BAD_REQUEST = "BAD_REQUEST"
    KEY_INVALID = "KEY_INVALID"
    RATE_LIMIT = "RATE_LIMIT"
    SERVER_ERROR = "SERVER_ERROR"


_STATUS_BY_CODE = {
    ErrorCode.BAD_REQUEST: 400,
    ErrorCode.KEY_INVALID: 401,
    ErrorCode.RATE_LIMIT: 429,
    ErrorCode.SERVER_ERROR: 500,
}

_DEFAULT_MESSAGES = {
    ErrorCode.BAD_REQUEST: "Bad request",
    ErrorCode.KEY_INVALID: "API key missing or invalid",
    ErrorCode.RATE_LIMIT: "Rate limit or quota; retry later",
    ErrorCode.SERVER_ERROR: "Unexpected error",
}


class GatewayError(Exception):
    """A failure that is reported to the caller as ``{code, message}``."""

    def __init__(self, code: ErrorCode, message: str | None = None):
        self.code = code
        self.message = message or _DEFAULT_MESSAGES[code]
        self.status_code = _STATUS_BY_CODE[code]
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code.value, "message": self.message}


def upstream_status(exc: BaseException) -> int | None:
    """Best-effort HTTP status of an upstream exception."""
    for candidate in (
        getattr(exc, "status_code", None),
        getattr(exc, "status", None),
        getattr(getattr(exc, "response", None), "status_code", None),
    ):
        if isinstance(candidate, int) and not isinstance(candidate, bool):
            return candidate
    return None


def map_upstream_error(exc: BaseException) -> GatewayError:
    """Translate an exception raised while calling the completion API.

    401/403 become KEY_INVALID, 429 becomes RATE_LIMIT, anything else is a
    SERVER_ERROR with no upstream detail exposed.
    """
    status = upstream_status(exc)
    if status in (401, 403):
        code = ErrorCode.KEY_INVALID
    elif status == 429:
        code = ErrorCode.RATE_LIMIT
    else:
        code = ErrorCode.SERVER_ERROR

    logger.warning(
        f"Upstream call failed: {type(exc).__name__}",
        extra={"upstream_status": status, "code": code.value},
    )
    return GatewayError(code)
