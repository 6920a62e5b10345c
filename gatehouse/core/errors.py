"""Service-layer error taxonomy with stable error codes mapped to HTTP statuses."""


class ConfigurationError(RuntimeError):
    """Fatal misconfiguration (e.g. missing signing secrets). Aborts startup."""


class ServiceError(Exception):
    """Base class for business-rule failures surfaced to callers."""

    status_code: int = 400
    error_code: str = "bad_request"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConflictError(ServiceError):
    """Duplicate unique key, e.g. email already registered (409)."""

    status_code = 409
    error_code = "conflict"


class UnauthorizedError(ServiceError):
    """Bad credentials or an invalid, expired or consumed token (401)."""

    status_code = 401
    error_code = "unauthorized"


class ForbiddenError(ServiceError):
    """Authenticated but not allowed on this project (403)."""

    status_code = 403
    error_code = "forbidden"


class NotFoundError(ServiceError):
    """Referenced entity genuinely absent (404)."""

    status_code = 404
    error_code = "not_found"


class TransactionError(ServiceError):
    """The store rejected or failed a batch; nothing was committed (500)."""

    status_code = 500
    error_code = "server_error"


__all__ = [
    "ConfigurationError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "ServiceError",
    "TransactionError",
    "UnauthorizedError",
]
