# liftboard/errors.py
"""
Error taxonomy shared by services, repositories and routers.

Each error carries a machine-readable ``kind`` and the HTTP status it maps to;
``liftboard.main`` turns them into ``{"detail": ..., "kind": ...}`` responses.
"""


class DomainError(Exception):
    kind = "error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    kind = "validation"
    status_code = 400


class AuthorizationError(DomainError):
    kind = "authorization"
    status_code = 403


class NotFoundError(DomainError):
    kind = "not_found"
    status_code = 404


class ConflictError(DomainError):
    kind = "conflict"
    status_code = 409
