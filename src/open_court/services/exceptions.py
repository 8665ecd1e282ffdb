"""Typed outcomes raised by the Open Court services.

Validation failures are expected business results rather than system faults;
the API layer converts every ``CourtError`` into a user-facing response.
"""

from __future__ import annotations


class CourtError(Exception):
    """Base exception for Open Court service outcomes."""

    status_code = 400

    def __init__(self, message: str, error_type: str = "court_error"):
        self.message = message
        self.error_type = error_type
        super().__init__(message)


class UnauthorizedError(CourtError):
    """Raised when no user identity can be resolved for the caller."""

    status_code = 401

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message, "unauthorized")


class NotFoundError(CourtError):
    """Raised when a report, community, user or piece of content is absent."""

    status_code = 404

    def __init__(self, entity: str, entity_id: object | None = None):
        message = f"{entity} not found" if entity_id is None else f"{entity} {entity_id} not found"
        super().__init__(message, "not_found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidRequestError(CourtError):
    """Raised when a request is malformed in a way the schema cannot catch."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, "invalid_request")
        self.field = field


class SelfReportError(CourtError):
    """Raised when a user tries to report their own content or judge their own report."""

    def __init__(self, message: str = "Cannot act on your own report"):
        super().__init__(message, "self_report")


class DuplicateVoteError(CourtError):
    """Raised when a juror has already cast a verdict on a report."""

    status_code = 409

    def __init__(self, report_id: int, juror_id: int):
        super().__init__("Already voted on this case", "duplicate_vote")
        self.report_id = report_id
        self.juror_id = juror_id


class DuplicateReportError(CourtError):
    """Raised when an open report already exists for the reporter and target."""

    status_code = 409

    def __init__(self, target_type: str, target_id: int):
        super().__init__(f"You have already reported this {target_type}", "duplicate_report")
        self.target_type = target_type
        self.target_id = target_id


class NotPendingError(CourtError):
    """Raised when a verdict is attempted on a report that is already resolved."""

    status_code = 409

    def __init__(self, report_id: int):
        super().__init__("Case already closed", "not_pending")
        self.report_id = report_id


class PermissionDeniedError(CourtError):
    """Raised when the caller's community role lacks a required capability."""

    status_code = 403

    def __init__(self, message: str):
        super().__init__(message, "permission_denied")


class ConflictError(CourtError):
    """Raised when a write would contradict existing state."""

    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, "conflict")


class StoreError(CourtError):
    """Raised when the persistent store fails; the caller decides whether to resubmit."""

    status_code = 503

    def __init__(self, message: str = "Storage temporarily unavailable"):
        super().__init__(message, "store_error")
