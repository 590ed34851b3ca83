from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced employee, project or report does not exist."""


class ConflictError(DomainError):
    """Raised when a write would duplicate an existing record."""


class MailDeliveryError(Exception):
    """Raised when a report email cannot be handed to the SMTP server.

    `report_id` is set when the report itself was stored before sending failed.
    """

    def __init__(self, message: str, *, report_id: Optional[int] = None):
        super().__init__(message)
        self.report_id = report_id
