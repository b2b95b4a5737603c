"""Domain errors raised by services and rendered by the API layer."""

from enum import Enum
from typing import Optional

from fastapi import status


class ErrorCode(str, Enum):
    INVALID_REQUEST = "InvalidRequest"
    UNAUTHORIZED = "Unauthorized"
    CAPACITY_EXCEEDED = "CapacityExceeded"
    ARTIFACT_STORAGE_FAILURE = "ArtifactStorageFailure"
    PERSISTENCE_FAILURE = "PersistenceFailure"
    EVENT_NOT_FOUND = "EventNotFound"
    TICKET_TYPE_NOT_FOUND = "TicketTypeNotFound"
    TICKET_NOT_FOUND = "TicketNotFound"
    TICKET_STATE_CONFLICT = "TicketStateConflict"


class DomainError(Exception):
    """Base domain error with code, user-safe message and HTTP status."""

    code: ErrorCode = ErrorCode.INVALID_REQUEST
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, extra: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.extra = extra or {}

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict:
        return {
            "success": False,
            "error": self.code.value,
            "detail": self.message,
            **self.extra,
        }


class InvalidRequest(DomainError):
    code = ErrorCode.INVALID_REQUEST
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(DomainError):
    code = ErrorCode.UNAUTHORIZED
    status_code = status.HTTP_403_FORBIDDEN


class CapacityExceeded(DomainError):
    code = ErrorCode.CAPACITY_EXCEEDED
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, remaining: int, requested: int):
        super().__init__(
            f"Only {remaining} ticket(s) available, requested {requested}",
            extra={"remaining": remaining},
        )
        self.remaining = remaining
        self.requested = requested


class PersistenceFailure(DomainError):
    code = ErrorCode.PERSISTENCE_FAILURE
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class EventNotFound(DomainError):
    code = ErrorCode.EVENT_NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, event_id: str):
        super().__init__("Event not found")
        self.event_id = event_id


class TicketTypeNotFound(DomainError):
    code = ErrorCode.TICKET_TYPE_NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, ticket_type_id: str):
        super().__init__("Ticket type not found")
        self.ticket_type_id = ticket_type_id


class TicketNotFound(DomainError):
    code = ErrorCode.TICKET_NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, reference: str):
        super().__init__("Ticket not found")
        self.reference = reference


class TicketStateConflict(DomainError):
    code = ErrorCode.TICKET_STATE_CONFLICT
    status_code = status.HTTP_409_CONFLICT
