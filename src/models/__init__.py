"""Data models for the check-in submission pipeline."""

from src.models.checkin import (
    CheckInPayload,
    CheckInRequest,
    ClientId,
    ClientReference,
    PaymentMethod,
    ValidationOutcome,
)
from src.models.frontdesk import (
    ApiErrorResponse,
    CheckInResponse,
    CheckInResponseData,
    RoomInventoryEntry,
)
from src.models.resolution import ResolutionTier, ResolvedRoomId
from src.models.submission import (
    CheckInState,
    CheckInSubmissionError,
    ClassifiedError,
    DataOrigin,
    ErrorKind,
    LocalValidationError,
    SubmissionResult,
)

__all__ = [
    "CheckInRequest",
    "CheckInPayload",
    "ClientId",
    "ClientReference",
    "PaymentMethod",
    "ValidationOutcome",
    "RoomInventoryEntry",
    "CheckInResponse",
    "CheckInResponseData",
    "ApiErrorResponse",
    "ResolutionTier",
    "ResolvedRoomId",
    "CheckInState",
    "CheckInSubmissionError",
    "ClassifiedError",
    "DataOrigin",
    "ErrorKind",
    "LocalValidationError",
    "SubmissionResult",
]
