"""Submission outcome models: result envelope, pipeline state and error taxonomy."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from src.models.resolution import ResolutionTier


class DataOrigin(str, Enum):
    """Where a submission sourced its client id and defaults from."""

    FORM = "form"
    FIXED_TEST = "fixed_test"
    RESERVATION = "reservation"


class CheckInState(str, Enum):
    """Lifecycle of one submission attempt."""

    IDLE = "idle"
    VALIDATING = "validating"
    RESOLVING = "resolving"
    ASSEMBLING = "assembling"
    VERIFYING = "verifying"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (CheckInState.SUCCEEDED, CheckInState.FAILED)


class ErrorKind(str, Enum):
    """Closed set of failure categories shown to front-desk staff."""

    FIELD_VALIDATION = "FieldValidation"
    ROOM_CONFLICT = "RoomConflict"
    SERVER_ERROR = "ServerError"
    LOCAL_VALIDATION = "LocalValidation"
    UNKNOWN = "Unknown"


class ClassifiedError(BaseModel):
    """A failure normalized into the error taxonomy."""

    kind: ErrorKind
    message: str
    field_errors: Optional[dict[str, list[str]]] = None
    status_code: Optional[int] = None


class SubmissionResult(BaseModel):
    """Outcome of a successful check-in submission."""

    success: bool
    folio_id: Optional[int] = None
    message: str = ""
    data_origin: DataOrigin
    endpoint_used: str
    room_tier: Optional[ResolutionTier] = None
    requires_charge_split: bool = False


class CheckInSubmissionError(Exception):
    """Raised by the orchestrator when any stage fails; carries the classified error."""

    def __init__(self, error: ClassifiedError, state: CheckInState = CheckInState.FAILED):
        super().__init__(error.message)
        self.error = error
        self.failed_state = state

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


class LocalValidationError(Exception):
    """Raised for failures detected before any network call."""

    def __init__(self, errors: list[str], stage: str = "request"):
        self.errors = list(errors)
        self.stage = stage
        super().__init__("; ".join(self.errors) or "Validation failed")
