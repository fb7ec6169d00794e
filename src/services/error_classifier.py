"""Classification of submission failures into a closed error taxonomy."""

from typing import Any, Optional

from pydantic import ValidationError
from structlog import get_logger

from src.clients import FrontdeskAPIClientError, FrontdeskAPITransportError
from src.models.frontdesk import ApiErrorResponse
from src.models.submission import ClassifiedError, ErrorKind, LocalValidationError

logger = get_logger(__name__)

# Field names the backend uses for the room identifier
ROOM_FIELDS = ("id_hab",)


class BackendRejectionError(Exception):
    """Raised when a 2xx check-in response reports ``success: false``."""

    def __init__(self, message: str, body: Any = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.body = body
        self.status_code = status_code


def _format_field_errors(field_errors: dict[str, list[str]]) -> str:
    return "\n".join(f"{field}: {', '.join(messages)}" for field, messages in field_errors.items())


def _parse_error_body(body: Any) -> Optional[ApiErrorResponse]:
    if not isinstance(body, dict):
        return None
    try:
        return ApiErrorResponse.model_validate(body)
    except ValidationError:
        return None


class ErrorClassifier:
    """Maps raw failures (local, HTTP, transport) to a ClassifiedError.

    Only one message is produced per failure. A room field error wins over
    generic field errors in the same response.
    """

    @staticmethod
    def _classify_local(error: LocalValidationError) -> ClassifiedError:
        return ClassifiedError(
            kind=ErrorKind.LOCAL_VALIDATION,
            message="Validation errors:\n" + "\n".join(error.errors),
        )

    @staticmethod
    def _classify_api(error: FrontdeskAPIClientError) -> ClassifiedError:
        if isinstance(error, FrontdeskAPITransportError) or error.status_code is None:
            return ClassifiedError(kind=ErrorKind.UNKNOWN, message=str(error))

        parsed = _parse_error_body(error.body)
        field_errors = parsed.errors if parsed else {}

        if field_errors:
            room_messages = [
                message for field in ROOM_FIELDS for message in field_errors.get(field, [])
            ]
            if room_messages:
                return ClassifiedError(
                    kind=ErrorKind.ROOM_CONFLICT,
                    message=f"Room cannot be assigned: {', '.join(room_messages)}",
                    field_errors=field_errors,
                    status_code=error.status_code,
                )
            return ClassifiedError(
                kind=ErrorKind.FIELD_VALIDATION,
                message="Server validation error:\n" + _format_field_errors(field_errors),
                field_errors=field_errors,
                status_code=error.status_code,
            )

        message = (parsed.message if parsed and parsed.message else None) or str(error) or "Server error"
        return ClassifiedError(
            kind=ErrorKind.SERVER_ERROR,
            message=message,
            status_code=error.status_code,
        )

    @classmethod
    def classify(cls, raw_error: BaseException) -> ClassifiedError:
        """Classify a failure.

        Args:
            raw_error: Exception raised anywhere in the submission pipeline

        Returns:
            ClassifiedError; never raises
        """
        if isinstance(raw_error, LocalValidationError):
            classified = cls._classify_local(raw_error)
        elif isinstance(raw_error, FrontdeskAPIClientError):
            classified = cls._classify_api(raw_error)
        elif isinstance(raw_error, BackendRejectionError):
            classified = ClassifiedError(
                kind=ErrorKind.SERVER_ERROR,
                message=str(raw_error) or "Check-in rejected by server",
                status_code=raw_error.status_code,
            )
        else:
            classified = ClassifiedError(
                kind=ErrorKind.UNKNOWN,
                message=str(raw_error) or "Unexpected error during check-in",
            )

        logger.debug(
            "Classified check-in error",
            kind=classified.kind,
            error_type=type(raw_error).__name__,
        )
        return classified
