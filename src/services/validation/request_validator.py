"""Validation of raw check-in requests before any network call."""

from typing import Any

from structlog import get_logger

from src.models.checkin import CheckInRequest, ValidationOutcome

logger = get_logger(__name__)


def _blank(value: Any) -> bool:
    return value is None or not str(value).strip()


class RequestValidator:
    """Checks a CheckInRequest for completeness and internal consistency.

    Rules run in a fixed order and every failing rule adds a message; nothing
    short-circuits, so the form can show all problems at once.
    """

    @staticmethod
    def _check_required_fields(request: CheckInRequest, errors: list[str]) -> None:
        if _blank(request.room_number):
            errors.append("Room number is required")
        if _blank(request.guest_name):
            errors.append("Guest name is required")
        if _blank(request.identification_number):
            errors.append("Identification number is required")
        if not request.payment_method:
            errors.append("Payment method is required")

    @staticmethod
    def _check_dates(request: CheckInRequest, errors: list[str]) -> None:
        if request.check_in_date is None:
            errors.append("Check-in date is required")
        if request.check_out_date is None:
            errors.append("Check-out date is required")
        if request.check_in_date is not None and request.check_out_date is not None:
            if request.check_out_date <= request.check_in_date:
                errors.append("Check-out date must be after check-in date")

    @staticmethod
    def _check_guests(request: CheckInRequest, errors: list[str]) -> None:
        if not request.adults or request.adults < 1:
            errors.append("At least 1 adult is required")

    @staticmethod
    def _check_walk_in(request: CheckInRequest, errors: list[str]) -> None:
        if _blank(request.guest_email):
            errors.append("Guest email is required for walk-ins")
        if _blank(request.guest_phone):
            errors.append("Guest phone is required for walk-ins")
        if _blank(request.guest_nationality):
            errors.append("Guest nationality is required for walk-ins")

    @staticmethod
    def _check_reservation(request: CheckInRequest, errors: list[str]) -> None:
        if _blank(request.reservation_id):
            errors.append("Reservation id is required for existing reservations")

    @classmethod
    def validate(cls, request: CheckInRequest) -> ValidationOutcome:
        """Validate a check-in request.

        Args:
            request: Raw request from the front-desk form

        Returns:
            ValidationOutcome with every error found, empty when valid
        """
        errors: list[str] = []
        checks = [cls._check_required_fields, cls._check_dates, cls._check_guests]
        checks.append(cls._check_walk_in if request.is_walk_in else cls._check_reservation)

        for check in checks:
            try:
                check(request, errors)
            except Exception as e:
                # Malformed attribute types (e.g. a str date) must not escape validate()
                errors.append(f"Invalid check-in data: {str(e)}")

        if errors:
            logger.debug(
                "Check-in request failed validation",
                is_walk_in=request.is_walk_in,
                error_count=len(errors),
            )

        return ValidationOutcome.from_errors(errors)


def validate_checkin_data(request: CheckInRequest) -> ValidationOutcome:
    """Validate a check-in request for pre-submit form feedback."""
    return RequestValidator.validate(request)
