"""Check-in submission services."""

from src.services.checkin_orchestrator import CheckInOrchestrator
from src.services.error_classifier import BackendRejectionError, ErrorClassifier
from src.services.strategies import (
    FIXED_TEST,
    FORM_SOURCED,
    RESERVATION_SOURCED,
    DataSourceStrategy,
    FixedTestStrategy,
    FormSourcedStrategy,
    ReservationSourcedStrategy,
    get_strategy,
)
from src.services.validation import validate_checkin_data

__all__ = [
    "CheckInOrchestrator",
    "BackendRejectionError",
    "ErrorClassifier",
    "DataSourceStrategy",
    "FormSourcedStrategy",
    "FixedTestStrategy",
    "ReservationSourcedStrategy",
    "FORM_SOURCED",
    "FIXED_TEST",
    "RESERVATION_SOURCED",
    "get_strategy",
    "validate_checkin_data",
]
