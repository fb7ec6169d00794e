"""Request and payload validation."""

from .payload_verifier import PayloadVerifier
from .request_validator import RequestValidator, validate_checkin_data

__all__ = ["PayloadVerifier", "RequestValidator", "validate_checkin_data"]
