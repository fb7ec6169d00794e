"""API clients package."""

from src.clients.frontdesk_api_client import (
    FrontdeskAPIAuthenticationError,
    FrontdeskAPIClient,
    FrontdeskAPIClientError,
    FrontdeskAPINotFoundError,
    FrontdeskAPIServerError,
    FrontdeskAPITransportError,
    FrontdeskAPIValidationError,
)

__all__ = [
    "FrontdeskAPIClient",
    "FrontdeskAPIClientError",
    "FrontdeskAPIAuthenticationError",
    "FrontdeskAPINotFoundError",
    "FrontdeskAPIServerError",
    "FrontdeskAPITransportError",
    "FrontdeskAPIValidationError",
]
