"""Hotel backend front-desk API client for room inventory and check-in."""

import asyncio
from typing import Any, Optional

import httpx
from pydantic import ValidationError
from structlog import get_logger

from src.config import settings
from src.models.frontdesk import RoomInventoryEntry

logger = get_logger(__name__)


class FrontdeskAPIClientError(Exception):
    """Base exception for front-desk API errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint


class FrontdeskAPIAuthenticationError(FrontdeskAPIClientError):
    """Raised when the bearer credential is rejected."""

    pass


class FrontdeskAPINotFoundError(FrontdeskAPIClientError):
    """Raised when the requested resource does not exist."""

    pass


class FrontdeskAPIValidationError(FrontdeskAPIClientError):
    """Raised when the backend rejects a request with per-field errors."""

    pass


class FrontdeskAPIServerError(FrontdeskAPIClientError):
    """Raised when the backend returns a 5xx response."""

    pass


class FrontdeskAPITransportError(FrontdeskAPIClientError):
    """Raised when no usable HTTP response was received (timeout, connection, bad JSON)."""

    pass


class FrontdeskAPIClient:
    """Client for the hotel backend front-desk endpoints."""

    ROOMS_ENDPOINT = "/habitaciones"
    RESERVA_ENDPOINT = "/frontdesk/reserva/{reserva_id}"
    CHECKIN_ENDPOINT = "/frontdesk/reserva/{reserva_id}/checkin"

    def __init__(self, base_url: Optional[str] = None, api_token: Optional[str] = None):
        """Initialize the client with settings.

        Args:
            base_url: Override for the backend base URL
            api_token: Opaque bearer credential supplied by the auth layer
        """
        self.base_url = (base_url or settings.backend_base_url()).rstrip("/")
        self.api_token = api_token if api_token is not None else settings.backend_api_token()
        self.timeout = settings.backend.request_timeout
        self.max_retries = max(1, settings.backend.max_retries)
        self.retry_backoff_base = 2  # Exponential backoff base

    @classmethod
    def checkin_endpoint(cls, reserva_id: int) -> str:
        """Path of the check-in endpoint for a reservation."""
        return cls.CHECKIN_ENDPOINT.format(reserva_id=reserva_id)

    def _get_headers(self) -> dict[str, str]:
        """Get default headers for backend requests.

        Returns:
            Dictionary of HTTP headers, with the bearer token when one is set.
        """
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": "FrontdeskCheckIn/1.0",
        }
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    @staticmethod
    def _parse_body(response: Any) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
        retry: bool = True,
        reserva_id: Optional[int] = None,
    ) -> Any:
        """Make an HTTP request to the backend.

        Args:
            method: HTTP method (GET, POST, ...)
            endpoint: API endpoint path (without base URL)
            data: JSON request body
            params: Query parameters
            retry: Retry 5xx responses and transport errors. Writes pass False
                so that the backend sees at most one call.
            reserva_id: Reservation id for log context

        Returns:
            Parsed JSON response, or {} for an empty success body

        Raises:
            FrontdeskAPIAuthenticationError: On 401/403
            FrontdeskAPINotFoundError: On 404
            FrontdeskAPIValidationError: On 4xx carrying field errors
            FrontdeskAPIServerError: On 5xx after retries
            FrontdeskAPITransportError: On timeout or connection failure
            FrontdeskAPIClientError: For other API errors
        """
        url = f"{self.base_url}{endpoint}"
        headers = self._get_headers()
        attempts = self.max_retries if retry else 1

        for attempt in range(attempts):
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(
                        method=method,
                        url=url,
                        headers=headers,
                        json=data,
                        params=params,
                    )
            except httpx.TimeoutException as e:
                if attempt < attempts - 1:
                    wait_time = self.retry_backoff_base ** attempt
                    logger.warning(
                        "Backend request timeout, retrying",
                        endpoint=endpoint,
                        reserva_id=reserva_id,
                        attempt=attempt + 1,
                        wait_seconds=wait_time,
                    )
                    await asyncio.sleep(wait_time)
                    continue
                logger.error("Backend request timeout", endpoint=endpoint, reserva_id=reserva_id)
                raise FrontdeskAPITransportError(
                    f"Request timeout for {endpoint}", endpoint=endpoint
                ) from e
            except httpx.RequestError as e:
                if attempt < attempts - 1:
                    wait_time = self.retry_backoff_base ** attempt
                    logger.warning(
                        "Backend request error, retrying",
                        endpoint=endpoint,
                        reserva_id=reserva_id,
                        error=str(e),
                        attempt=attempt + 1,
                        wait_seconds=wait_time,
                    )
                    await asyncio.sleep(wait_time)
                    continue
                logger.error(
                    "Backend request error",
                    endpoint=endpoint,
                    reserva_id=reserva_id,
                    error=str(e),
                )
                raise FrontdeskAPITransportError(
                    f"Request failed for {endpoint}: {str(e)}", endpoint=endpoint
                ) from e

            status = response.status_code
            body = self._parse_body(response)

            if status in (401, 403):
                logger.error(
                    "Backend authentication failed",
                    endpoint=endpoint,
                    reserva_id=reserva_id,
                    status_code=status,
                )
                raise FrontdeskAPIAuthenticationError(
                    f"Authentication failed for {endpoint}",
                    status_code=status,
                    body=body,
                    endpoint=endpoint,
                )

            if status == 404:
                logger.warning(
                    "Backend resource not found",
                    endpoint=endpoint,
                    reserva_id=reserva_id,
                    status_code=status,
                )
                raise FrontdeskAPINotFoundError(
                    f"Resource not found: {endpoint}",
                    status_code=status,
                    body=body,
                    endpoint=endpoint,
                )

            if status >= 500:
                if attempt < attempts - 1:
                    wait_time = self.retry_backoff_base ** attempt
                    logger.warning(
                        "Backend server error, retrying",
                        endpoint=endpoint,
                        reserva_id=reserva_id,
                        status_code=status,
                        attempt=attempt + 1,
                        wait_seconds=wait_time,
                    )
                    await asyncio.sleep(wait_time)
                    continue
                logger.error(
                    "Backend server error",
                    endpoint=endpoint,
                    reserva_id=reserva_id,
                    status_code=status,
                )
                raise FrontdeskAPIServerError(
                    f"Server error at {endpoint}: {status}",
                    status_code=status,
                    body=body,
                    endpoint=endpoint,
                )

            if 400 <= status < 500:
                has_field_errors = isinstance(body, dict) and isinstance(body.get("errors"), dict)
                logger.error(
                    "Backend rejected request",
                    endpoint=endpoint,
                    reserva_id=reserva_id,
                    status_code=status,
                    field_errors=body.get("errors") if has_field_errors else None,
                    response_text=str(response.text)[:200],
                )
                error_cls = FrontdeskAPIValidationError if has_field_errors else FrontdeskAPIClientError
                message = body.get("message") if isinstance(body, dict) else None
                raise error_cls(
                    message or f"Client error at {endpoint}: {status}",
                    status_code=status,
                    body=body,
                    endpoint=endpoint,
                )

            if 200 <= status < 300:
                logger.debug(
                    "Backend request successful",
                    endpoint=endpoint,
                    reserva_id=reserva_id,
                    method=method,
                    status_code=status,
                )
                return body if body is not None else {}

            logger.error(
                "Unexpected backend response status",
                endpoint=endpoint,
                reserva_id=reserva_id,
                status_code=status,
            )
            raise FrontdeskAPIClientError(
                f"Unexpected response from {endpoint}: {status}",
                status_code=status,
                body=body,
                endpoint=endpoint,
            )

        raise FrontdeskAPIClientError(f"Failed to complete request to {endpoint}", endpoint=endpoint)

    async def list_rooms(self, numero: Optional[str] = None) -> list[RoomInventoryEntry]:
        """Fetch the room inventory, optionally filtered by room number.

        Accepts both a bare JSON array and a ``{"data": [...]}`` envelope.
        Entries that do not parse are skipped with a warning.

        Args:
            numero: Room number filter passed as ?numero=

        Returns:
            Rooms in backend order

        Raises:
            FrontdeskAPIClientError: If the request fails or the body is not a list
        """
        params = {"numero": numero} if numero is not None else None
        response = await self._make_request("GET", self.ROOMS_ENDPOINT, params=params)

        rows = response.get("data") if isinstance(response, dict) else response
        if not isinstance(rows, list):
            raise FrontdeskAPITransportError(
                f"Unexpected room inventory shape from {self.ROOMS_ENDPOINT}",
                body=response,
                endpoint=self.ROOMS_ENDPOINT,
            )

        rooms = []
        for row in rows:
            try:
                rooms.append(RoomInventoryEntry.model_validate(row))
            except ValidationError as e:
                logger.warning("Skipping unparseable room entry", row=row, error=str(e))

        logger.debug("Fetched room inventory", numero=numero, room_count=len(rooms))
        return rooms

    async def submit_checkin(self, reserva_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        """Send the check-in write. Never retried.

        Args:
            reserva_id: Numeric reservation id in the endpoint path
            payload: Wire body (see CheckInPayload.to_wire)

        Returns:
            Parsed response body

        Raises:
            FrontdeskAPIClientError: If the request fails
        """
        endpoint = self.checkin_endpoint(reserva_id)
        logger.info("Submitting check-in", reserva_id=reserva_id, endpoint=endpoint)
        response = await self._make_request(
            "POST", endpoint, data=payload, retry=False, reserva_id=reserva_id
        )
        if not isinstance(response, dict):
            raise FrontdeskAPITransportError(
                f"Unexpected check-in response shape from {endpoint}",
                body=response,
                endpoint=endpoint,
            )
        return response

    async def probe_endpoints(self, reserva_id: int) -> dict[str, bool]:
        """Check which read routes answer, for diagnosing failed check-ins.

        Args:
            reserva_id: Reservation to probe

        Returns:
            Mapping of endpoint path to whether it responded successfully
        """
        probes = {
            self.RESERVA_ENDPOINT.format(reserva_id=reserva_id): None,
            self.ROOMS_ENDPOINT: None,
        }
        results: dict[str, bool] = {}
        for endpoint, params in probes.items():
            try:
                await self._make_request("GET", endpoint, params=params, retry=False, reserva_id=reserva_id)
                results[endpoint] = True
            except FrontdeskAPIClientError as e:
                logger.info("Probe failed", endpoint=endpoint, reserva_id=reserva_id, error=str(e))
                results[endpoint] = False
        return results
