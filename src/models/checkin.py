"""Pydantic models for front-desk check-in requests and the backend payload."""

from datetime import date
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PaymentMethod(str, Enum):
    """Payment methods accepted at the front desk."""

    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"


class ClientReference(Enum):
    """Marker for a titular client id that only the backend can resolve.

    No reservation-read endpoint exists, so form-sourced check-ins cannot know
    the account holder. The marker travels through assembly instead of a
    magic number and is never compared to a real id.
    """

    UNRESOLVED = "unresolved"


ClientId = Union[int, ClientReference]


class CheckInRequest(BaseModel):
    """Raw check-in input as captured by front-desk staff.

    Construction is deliberately lenient (everything has a default) so that
    incomplete forms still reach the request validator, which reports every
    problem at once instead of failing on the first missing field.
    """

    is_walk_in: bool = Field(default=False, alias="isWalkIn")
    reservation_id: str = Field(default="", alias="reservationId")
    room_number: str = Field(default="", alias="roomNumber")

    guest_name: str = Field(default="", alias="guestName")
    guest_email: str = Field(default="", alias="guestEmail")
    guest_phone: str = Field(default="", alias="guestPhone")
    guest_nationality: str = Field(default="", alias="guestNationality")
    identification_number: str = Field(default="", alias="identificationNumber")

    check_in_date: Optional[date] = Field(default=None, alias="checkInDate")
    check_out_date: Optional[date] = Field(default=None, alias="checkOutDate")

    adults: int = Field(default=0, ge=0)
    children: int = Field(default=0, ge=0)
    infants: int = Field(default=0, ge=0)

    payment_method: Optional[PaymentMethod] = Field(default=None, alias="paymentMethod")
    observation: str = ""
    requires_charge_split: bool = Field(default=False, alias="requiresChargeSplit")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("check_in_date", "check_out_date", "payment_method", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        # HTML forms submit untouched inputs as empty strings
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator(
        "reservation_id",
        "room_number",
        "guest_name",
        "guest_email",
        "guest_phone",
        "guest_nationality",
        "identification_number",
        "observation",
        mode="before",
    )
    @classmethod
    def _none_to_blank(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, int):
            return str(value)
        return value

    @property
    def total_guests(self) -> int:
        """Total number of guests on the request."""
        return self.adults + self.children + self.infants


class CheckInPayload(BaseModel):
    """Request body for POST /frontdesk/reserva/{reservaId}/checkin.

    Field names match the backend exactly. The model accepts any values;
    PayloadVerifier is what enforces the structural invariants.
    """

    id_cliente_titular: int
    fecha_llegada: str
    fecha_salida: str
    adultos: int
    ninos: int
    bebes: int
    id_hab: int
    nombre_asignacion: str
    observacion_checkin: Optional[str] = None

    # True when id_cliente_titular is the wire placeholder for ClientReference.UNRESOLVED
    titular_deferred: bool = Field(default=False, exclude=True)

    model_config = ConfigDict(extra="forbid")

    @property
    def total_guests(self) -> int:
        """Total number of guests in the payload."""
        return self.adultos + self.ninos + self.bebes

    def to_wire(self) -> dict[str, Any]:
        """Serialize the payload as the JSON body sent to the backend.

        Returns:
            Dictionary with backend field names, without unset optionals
        """
        return self.model_dump(exclude_none=True)


class ValidationOutcome(BaseModel):
    """Result of a validation pass over a request or payload."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationOutcome":
        """Build an outcome from accumulated error messages."""
        return cls(is_valid=not errors, errors=list(errors))
