"""Pydantic models for hotel backend front-desk API responses."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RoomInventoryEntry(BaseModel):
    """One room as listed by GET /habitaciones.

    The human-facing ``number`` and the backend key ``id`` are independent;
    room "305" can have any id.
    """

    id: int
    number: str = Field(alias="numero")
    type: Optional[str] = Field(default=None, alias="tipo")

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @field_validator("number", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> Any:
        # Some backend builds serialize numero as an integer
        if isinstance(value, int):
            return str(value)
        return value


class CheckInResponseData(BaseModel):
    """Stay/folio record returned after a successful check-in."""

    id: Optional[int] = None
    estado: Optional[str] = None
    fecha_llegada: Optional[str] = None
    fecha_salida: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class CheckInResponse(BaseModel):
    """2xx response body of the check-in endpoint."""

    success: bool = True
    message: str = ""
    data: Optional[CheckInResponseData] = None

    model_config = ConfigDict(extra="allow")


class ApiErrorResponse(BaseModel):
    """4xx response body with optional per-field errors."""

    message: str = ""
    errors: dict[str, list[str]] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")

    @field_validator("errors", mode="before")
    @classmethod
    def _normalize_errors(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            # A field may carry a single string instead of a list
            return {
                str(field): [str(m) for m in messages] if isinstance(messages, list) else [str(messages)]
                for field, messages in value.items()
            }
        return value
