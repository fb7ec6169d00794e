"""Structural verification of assembled check-in payloads."""

import re
from datetime import date

from src.models.checkin import CheckInPayload, ValidationOutcome

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_date(value: object) -> date | None:
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


class PayloadVerifier:
    """Second validation pass over the DTO itself.

    RequestValidator only sees the form; this catches bad values introduced
    while assembling (a broken default, a mis-resolved id).
    """

    @staticmethod
    def verify(payload: CheckInPayload) -> ValidationOutcome:
        """Verify payload invariants.

        Args:
            payload: Assembled payload

        Returns:
            ValidationOutcome listing every violated invariant
        """
        errors: list[str] = []

        if payload.id_cliente_titular <= 0:
            errors.append("id_cliente_titular must be a positive integer")
        if payload.id_hab <= 0:
            errors.append("id_hab must be a positive integer")

        for field in ("adultos", "ninos", "bebes"):
            if getattr(payload, field) < 0:
                errors.append(f"{field} must be >= 0")
        if payload.total_guests < 1:
            errors.append("At least one guest is required (adultos + ninos + bebes >= 1)")

        llegada = _parse_date(payload.fecha_llegada)
        salida = _parse_date(payload.fecha_salida)
        if llegada is None:
            errors.append("fecha_llegada must use the YYYY-MM-DD format")
        if salida is None:
            errors.append("fecha_salida must use the YYYY-MM-DD format")
        if llegada is not None and salida is not None and salida <= llegada:
            errors.append("fecha_salida must be after fecha_llegada")

        if not payload.nombre_asignacion or not payload.nombre_asignacion.strip():
            errors.append("nombre_asignacion is required")

        return ValidationOutcome.from_errors(errors)
