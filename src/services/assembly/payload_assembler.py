"""Assembly of the canonical check-in payload."""

from typing import Optional

from pydantic import BaseModel

from src.config import settings
from src.models.checkin import CheckInPayload, CheckInRequest, ClientId, ClientReference
from src.models.resolution import ResolvedRoomId


class AssemblyDefaults(BaseModel):
    """System defaults applied while assembling a payload."""

    assignment_label: str
    observation_placeholder: str
    placeholder_client_id: int

    @classmethod
    def from_settings(cls) -> "AssemblyDefaults":
        return cls(
            assignment_label=settings.checkin.assignment_label,
            observation_placeholder=settings.checkin.observation_placeholder,
            placeholder_client_id=settings.checkin.placeholder_client_id,
        )


class PayloadAssembler:
    """Builds a CheckInPayload from a validated request and resolved ids.

    Pure transformation. Nothing here validates; PayloadVerifier does that
    on the result.
    """

    @staticmethod
    def assemble(
        request: CheckInRequest,
        resolved_room: ResolvedRoomId,
        client_id: ClientId,
        defaults: Optional[AssemblyDefaults] = None,
        guest_counts: Optional[tuple[int, int, int]] = None,
    ) -> CheckInPayload:
        """Assemble the backend payload.

        Args:
            request: Request that passed RequestValidator
            resolved_room: Output of RoomIdentifierResolver
            client_id: Real titular id, or ClientReference.UNRESOLVED
            defaults: Label/placeholder values; read from settings when omitted
            guest_counts: (adults, children, infants) override; taken from the
                request when omitted

        Returns:
            Unverified CheckInPayload
        """
        defaults = defaults or AssemblyDefaults.from_settings()
        adults, children, infants = guest_counts or (
            request.adults,
            request.children,
            request.infants,
        )

        deferred = client_id is ClientReference.UNRESOLVED
        titular = defaults.placeholder_client_id if deferred else client_id

        observation = (request.observation or "").strip()
        nombre_asignacion = defaults.assignment_label
        if observation:
            nombre_asignacion = f"{nombre_asignacion} - {observation}"

        return CheckInPayload(
            id_cliente_titular=titular,
            fecha_llegada=request.check_in_date.isoformat() if request.check_in_date else "",
            fecha_salida=request.check_out_date.isoformat() if request.check_out_date else "",
            adultos=adults,
            ninos=children,
            bebes=infants,
            id_hab=resolved_room.id,
            nombre_asignacion=nombre_asignacion,
            observacion_checkin=observation or defaults.observation_placeholder,
            titular_deferred=deferred,
        )
