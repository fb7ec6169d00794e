"""Check-in pipeline step implementations, in execution order."""

from .validate_request_step import ValidateRequestStep
from .resolve_room_step import ResolveRoomStep
from .assemble_payload_step import AssemblePayloadStep
from .verify_payload_step import VerifyPayloadStep
from .submit_checkin_step import SubmitCheckInStep

__all__ = [
    "ValidateRequestStep",
    "ResolveRoomStep",
    "AssemblePayloadStep",
    "VerifyPayloadStep",
    "SubmitCheckInStep",
]
