"""Check-in payload assembly."""

from .payload_assembler import AssemblyDefaults, PayloadAssembler

__all__ = ["AssemblyDefaults", "PayloadAssembler"]
