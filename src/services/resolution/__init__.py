"""Room identifier resolution."""

from .room_resolver import (
    INVENTORY_MATCHERS,
    RoomIdentifierResolver,
    match_exact_number,
    match_first_entry,
    match_numeric_id,
    match_numeric_number,
    parse_room_int,
)

__all__ = [
    "INVENTORY_MATCHERS",
    "RoomIdentifierResolver",
    "match_exact_number",
    "match_first_entry",
    "match_numeric_id",
    "match_numeric_number",
    "parse_room_int",
]
