"""Custom exceptions for zone generation."""


class ZoneGenError(Exception):
    """Base exception for zone generation errors."""

    pass


class InvalidParameterError(ZoneGenError, ValueError):
    """Raised when a generation function is called with unusable arguments.

    Covers programmer or configuration misuse such as non-positive room
    sizes or zero noise octaves. Randomness-driven shortfalls are never
    raised; they are logged and generation continues.
    """

    pass


class RoomNotFoundError(ZoneGenError):
    """Raised when a strict room lookup finds no room."""

    pass
