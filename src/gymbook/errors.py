"""Exceptions raised by gymbook."""


class GymbookError(Exception):
    """Base class for gymbook errors."""


class NotFoundError(GymbookError, KeyError):
    """An update or delete referenced an id that is not in the store."""

    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key}")

    def __str__(self) -> str:
        return self.args[0]


class ValidationError(GymbookError, ValueError):
    """User input was rejected before it reached the store.

    ``field`` names the offending input so callers can tell the user
    exactly what is missing.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)
