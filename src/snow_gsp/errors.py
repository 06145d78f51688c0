# src/snow_gsp/errors.py

class SnowGraphError(Exception):
    """Base class for every error raised by snow_gsp."""

class InvalidInputError(SnowGraphError, ValueError):
    """Missing graph field, shape/length mismatch or out-of-range index."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")

class EmptySelectionError(SnowGraphError):
    """No cholera and no pump node to keep."""

class DisconnectedInputError(SnowGraphError):
    """The kept nodes share no finite path, so no weighted graph can be built."""
