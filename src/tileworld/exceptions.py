"""Custom exceptions for world generation."""


class TileWorldError(Exception):
    """Base exception for tile world errors."""

    pass


class ConfigurationError(TileWorldError):
    """Raised when generation settings are invalid or inconsistent."""

    pass


class UnknownStructureError(TileWorldError):
    """Raised when a structure template is requested for an unknown kind."""

    pass
