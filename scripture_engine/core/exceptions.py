"""Core exception types shared across layers."""


class IngestionError(Exception):
    """Raised when raw scripture data cannot be fetched or parsed."""


class UnsupportedFormatError(IngestionError):
    """Raised when a payload's record shape is not one the parsers understand."""


__all__ = [
    "IngestionError",
    "UnsupportedFormatError",
]
