"""Custom exceptions for PageQuill."""

from typing import Optional


class PageQuillError(Exception):
    """Base exception for PageQuill errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ParsingError(PageQuillError):
    """Exception raised when editor content cannot be turned into blocks."""

    pass


class LayoutError(PageQuillError):
    """Exception raised when a pagination result breaks a layout invariant."""

    pass


class MeasurementUnavailableError(PageQuillError):
    """Exception raised by an oracle that has no measuring surface yet."""

    pass


class ConfigurationError(PageQuillError):
    """Exception raised for invalid settings or page styles."""

    pass
