"""Custom exceptions for manuscript_docx."""

from typing import Optional


class ManuscriptDocxError(Exception):
    """Base exception for manuscript export errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class PackagingError(ManuscriptDocxError):
    """Exception raised when the DOCX archive cannot be built or written."""

    pass


class ConfigurationError(ManuscriptDocxError):
    """Exception raised when a style sheet, settings or input file cannot be loaded."""

    pass
