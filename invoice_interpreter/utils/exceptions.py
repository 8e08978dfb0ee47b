"""
Custom Exceptions Module.

The interpretation engine itself never raises on noisy text: every
detection step degrades to a default or an absent value. The exceptions
below belong to the boundaries around it (reading input files, the
page-level OCR collaborator, configuration loading).

Exception Hierarchy:
    InvoiceInterpretationError (base)
    ├── InputError
    │   ├── UnsupportedFileTypeError
    │   └── InputFileNotFoundError
    ├── OCRError
    │   └── OCRProcessingError
    └── ConfigurationError
"""


class InvoiceInterpretationError(Exception):
    """
    Base exception for all invoice interpretation errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(InvoiceInterpretationError):
    """Base exception for input handling errors."""
    pass


class UnsupportedFileTypeError(InputError):
    """
    Raised when an input file is not a recognized-text file.

    Example:
        >>> raise UnsupportedFileTypeError(".pdf", [".txt"])
    """

    def __init__(self, file_type: str, supported_types: list):
        message = f"Unsupported file type: '{file_type}'"
        details = {"file_type": file_type, "supported_types": supported_types}
        super().__init__(message, details)


class InputFileNotFoundError(InputError):
    """Raised when an input file or directory cannot be found."""

    def __init__(self, filepath: str):
        message = f"File not found: {filepath}"
        details = {"filepath": filepath}
        super().__init__(message, details)


# =============================================================================
# OCR ERRORS
# =============================================================================

class OCRError(InvoiceInterpretationError):
    """Base exception for errors raised by the OCR collaborator."""
    pass


class OCRProcessingError(OCRError):
    """Raised when one or more pages of a capture failed recognition."""

    def __init__(self, failed_pages: list, reason: str = None):
        message = f"OCR processing failed for page(s): {failed_pages}"
        details = {"failed_pages": failed_pages, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(InvoiceInterpretationError):
    """Raised when the configuration file is missing or malformed."""

    def __init__(self, config_path: str, reason: str = None):
        message = f"Invalid configuration: {config_path}"
        details = {"config_path": config_path, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'InvoiceInterpretationError',
    'InputError',
    'UnsupportedFileTypeError',
    'InputFileNotFoundError',
    'OCRError',
    'OCRProcessingError',
    'ConfigurationError',
]
