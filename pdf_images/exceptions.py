"""
Error types raised while accepting and converting an upload
"""
from typing import Optional


class PdfImagesError(Exception):
    """Base class for all service errors"""


class ValidationError(PdfImagesError):
    """The upload is missing, has the wrong type, or is too large"""

    def __init__(self, message: str, code: str = "INVALID_UPLOAD", status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code

    def to_dict(self) -> dict:
        return {"success": False, "error": self.message, "code": self.code}


class UploadTooLargeError(ValidationError):
    def __init__(self, limit_mb: int):
        super().__init__(
            f"File too large. Maximum size is {limit_mb}MB.",
            code="FILE_TOO_LARGE",
        )
        self.limit_mb = limit_mb


class ConversionError(PdfImagesError):
    """A rendering library or remote service failed to produce page images"""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConverterUnavailableError(ConversionError):
    """Library, binary, or credential needed by a converter is missing"""
