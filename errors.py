from typing import Optional


class ScreeningError(Exception):
    """Base class for every error surfaced to the operator."""


class UnsupportedFileType(ScreeningError):
    def __init__(self, file_name: str, label: str):
        self.file_name = file_name
        self.label = label
        super().__init__(
            f"Unsupported file type for {label} ('{file_name}'). Please upload a PDF or TXT file."
        )


class ExtractionError(ScreeningError):
    """A PDF/TXT file could not be read (corrupt or undecodable)."""

    def __init__(self, file_name: str, reason: str = ""):
        self.file_name = file_name
        message = f"Failed to read content from '{file_name}'. The file might be corrupted."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class EmptyResponse(ScreeningError):
    def __init__(self, message: str = "The API returned an empty response."):
        super().__init__(message)


class SchemaMismatch(ScreeningError):
    """The model answered, but not in the shape that was asked for."""


class TransportError(ScreeningError):
    """Network or provider failure; carries the provider message unchanged."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ValidationError(ScreeningError):
    """Form-level input problem (blank title, unknown theme, ...)."""


class ConfigurationError(ScreeningError):
    pass
