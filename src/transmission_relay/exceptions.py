"""Custom exceptions for transmission-relay.

Upload-side errors (validation, upload rejection) map to HTTP 400, store
errors map to 404/500, and client-side errors all collapse into the
renderer's single error panel.
"""


class RelayError(Exception):
    """Base exception for all transmission-relay errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ValidationError(RelayError):
    """Raised when a candidate issue document is rejected."""

    def __init__(self, message: str, errors: list | None = None, *args, **kwargs):
        self.errors = errors or []
        super().__init__(message, *args, **kwargs)


class MalformedPayload(ValidationError):
    """Raised when a payload is not valid JSON."""

    def __init__(self, message: str = "Invalid JSON format.", errors: list | None = None):
        super().__init__(message, errors=errors)


class MalformedDocument(ValidationError):
    """Raised when required top-level keys are missing or mistyped."""

    pass


class MalformedModule(ValidationError):
    """Raised when a mainContent entry lacks an id or a type."""

    def __init__(self, message: str, index: int, errors: list | None = None):
        self.index = index
        super().__init__(message, errors=errors)


class UploadRejected(RelayError):
    """Raised when an upload is refused before its content is inspected."""

    pass


class FileTooLarge(UploadRejected):
    """Raised when an uploaded file exceeds the size limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"File too large. Limit {limit // (1024 * 1024)}MB.")


class WrongMimeType(UploadRejected):
    """Raised when an uploaded file is not declared as JSON."""

    def __init__(self, content_type: str | None = None):
        self.content_type = content_type
        super().__init__("Invalid file type. Only JSON is allowed.")


class StoreError(RelayError):
    """Base exception for document store failures."""

    pass


class StoreUnavailable(StoreError):
    """Raised when the persisted document does not exist."""

    def __init__(self, message: str = "Magazine data file not found."):
        super().__init__(message)


class IOFailure(StoreError):
    """Raised when reading or writing the persisted document fails."""

    pass


class ClientError(RelayError):
    """Base exception for all client errors."""

    pass


class NetworkFailure(ClientError):
    """Raised when a network connection fails."""

    pass


class APIError(ClientError):
    """Raised when the server returns a non-2xx response."""

    def __init__(self, message: str, status_code: int, *args, **kwargs):
        self.status_code = status_code
        super().__init__(message, *args, **kwargs)


class NotFoundError(APIError):
    """Raised when the server returns a 404 not found response."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class UnexpectedShape(ClientError):
    """Raised when a response parses but is not a JSON object."""

    def __init__(self, message: str = "Invalid data format received from API."):
        super().__init__(message)
