"""Error taxonomy shared by the content and contact pipelines"""


class FolioError(Exception):
    """Base class for errors raised by folio."""


class NotFound(FolioError):
    """A content resource is absent in the active backend."""

    def __init__(self, name: str):
        super().__init__(f"Resource not found: {name}")
        self.name = name


class ContactValidationError(FolioError):
    """Contact input violates the request schema; message is user-facing."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class VerificationFailure(FolioError):
    """Bot-score verification rejected the submission."""

    def __init__(self, reason: str, score: float | None = None):
        super().__init__(reason)
        self.reason = reason
        self.score = score


class TransientUpstreamFailure(FolioError):
    """An external service (blob store, verifier, mail server, GitHub) is unreachable or misbehaved."""
