"""Domain errors mapped to HTTP responses at the API boundary."""


class SlidecastError(Exception):
    """Base class for expected application failures."""

    status_code = 500


class ConflictError(SlidecastError):
    """A record with the same identity already exists."""

    status_code = 409


class SessionStateError(ConflictError):
    """A session transition is not allowed from its current state."""

    status_code = 400


class NotFoundError(SlidecastError):
    status_code = 404


class UserNotFoundError(NotFoundError):
    """Signin referenced an unknown account."""

    status_code = 401


class InvalidPasswordError(SlidecastError):
    status_code = 400


class UnauthorizedError(SlidecastError):
    """Bearer credential is missing, malformed, or expired."""

    status_code = 401


class UploadValidationError(SlidecastError):
    status_code = 400


class NoFileUploadedError(UploadValidationError):
    def __init__(self) -> None:
        super().__init__("No file uploaded")


class DeckProcessingError(SlidecastError):
    """The rasterizer could not produce any page images."""
