# messagely/core/errors.py


class MessagelyError(Exception):
    """Base failure of the data-access and auth layer.

    ``status_code`` is only a hint for the HTTP layer; nothing in core encodes it.
    """

    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"message": self.message, "status": self.status_code}


class ValidationError(MessagelyError):
    """Missing or malformed input."""


class ConflictError(MessagelyError):
    """Uniqueness violation, e.g. a taken username."""


class AuthError(MessagelyError):
    """Bad credentials, or a missing/invalid token when raised with 401."""


class NotFoundError(MessagelyError):
    status_code = 404
