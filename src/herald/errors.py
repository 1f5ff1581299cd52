"""Domain errors raised by the event and user services.

All of these are request-local: the HTTP layer maps them to a status code
and returns the message to the caller. Nothing retries them.
"""


class HeraldError(Exception):
    """Base class for domain errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(HeraldError):
    """Referenced user or event does not exist."""

    status_code = 404


class InvalidArgumentError(HeraldError, ValueError):
    """Input is malformed or semantically invalid."""

    status_code = 400


class InvalidStateError(HeraldError):
    """Operation is not allowed for the event's current status."""

    status_code = 400


class ConflictError(HeraldError):
    """A uniqueness constraint would be violated."""

    status_code = 409
