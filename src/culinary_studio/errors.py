"""Errors raised by studio services and mapped to HTTP responses."""

from http import HTTPStatus


class StudioError(Exception):
    """Base error with the HTTP status it is reported with."""

    status_code: int = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequestError(StudioError):
    status_code = HTTPStatus.BAD_REQUEST


class NotAuthenticatedError(StudioError):
    status_code = HTTPStatus.UNAUTHORIZED

    def __init__(self, message: str = "Sign in required") -> None:
        super().__init__(message)


class NotFoundError(StudioError):
    status_code = HTTPStatus.NOT_FOUND


class AssistantUnavailableError(StudioError):
    """The AI service is not configured or could not be reached."""

    status_code = HTTPStatus.SERVICE_UNAVAILABLE
