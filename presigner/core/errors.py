from fastapi import status


class PresignerError(Exception):
    """Base for every error that is rendered as ``{"error": message}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(PresignerError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(PresignerError):
    status_code = status.HTTP_401_UNAUTHORIZED


class MethodError(PresignerError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED


class UpstreamError(PresignerError):
    """The object store answered a signed request with a failure."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status: int | str | None = None) -> None:
        super().__init__(message)
        self.status = status


class InternalError(PresignerError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ConfigurationError(InternalError):
    pass
