from typing import Dict, Optional

from fastapi import status
from libs.result import Error

from src.domain.errors import ErrorKind, kind_of

STATUS_BY_KIND = {
    ErrorKind.validation: status.HTTP_400_BAD_REQUEST,
    ErrorKind.unauthorized: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.forbidden: status.HTTP_403_FORBIDDEN,
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.conflict: status.HTTP_409_CONFLICT,
    ErrorKind.state: status.HTTP_409_CONFLICT,
    ErrorKind.upstream: status.HTTP_502_BAD_GATEWAY,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def to_http_error(error: Error, overrides: Optional[Dict[str, int]] = None) -> Exception:
    """
    Map a use case Error to the exception a route raises.

    Args:
        error: Error returned by a use case
        overrides: Route-specific status per error code

    Returns:
        ClientError with the status for the code's kind, or ServerError
        for codes outside the known set
    """
    if overrides and error.code in overrides:
        return ClientError(error, status_code=overrides[error.code])

    kind = kind_of(error.code)
    if kind is None:
        return ServerError(error)
    return ClientError(error, status_code=STATUS_BY_KIND[kind])
