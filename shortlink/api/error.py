from fastapi import status
from libs.result import Error
from shortlink.domain.entities import ErrorCode


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


# Error codes the client can act on; anything else is a server error
CLIENT_ERROR_STATUS = {
    ErrorCode.MISSING_OR_INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_NOT_FOUND: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.NOT_AUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.ACCOUNT_DISABLED: status.HTTP_403_FORBIDDEN,
    ErrorCode.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.LINK_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ACCOUNT_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.KEY_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.LINK_EXPIRED: status.HTTP_410_GONE,
    ErrorCode.INVALID_KEY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_FIELDS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PAGINATION_PARAMETERS: status.HTTP_400_BAD_REQUEST,
}


def to_http_error(error: Error, overrides: dict = None) -> Exception:
    """
    Map a use case Error to the exception the API raises.

    Args:
        error: Error from a failed Result
        overrides: Per-route status codes taking precedence over the defaults
    """
    status_code = (overrides or {}).get(error.code) or CLIENT_ERROR_STATUS.get(error.code)
    if status_code is None:
        return ServerError(error)
    return ClientError(error, status_code=status_code)
