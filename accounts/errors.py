"""Error taxonomy shared by the store, service and resolver layers."""

from http import HTTPStatus


class AccountError(Exception):
    """Base class for every error the account service reports.

    ``status_code`` is only consulted by the HTTP binding when it turns a
    propagated error into a response.
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AccountError):
    """Malformed or duplicate input, rejected before it reaches the store."""

    status_code = HTTPStatus.BAD_REQUEST


class AuthError(AccountError):
    """Credential mismatch."""

    status_code = HTTPStatus.UNAUTHORIZED


class NotFoundError(AccountError):
    """Referenced entity does not exist."""

    status_code = HTTPStatus.NOT_FOUND


class StoreError(AccountError):
    """Backend failure with an opaque cause."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
