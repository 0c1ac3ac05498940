from fastapi import status
from .base import build_response
from leasekeeper.exceptions import LeaseKeeperError


def conflict_error(error: str = "Credentials already exists"):
    return build_response(
        status.HTTP_409_CONFLICT,
        "failure",
        error="conflict",
        message=error,
    )


def unauthorized_error(error: str = "Invalid credentials"):
    return build_response(
        status.HTTP_401_UNAUTHORIZED,
        "failure",
        error="unauthorized",
        message=error,
    )


def internal_server_error(error: str = "Internal server error"):
    return build_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "failure",
        error="internal_server_error",
        message=error,
    )


def forbidden_error(error: str = "Access denied"):
    return build_response(
        status.HTTP_403_FORBIDDEN,
        "failure",
        error="forbidden",
        message=error,
    )


def error_from_exception(exc: LeaseKeeperError):
    """Turn a domain exception into the failure envelope with its own status code."""
    return build_response(
        exc.status_code,
        "failure",
        error=exc.code.lower(),
        message=exc.message,
    )
