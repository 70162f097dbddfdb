"""Error factories shared by use cases

NOT_FOUND covers both "does not exist" and "owned by another tenant" so
callers cannot probe for other tenants' records.
"""

from typing import Optional
from libs.result import Error, ErrorKind


def unauthenticated() -> Error:
    return Error(
        code="UNAUTHENTICATED",
        message="Not authenticated",
        reason="No tenant identity supplied",
        kind=ErrorKind.UNAUTHENTICATED,
    )


def not_found(entity: str, entity_id: Optional[str] = None) -> Error:
    suffix = f" {entity_id}" if entity_id else ""
    return Error(
        code=f"{entity.upper()}_NOT_FOUND",
        message=f"{entity.capitalize()}{suffix} not found",
        reason=f"{entity.capitalize()} does not exist or belongs to another tenant",
        kind=ErrorKind.NOT_FOUND,
    )


def validation(code: str, message: str, reason: Optional[str] = None) -> Error:
    return Error(code=code, message=message, reason=reason, kind=ErrorKind.VALIDATION)


def conflict(code: str, message: str, reason: Optional[str] = None) -> Error:
    return Error(code=code, message=message, reason=reason, kind=ErrorKind.CONFLICT)


def delivery(code: str, message: str, reason: Optional[str] = None) -> Error:
    return Error(code=code, message=message, reason=reason, kind=ErrorKind.DELIVERY)


def internal(code: str, message: str, exc: Exception) -> Error:
    return Error(code=code, message=message, reason=str(exc), kind=ErrorKind.INTERNAL)


def client_email_exists(email: str) -> Error:
    return conflict(
        "CLIENT_EMAIL_EXISTS",
        "A client with this email already exists",
        reason=f"email={email}",
    )
