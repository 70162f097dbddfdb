from fastapi import status
from libs.result import Error, ErrorKind

STATUS_BY_KIND = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.DELIVERY: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(error: Error) -> int:
    return STATUS_BY_KIND.get(error.kind, status.HTTP_400_BAD_REQUEST)


class ClientError(Exception):
    """
    Raised by routes to turn a use case Error into an HTTP response

    The status code defaults to the one mapped from the error kind.
    Response body: {"error": {"code": ..., "message": ...}}
    """

    def __init__(self, error: Error, status_code: int = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or status_for(error)

    def to_dict(self) -> dict:
        return {"error": {"code": self.error.code, "message": self.error.message}}
