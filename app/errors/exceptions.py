from fastapi import HTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_502_BAD_GATEWAY,
)

class BadRequest(HTTPException):
    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=HTTP_400_BAD_REQUEST, detail=detail)

class NotFound(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=HTTP_404_NOT_FOUND, detail=detail)

class Unauthorized(HTTPException):
    def __init__(self, detail: str = "Unauthorized access"):
        super().__init__(status_code=HTTP_401_UNAUTHORIZED, detail=detail)

class Conflict(HTTPException):
    def __init__(self, detail: str = "Conflict"):
        super().__init__(status_code=HTTP_409_CONFLICT, detail=detail)

class BadGateway(HTTPException):
    def __init__(self, detail: str = "Upstream service error"):
        super().__init__(status_code=HTTP_502_BAD_GATEWAY, detail=detail)

class ValidationError(BadRequest):
    def __init__(self, detail: str = "Validation error"):
        super().__init__(detail=detail)

class InterviewNotFound(NotFound):
    def __init__(self, identifier: str = None):
        detail = f"Interview '{identifier}' not found." if identifier else "Interview not found."
        super().__init__(detail=detail)

class InvalidStateError(BadRequest):
    def __init__(self, status: str = None, detail: str = None):
        if detail is None:
            detail = f"Interview is not in progress (status: {status})." if status else "Interview is not in progress."
        super().__init__(detail=detail)
        self.status = status

class InvalidInputError(ValidationError):
    def __init__(self, detail: str = "userAnswer is required"):
        super().__init__(detail=detail)

class SessionConflictError(Conflict):
    def __init__(self, identifier: str = None):
        detail = (
            f"Interview '{identifier}' was modified by another request. Reload and try again."
            if identifier else "Interview was modified by another request."
        )
        super().__init__(detail=detail)

class UpstreamFailureError(BadGateway):
    def __init__(self, detail: str = "The AI service failed to respond."):
        super().__init__(detail=detail)

class ReportParseError(HTTPException):
    """Raised when the report model returns text that is not the expected JSON document."""
    def __init__(self, raw: str, reason: str = None):
        super().__init__(
            status_code=HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"error": "Could not parse AI response", "raw": raw},
        )
        self.raw = raw
        self.reason = reason
