"""HTTP error types carrying the API's JSON error body.

Every error response has the shape `{"error": ..., "message": ...}`,
plus `details` for validation failures. Handlers raise these and the
application's exception handler renders `detail` as the response body.
"""

from typing import List, Optional

from fastapi import HTTPException

NOT_FOUND_BODY = {"error": "Not found", "message": "The requested endpoint does not exist"}
SERVER_ERROR_BODY = {"error": "Internal server error", "message": "Something went wrong"}


class ApiError(HTTPException):
    """An `HTTPException` whose detail is the full JSON response body."""
    def __init__(self, status_code: int, error: str, message: str, details: Optional[List[str]] = None):
        body = {"error": error, "message": message}
        if details is not None:
            body["details"] = details
        super().__init__(status_code=status_code, detail=body)


class ValidationFailed(ApiError):
    def __init__(self, details: List[str]):
        super().__init__(400, "Validation error", "Please correct the following errors", details)


class InvalidId(ApiError):
    def __init__(self):
        super().__init__(400, "Invalid ID format", "ID must be a number")


class InvalidBody(ApiError):
    def __init__(self):
        super().__init__(400, "Invalid request body", "Request body must be a JSON object or form data")


class RecordNotFound(ApiError):
    def __init__(self):
        super().__init__(404, "Not found", "Work experience not found")


class StorageFailure(ApiError):
    """A database error at a named stage of a request, reported as 500."""
    def __init__(self, message: str):
        super().__init__(500, "Internal server error", message)
