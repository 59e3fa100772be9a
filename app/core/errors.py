from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class APIError(HTTPException):
    def __init__(self, status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status_code=status_code, detail=message)
        self.code = code
        self.details = details


class NotFoundError(APIError):
    def __init__(self, message: str = "Not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_404_NOT_FOUND, "NOT_FOUND", message, details)


class ValidationError(APIError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", message, details)


class ConflictError(APIError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_409_CONFLICT, "TURN_IN_PROGRESS", message, details)


class SchemaViolationError(APIError):
    """Model response could not be parsed into the required output schema."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_502_BAD_GATEWAY, "SCHEMA_VIOLATION", message, details)


class ModelCallError(APIError):
    """Transport, auth or quota failure while calling the model provider."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_502_BAD_GATEWAY, "MODEL_CALL_ERROR", message, details)


class PlaceLookupError(APIError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_404_NOT_FOUND, "PLACE_LOOKUP_FAILED", message, details)


class PlaceNotFoundError(PlaceLookupError):
    def __init__(self, name: str):
        super().__init__(f"No place matches '{name}'", {"name": name})


def error_content(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {"error": {"code": code, "message": message, "details": details}}
