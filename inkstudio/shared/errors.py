"""Domain exceptions translated into the JSON envelope by the handlers in main.py"""

from typing import Optional


class StudioError(Exception):
    """Base class for errors that are safe to show to the API caller"""

    status_code = 400
    default_code: Optional[str] = None

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code


class ValidationError(StudioError):
    """Missing or malformed input, or a broken business invariant"""

    status_code = 400
    default_code = "VALIDATION_ERROR"


class NotFoundError(StudioError):
    status_code = 404
    default_code = "NOT_FOUND"
