"""Error type shared by every stage of the resume pipeline."""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    FILE_ERROR = "FILE_ERROR"
    EXTRACTION_ERROR = "EXTRACTION_ERROR"
    LLM_ERROR = "LLM_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ResumeParserError(Exception):
    """
    Tagged pipeline failure. `kind` selects the category, `details` carries
    structured diagnostics (file path, status code, suggestion, preview...).
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.kind = ErrorKind(kind)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind.value,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"ResumeParserError({self.kind.value}, {self.message!r})"


def format_error(error: BaseException) -> Dict[str, Any]:
    """Turn any exception into the failure envelope returned to callers."""
    if isinstance(error, ResumeParserError):
        return {"success": False, "error": error.to_dict()}
    return {
        "success": False,
        "error": {
            "type": ErrorKind.UNKNOWN_ERROR.value,
            "message": str(error) or "An unexpected error occurred",
            "details": {},
        },
    }
