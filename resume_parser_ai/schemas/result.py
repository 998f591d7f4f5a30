"""Envelopes returned by the pipeline entry points."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from resume_parser_ai.errors import ErrorKind


class FieldWarning(BaseModel):
    """One schema problem found in the model output. Never blocks the result."""

    type: str = ErrorKind.VALIDATION_ERROR.value
    field: str
    message: str


class ValidationOutcome(BaseModel):
    valid: bool
    errors: List[FieldWarning] = Field(default_factory=list)


class ParseSuccess(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: Dict[str, Any]
    raw_text: str = Field(..., alias="rawText")
    model: str
    warnings: List[FieldWarning] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ErrorInfo(BaseModel):
    type: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class ParseFailure(BaseModel):
    success: bool = False
    error: ErrorInfo

    @classmethod
    def from_envelope(cls, envelope: Dict[str, Any]) -> "ParseFailure":
        return cls(error=ErrorInfo(**envelope["error"]))

    def suggestion(self) -> Optional[str]:
        return self.error.details.get("suggestion")
