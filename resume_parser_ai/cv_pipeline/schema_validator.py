"""Soft validation of the recovered resume JSON against ResumeCandidate."""

from typing import Any

from pydantic import ValidationError

from resume_parser_ai.schemas.resume import ResumeCandidate
from resume_parser_ai.schemas.result import FieldWarning, ValidationOutcome
from resume_parser_ai.utils.logger import get_logger

logger = get_logger(__name__)


def _field_path(loc) -> str:
    return ".".join(str(part) for part in loc) or "(root)"


def validate_resume_data(data: Any) -> ValidationOutcome:
    """
    Check data against the resume shape. Problems are reported, never raised:
    the caller keeps the data either way.
    """
    try:
        ResumeCandidate.model_validate(data)
    except ValidationError as e:
        errors = [
            FieldWarning(field=_field_path(err.get("loc", ())), message=err.get("msg", "invalid"))
            for err in e.errors()
        ]
        logger.warning("Validation warnings: %s", [f"{w.field}: {w.message}" for w in errors])
        return ValidationOutcome(valid=False, errors=errors)
    return ValidationOutcome(valid=True)

