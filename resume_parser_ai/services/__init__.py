"""Service exports."""

from .resume_gate import validate_resume_text
from .text_cleaner import sanitize_text, truncate_for_llm

__all__ = [
    "sanitize_text",
    "truncate_for_llm",
    "validate_resume_text",
]
