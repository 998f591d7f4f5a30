"""Schema exports."""

from .document import Document, ExtractedText, ExtractionAttempt, LikenessVerdict
from .resume import Education, PersonalInfo, ResumeCandidate, WorkExperience
from .result import FieldWarning, ParseFailure, ParseSuccess, ValidationOutcome

__all__ = [
    "Document",
    "ExtractedText",
    "ExtractionAttempt",
    "LikenessVerdict",
    "PersonalInfo",
    "WorkExperience",
    "Education",
    "ResumeCandidate",
    "FieldWarning",
    "ValidationOutcome",
    "ParseSuccess",
    "ParseFailure",
]
