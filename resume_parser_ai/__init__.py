"""Resume parsing: robust text extraction, LLM field extraction and JSON recovery."""

from resume_parser_ai.config import ParserSettings, load_settings
from resume_parser_ai.cv_pipeline import parse_resume, parse_resume_file, run_cv_pipeline
from resume_parser_ai.errors import ErrorKind, ResumeParserError, format_error
from resume_parser_ai.schemas.document import Document

__version__ = "0.1.0"

__all__ = [
    "ParserSettings",
    "load_settings",
    "Document",
    "ErrorKind",
    "ResumeParserError",
    "format_error",
    "parse_resume",
    "parse_resume_file",
    "run_cv_pipeline",
]
