"""CV upload pipeline: text extraction (PDF/DOCX/TXT), cleaning, LLM extraction, JSON recovery."""

from resume_parser_ai.cv_pipeline.pipeline import parse_resume, parse_resume_file, run_cv_pipeline
from resume_parser_ai.cv_pipeline.response_parser import find_json_object, recover_json
from resume_parser_ai.cv_pipeline.schema_validator import validate_resume_data
from resume_parser_ai.cv_pipeline.text_extractor import extract_raw, extract_text

__all__ = [
    "parse_resume",
    "parse_resume_file",
    "run_cv_pipeline",
    "extract_raw",
    "extract_text",
    "recover_json",
    "find_json_object",
    "validate_resume_data",
]
