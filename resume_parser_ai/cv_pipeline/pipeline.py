"""
End-to-end resume parsing: document bytes in, success or failure envelope out.

Every stage raises ResumeParserError; this module is the only place those
errors are turned into the uniform failure envelope.
"""

import asyncio
from pathlib import Path
from typing import Any, Dict, Optional, Union

import httpx

from resume_parser_ai.config import ParserSettings, load_settings
from resume_parser_ai.cv_pipeline.cv_extractor import extract_resume_fields
from resume_parser_ai.cv_pipeline.schema_validator import validate_resume_data
from resume_parser_ai.cv_pipeline.text_extractor import extract_text, file_too_large
from resume_parser_ai.errors import ErrorKind, ResumeParserError, format_error
from resume_parser_ai.schemas.document import Document
from resume_parser_ai.schemas.result import ParseSuccess
from resume_parser_ai.utils.logger import get_logger

logger = get_logger(__name__)


def _require_api_key(settings: ParserSettings) -> None:
    if not settings.api_key:
        raise ResumeParserError(
            ErrorKind.CONFIG_ERROR,
            "Groq API key is required",
            {
                "suggestion": (
                    "Set GROQ_API_KEY in .env file or pass api_key in the settings. "
                    "Get a free key at https://console.groq.com/"
                )
            },
        )


async def parse_resume(
    document: Document,
    settings: ParserSettings,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, Any]:
    """
    Extract, gate, bound, send to the model, recover and validate.
    Returns {success: True, data, rawText, model, warnings} or
    {success: False, error: {type, message, details}}.
    """
    try:
        _require_api_key(settings)

        logger.info("Extracting text from resume %s...", document.filename or "(unnamed)")
        resume_text = extract_text(document, settings)

        logger.info("Parsing resume with %s...", settings.model)
        data = await extract_resume_fields(resume_text, settings, http_client=http_client)

        logger.info("Validating extracted data...")
        outcome = validate_resume_data(data)

        return ParseSuccess(
            data=data,
            raw_text=resume_text,
            model=settings.model,
            warnings=outcome.errors,
        ).to_dict()
    except ResumeParserError as e:
        logger.error("%s: %s", e.kind.value, e.message)
        return format_error(e)
    except Exception as e:
        logger.exception("Unexpected failure while parsing resume: %s", e)
        return format_error(e)


def run_cv_pipeline(
    file_bytes: bytes,
    filename: str,
    settings: Optional[ParserSettings] = None,
) -> Dict[str, Any]:
    """
    Sync wrapper around parse_resume for uploads held in memory.
    Uses a private event loop; safe to call from sync context (e.g. Streamlit).
    """
    settings = settings or load_settings()
    document = Document(content=file_bytes if file_bytes is not None else b"", filename=filename or "")
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(parse_resume(document, settings))
    finally:
        loop.close()


def parse_resume_file(
    file_path: Union[str, Path],
    settings: Optional[ParserSettings] = None,
) -> Dict[str, Any]:
    """Parse a resume stored on disk (PDF, DOCX or TXT)."""
    settings = settings or load_settings()
    path = Path(file_path)
    try:
        if not path.is_file():
            raise ResumeParserError(
                ErrorKind.FILE_ERROR,
                f"File not found: {path}",
                {"filePath": str(path), "suggestion": "Verify the file path is correct"},
            )
        try:
            size = path.stat().st_size
            if size > settings.max_file_bytes:
                raise file_too_large(size, settings.max_file_bytes, {"filePath": str(path)})
            content = path.read_bytes()
        except OSError as e:
            raise ResumeParserError(
                ErrorKind.FILE_ERROR,
                "Failed to read file information",
                {"filePath": str(path), "originalError": str(e)},
            ) from e
    except ResumeParserError as e:
        logger.error("%s: %s", e.kind.value, e.message)
        return format_error(e)
    return run_cv_pipeline(content, path.name, settings)
