"""Extract raw text from uploaded CV files (PDF, DOCX, TXT). In-memory only."""

from io import BytesIO
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from docx import Document as DocxDocument

from resume_parser_ai.config import SUPPORTED_EXTENSIONS, ParserSettings
from resume_parser_ai.cv_pipeline.pdf_strategies import (
    extract_raw_text,
    extract_with_pdfplumber,
    extract_with_pypdf,
)
from resume_parser_ai.errors import ErrorKind, ResumeParserError
from resume_parser_ai.schemas.document import Document, ExtractedText, ExtractionAttempt
from resume_parser_ai.services.resume_gate import validate_resume_text
from resume_parser_ai.services.text_cleaner import sanitize_text, truncate_for_llm
from resume_parser_ai.utils.logger import get_logger

logger = get_logger(__name__)

Strategy = Tuple[str, Callable[[bytes], str]]


def _extract_docx(content: bytes) -> str:
    """Extract paragraph and table text using python-docx."""
    doc = DocxDocument(BytesIO(content))
    parts = [p.text for p in doc.paragraphs if p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            cells = []
            for cell in row.cells:
                value = cell.text.strip()
                if value and value not in cells:
                    cells.append(value)
            if cells:
                parts.append(" | ".join(cells))
    return "\n".join(parts)


def _extract_txt(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


# Ordered per extension; looked up at call time.
STRATEGIES: Dict[str, List[Strategy]] = {
    ".pdf": [
        ("pypdf", extract_with_pypdf),
        ("pdfplumber", extract_with_pdfplumber),
        ("raw", extract_raw_text),
    ],
    ".docx": [("python-docx", _extract_docx)],
    ".txt": [("utf-8", _extract_txt)],
}

EMPTY_MESSAGES = {
    ".pdf": "PDF file appears to be empty, corrupted, or contains no extractable text",
    ".docx": "DOCX file appears to be empty or contains no extractable text",
    ".txt": "TXT file is empty",
}

SUGGESTIONS = {
    ".pdf": (
        "Try converting the PDF to a text-based format, or ensure it is not a scanned image. "
        "You can also try saving it from a different PDF viewer."
    ),
    ".docx": "Ensure the file is a valid DOCX document",
    ".txt": "Ensure the file contains UTF-8 text",
}


def file_too_large(size: int, max_bytes: int, details: Dict[str, object]) -> ResumeParserError:
    size_mb = size / (1024 * 1024)
    return ResumeParserError(
        ErrorKind.FILE_ERROR,
        f"File too large: {size_mb:.2f}MB (max {max_bytes / (1024 * 1024):.0f}MB)",
        {
            **details,
            "size": size,
            "suggestion": "Try compressing the file or splitting into smaller files",
        },
    )


def check_document(document: Document, max_bytes: int) -> None:
    """Raise FILE_ERROR when the document is missing, empty, too large or of an unsupported type."""
    if document is None or document.content is None:
        raise ResumeParserError(
            ErrorKind.FILE_ERROR,
            "File not found or not readable",
            {"suggestion": "Verify the file was uploaded correctly"},
        )
    details = {"filename": document.filename}
    if document.size == 0:
        raise ResumeParserError(ErrorKind.FILE_ERROR, "File is empty", details)
    if document.size > max_bytes:
        raise file_too_large(document.size, max_bytes, details)
    ext = document.extension
    if ext not in STRATEGIES:
        raise ResumeParserError(
            ErrorKind.FILE_ERROR,
            f"Unsupported file format: {ext or '(none)'}. Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}",
            {
                **details,
                "extension": ext,
                "supportedFormats": list(SUPPORTED_EXTENSIONS),
                "suggestion": "Convert your file to PDF, DOCX, or TXT format",
            },
        )


def iter_attempts(document: Document) -> Iterator[ExtractionAttempt]:
    """Run the document's strategies one at a time, yielding each outcome lazily."""
    for name, fn in STRATEGIES.get(document.extension, []):
        logger.info("Trying %s...", name)
        try:
            attempt = ExtractionAttempt(method=name, text=fn(document.content) or "")
        except Exception as e:
            logger.warning("%s failed: %s", name, e)
            attempt = ExtractionAttempt(method=name, error=str(e) or type(e).__name__)
        yield attempt


def extract_raw(document: Document, settings: ParserSettings) -> ExtractedText:
    """
    Return text from the first strategy whose trimmed output exceeds
    settings.min_extracted_chars. Raise EXTRACTION_ERROR when all fail.
    """
    check_document(document, settings.max_file_bytes)
    ext = document.extension
    logger.info("File type: %s (%s bytes)", ext, document.size)

    attempts: List[ExtractionAttempt] = []
    last_error: Optional[str] = None
    for attempt in iter_attempts(document):
        attempts.append(attempt)
        if attempt.error is not None:
            last_error = attempt.error
            continue
        if attempt.char_count > settings.min_extracted_chars:
            logger.info("Extracted with %s: %s characters", attempt.method, len(attempt.text))
            return ExtractedText(text=attempt.text, method=attempt.method, attempts=attempts)
        if attempt.char_count > 0:
            logger.warning(
                "%s extracted only %s characters, trying next method...",
                attempt.method,
                attempt.char_count,
            )

    raise ResumeParserError(
        ErrorKind.EXTRACTION_ERROR,
        EMPTY_MESSAGES.get(ext, "No extractable text found"),
        {
            "filename": document.filename,
            "lastError": last_error,
            "attempts": [
                {"method": a.method, "characters": a.char_count, "error": a.error} for a in attempts
            ],
            "suggestion": SUGGESTIONS.get(ext),
        },
    )


def extract_text(document: Document, settings: ParserSettings) -> str:
    """
    Extract, clean, gate and bound the document text.
    Returns the text that will be sent to the model.
    """
    extracted = extract_raw(document, settings)

    logger.info("Cleaning extracted text (%s chars)...", len(extracted.text))
    cleaned = sanitize_text(extracted.text)
    logger.info("Cleaned to %s chars", len(cleaned))

    verdict = validate_resume_text(
        cleaned,
        min_chars=settings.min_resume_chars,
        keywords=settings.resume_keywords,
        min_keyword_matches=settings.min_keyword_matches,
        preview_chars=settings.preview_chars,
    )
    if not verdict.valid:
        raise ResumeParserError(
            ErrorKind.EXTRACTION_ERROR,
            f"Extracted text does not appear to be a resume: {verdict.reason}",
            {
                "filename": document.filename,
                "method": extracted.method,
                "matchedKeywords": verdict.matched_keywords,
                "preview": verdict.preview,
                "suggestion": "Upload a resume containing contact details and sections such as experience or education",
            },
        )

    return truncate_for_llm(cleaned, settings.max_llm_chars)
