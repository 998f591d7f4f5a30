"""Recover a JSON object from free-form model output."""

import json
import re
from typing import Any, Dict, Optional

from resume_parser_ai.config import PREVIEW_CHARS
from resume_parser_ai.errors import ErrorKind, ResumeParserError
from resume_parser_ai.services.text_cleaner import SPECIAL_TOKEN_RE
from resume_parser_ai.utils.helpers import make_preview
from resume_parser_ai.utils.logger import get_logger

logger = get_logger(__name__)

# ``` or ```json opening a line, or ``` closing one; backticks inside values are left alone
CODE_FENCE_RE = re.compile(r"^[ \t]*```[A-Za-z0-9_+-]*|```[A-Za-z0-9_+-]*[ \t]*$", re.MULTILINE)


def _match_closing_brace(text: str, start: int) -> Optional[int]:
    """Index of the brace closing text[start], skipping braces inside string literals."""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def find_json_object(text: str) -> Optional[str]:
    """
    Return the first balanced top-level ``{...}`` substring, or None.
    When the first opening brace never closes (output cut off mid-object),
    every later brace is nested inside it, so there is no candidate.
    """
    if not text:
        return None
    start = text.find("{")
    if start == -1:
        return None
    end = _match_closing_brace(text, start)
    if end is None:
        return None
    return text[start : end + 1]


def clean_response_text(text: str) -> str:
    """Trim, drop code fences and special tokens."""
    raw = (text or "").strip()
    raw = CODE_FENCE_RE.sub("", raw)
    raw = SPECIAL_TOKEN_RE.sub("", raw)
    return raw.strip()


def _load_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def recover_json(text: str, preview_chars: int = PREVIEW_CHARS) -> Dict[str, Any]:
    """
    Parse the model response as a JSON object, salvaging it from fences,
    tokens and surrounding prose. Raises LLM_ERROR when nothing parses.
    """
    parsed = _load_object((text or "").strip())
    if parsed is not None:
        return parsed

    raw = clean_response_text(text)
    parsed = _load_object(raw)
    if parsed is not None:
        return parsed

    candidate = find_json_object(raw)
    if candidate is None:
        logger.warning("No JSON object in model response: %s", make_preview(raw, 200))
        raise ResumeParserError(
            ErrorKind.LLM_ERROR,
            "Could not extract JSON from model response",
            {"responsePreview": make_preview(raw, preview_chars)},
        )

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ResumeParserError(
            ErrorKind.LLM_ERROR,
            "Failed to parse JSON from model response",
            {"jsonString": make_preview(candidate, preview_chars), "originalError": str(e)},
        ) from e
    logger.info("Recovered JSON object from noisy model response")
    return parsed
