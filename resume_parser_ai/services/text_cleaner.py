"""Clean and bound extracted resume text for LLM extraction."""

import re

from resume_parser_ai.config import MAX_LLM_CHARS
from resume_parser_ai.utils.logger import get_logger

logger = get_logger(__name__)

SPECIAL_TOKEN_RE = re.compile(r"<\|[^|]+\|>")
# U+FFFD, its UTF-8 bytes read as Latin-1, and the byte-order mark
ARTIFACT_RE = re.compile(r"\ufffd|\u00ef\u00bf\u00bd|\ufeff")
CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F-\x9F]")
PDF_TYPE_RE = re.compile(r"/Type\s*/[A-Za-z]+")
LINE_BREAK_RE = re.compile(r"\r\n?")
INLINE_SPACE_RE = re.compile(r"[ \t]+")
TRAILING_SPACE_RE = re.compile(r"[ \t]+\n")
BLANK_RUN_RE = re.compile(r"\n{4,}")

SENTENCE_TERMINATORS = (".", "!", "?")


def _clean_once(text: str) -> str:
    t = LINE_BREAK_RE.sub("\n", text)
    t = SPECIAL_TOKEN_RE.sub("", t)
    t = ARTIFACT_RE.sub("", t)
    t = CONTROL_CHARS_RE.sub("", t)
    t = PDF_TYPE_RE.sub("", t)
    t = INLINE_SPACE_RE.sub(" ", t)
    t = TRAILING_SPACE_RE.sub("\n", t)
    t = BLANK_RUN_RE.sub("\n\n\n", t)
    return t.strip()


def sanitize_text(text: str) -> str:
    """
    Remove model tokens, encoding artifacts, control characters and stray PDF
    type declarations; collapse inline whitespace and cap blank lines at two.

    Removing one pattern can join fragments into another (``<|a<|b|>|>``), so
    the pass repeats until the text stops changing.
    """
    if not text:
        return ""
    cleaned = _clean_once(text)
    while True:
        again = _clean_once(cleaned)
        if again == cleaned:
            return cleaned
        cleaned = again


def truncate_for_llm(text: str, max_chars: int = MAX_LLM_CHARS) -> str:
    """
    Bound text to max_chars. Prefer cutting after the last sentence terminator
    or line break when it falls in the final 20% of the budget.
    """
    if text is None:
        return ""
    max_chars = max(0, int(max_chars))
    if len(text) <= max_chars:
        return text

    logger.info("Text truncated from %s to at most %s characters", len(text), max_chars)

    truncated = text[:max_chars]
    last_terminator = max(truncated.rfind(t) for t in SENTENCE_TERMINATORS)
    cut_point = max(last_terminator, truncated.rfind("\n"))
    if cut_point >= 0 and cut_point >= max_chars * 0.8:
        return truncated[: cut_point + 1]
    return truncated
