"""Cheap pre-flight check that extracted text plausibly is a resume."""

from typing import Iterable, Optional

from resume_parser_ai.config import (
    MIN_KEYWORD_MATCHES,
    MIN_RESUME_CHARS,
    PREVIEW_CHARS,
    RESUME_KEYWORDS,
)
from resume_parser_ai.schemas.document import LikenessVerdict
from resume_parser_ai.utils.helpers import extract_emails, has_phone_number, make_preview


def validate_resume_text(
    text: str,
    min_chars: int = MIN_RESUME_CHARS,
    keywords: Optional[Iterable[str]] = None,
    min_keyword_matches: int = MIN_KEYWORD_MATCHES,
    preview_chars: int = PREVIEW_CHARS,
) -> LikenessVerdict:
    """
    Valid when the text is long enough and has an email, a phone number,
    or at least `min_keyword_matches` resume keywords.
    """
    if not text or len(text) < min_chars:
        length = len(text or "")
        return LikenessVerdict(
            valid=False,
            reason=f"Text too short ({length} characters, minimum {min_chars})",
            preview=make_preview(text, preview_chars),
        )

    lower_text = text.lower()
    has_email = bool(extract_emails(text))
    has_phone = has_phone_number(text)
    terms = RESUME_KEYWORDS if keywords is None else tuple(keywords)
    found = [term for term in terms if term.lower() in lower_text]

    if has_email or has_phone or len(found) >= min_keyword_matches:
        return LikenessVerdict(
            valid=True,
            matched_keywords=found,
            has_email=has_email,
            has_phone=has_phone,
        )

    return LikenessVerdict(
        valid=False,
        reason=(
            f"Missing typical resume indicators. Found {len(found)} keyword(s): "
            f"{', '.join(found) or 'none'}. Has email: {has_email}, Has phone: {has_phone}"
        ),
        preview=make_preview(text, preview_chars),
        matched_keywords=found,
        has_email=has_email,
        has_phone=has_phone,
    )
