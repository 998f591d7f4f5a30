"""Helper utilities for the resume parser."""

import re
from typing import List

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
# 555-123-4567, (555) 123 4567, 555.123.4567, 5551234567
PHONE_PATTERN = re.compile(r"\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}|\d{10}")


def extract_emails(text: str) -> List[str]:
    """Extract email addresses from text using regex."""
    if not text:
        return []
    return list(dict.fromkeys(EMAIL_PATTERN.findall(text)))


def has_phone_number(text: str) -> bool:
    return bool(text) and PHONE_PATTERN.search(text) is not None


def make_preview(text: str, limit: int = 500) -> str:
    """Bounded prefix of text for diagnostics."""
    if not text:
        return ""
    return text[: max(0, limit)]
