"""Utility exports."""

from .helpers import extract_emails, has_phone_number, make_preview
from .logger import get_logger

__all__ = [
    "get_logger",
    "extract_emails",
    "has_phone_number",
    "make_preview",
]
