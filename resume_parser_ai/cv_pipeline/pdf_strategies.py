"""PDF text extraction strategies, cheapest first. Each takes bytes and returns text or raises."""

import re
from io import BytesIO

from pypdf import PdfReader
import pdfplumber

from resume_parser_ai.utils.logger import get_logger

logger = get_logger(__name__)

# Literal strings in content streams: (text), with \( \) \\ escapes
_PDF_LITERAL_RE = re.compile(rb"\(((?:\\.|[^\\()])+)\)", re.DOTALL)
_PDF_ESCAPES = {
    b"n": "\n",
    b"r": "\r",
    b"t": "\t",
    b"(": "(",
    b")": ")",
    b"\\": "\\",
}


def extract_with_pypdf(content: bytes) -> str:
    """Fast structured extraction with pypdf."""
    reader = PdfReader(BytesIO(content))
    parts = []
    for page in reader.pages:
        page_text = page.extract_text() or ""
        if page_text.strip():
            parts.append(page_text)
    return "\n".join(parts).strip()


def extract_with_pdfplumber(content: bytes) -> str:
    """Layout-aware extraction with pdfplumber; slower but copes with more producers."""
    with pdfplumber.open(BytesIO(content)) as pdf:
        parts = []
        for page in pdf.pages:
            ptext = page.extract_text()
            if ptext:
                parts.append(ptext)
    return "\n\n".join(parts).strip()


def _unescape_literal(raw: bytes) -> str:
    out = []
    i = 0
    while i < len(raw):
        ch = raw[i : i + 1]
        if ch == b"\\" and i + 1 < len(raw):
            nxt = raw[i + 1 : i + 2]
            out.append(_PDF_ESCAPES.get(nxt, nxt.decode("latin-1")))
            i += 2
            continue
        out.append(ch.decode("latin-1"))
        i += 1
    return "".join(out)


def extract_raw_text(content: bytes) -> str:
    """
    Last resort: scrape parenthesised string literals straight from the file
    bytes. Works on some damaged files the parsers reject; output is noisy.
    """
    matches = _PDF_LITERAL_RE.findall(content)
    if not matches:
        raise ValueError("No text found in raw extraction")
    return " ".join(_unescape_literal(m) for m in matches).strip()
