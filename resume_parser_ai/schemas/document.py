"""Uploaded document and the intermediate values produced while extracting its text."""

import os
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """Uploaded file held in memory for one pipeline run; never written to disk."""

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(..., description="Raw file bytes")
    filename: str = Field(default="", description="Declared filename, used for its extension")

    @property
    def extension(self) -> str:
        return os.path.splitext((self.filename or "").strip())[1].lower()

    @property
    def size(self) -> int:
        return len(self.content)


class ExtractionAttempt(BaseModel):
    """Outcome of one extraction strategy."""

    method: str
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def char_count(self) -> int:
        return len((self.text or "").strip())


class ExtractedText(BaseModel):
    """Text produced by the first accepted strategy."""

    text: str = ""
    method: str
    attempts: List[ExtractionAttempt] = Field(default_factory=list)


class LikenessVerdict(BaseModel):
    """Result of the resume-likeness gate."""

    valid: bool
    reason: Optional[str] = None
    preview: Optional[str] = None
    matched_keywords: List[str] = Field(default_factory=list)
    has_email: bool = False
    has_phone: bool = False
