"""Configuration loaded from environment variables."""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env


def _env_float(name: str, default: float) -> float:
    value = (os.getenv(name) or "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    return int(_env_float(name, float(default)))


# API keys – never hardcode
GROQ_API_KEY: str = (os.getenv("GROQ_API_KEY") or os.getenv("LLM_API_KEY") or "").strip()
MODEL_NAME: str = (os.getenv("LLM_MODEL") or "llama-3.1-8b-instant").strip()
LLM_BASE_URL: str = (os.getenv("LLM_BASE_URL") or "https://api.groq.com/openai/v1").strip()

# Model call settings
LLM_TIMEOUT_SECONDS: float = _env_float("LLM_TIMEOUT_SECONDS", 60.0)
LLM_MAX_RETRIES: int = max(0, min(6, _env_int("LLM_MAX_RETRIES", 2)))
LLM_RETRY_BACKOFF: float = max(0.0, _env_float("LLM_RETRY_BACKOFF", 1.0))
LLM_MAX_TOKENS: int = _env_int("LLM_MAX_TOKENS", 3000)
LLM_TEMPERATURE: float = 0.1

# Upload limits
MAX_FILE_BYTES: int = 10 * 1024 * 1024
SUPPORTED_EXTENSIONS: Tuple[str, ...] = (".pdf", ".docx", ".txt")

# Extraction and gate heuristics
MIN_EXTRACTED_CHARS: int = 50
MIN_RESUME_CHARS: int = 100
MIN_KEYWORD_MATCHES: int = 2
MAX_LLM_CHARS: int = 8000
PREVIEW_CHARS: int = 500

RESUME_KEYWORDS: Tuple[str, ...] = (
    "experience",
    "education",
    "skill",
    "work",
    "employment",
    "degree",
    "university",
    "college",
    "bachelor",
    "master",
    "developer",
    "engineer",
    "manager",
    "analyst",
    "designer",
    "project",
    "responsibility",
    "achievement",
    "internship",
    "certification",
)


@dataclass(frozen=True)
class ParserSettings:
    """Immutable settings for one or many pipeline runs."""

    api_key: str = ""
    model: str = MODEL_NAME
    base_url: str = LLM_BASE_URL
    llm_timeout_seconds: float = LLM_TIMEOUT_SECONDS
    llm_max_retries: int = LLM_MAX_RETRIES
    llm_retry_backoff: float = LLM_RETRY_BACKOFF
    llm_max_tokens: int = LLM_MAX_TOKENS
    llm_temperature: float = LLM_TEMPERATURE
    max_file_bytes: int = MAX_FILE_BYTES
    min_extracted_chars: int = MIN_EXTRACTED_CHARS
    min_resume_chars: int = MIN_RESUME_CHARS
    min_keyword_matches: int = MIN_KEYWORD_MATCHES
    max_llm_chars: int = MAX_LLM_CHARS
    preview_chars: int = PREVIEW_CHARS
    resume_keywords: Tuple[str, ...] = field(default=RESUME_KEYWORDS)

    def with_overrides(self, **changes) -> "ParserSettings":
        return replace(self, **changes)


def load_settings(**overrides) -> ParserSettings:
    """
    Build settings from the environment, then apply keyword overrides.
    Call once at startup and pass the result into the pipeline.
    """
    settings = ParserSettings(api_key=GROQ_API_KEY)
    if overrides:
        settings = settings.with_overrides(**overrides)
    return settings
