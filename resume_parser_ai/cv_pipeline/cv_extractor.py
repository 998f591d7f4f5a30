"""LLM-based extraction of a structured resume from cleaned CV text."""

import asyncio
import json
from typing import Any, Dict, Optional

import httpx
from openai import (
    APIConnectionError,
    APIStatusError,
    APIResponseValidationError,
    APITimeoutError,
    AsyncOpenAI,
    InternalServerError,
    RateLimitError,
)
from openai.types.chat import ChatCompletion

from resume_parser_ai.config import ParserSettings
from resume_parser_ai.cv_pipeline.response_parser import recover_json
from resume_parser_ai.errors import ErrorKind, ResumeParserError
from resume_parser_ai.utils.helpers import make_preview
from resume_parser_ai.utils.logger import get_logger

logger = get_logger(__name__)

CV_EXTRACTION_SYSTEM_PROMPT = "You are a resume parser. Return ONLY valid JSON, no markdown, no explanations."

RESUME_JSON_SHAPE = """{
  "personal": {
    "fullName": "string or null",
    "email": "string or null",
    "phone": "string or null",
    "location": "string or null",
    "linkedin": "string or null",
    "portfolio": "string or null"
  },
  "summary": "string or null",
  "experience": [
    {
      "company": "string",
      "title": "string",
      "startDate": "string or null",
      "endDate": "string or null",
      "current": true or false,
      "description": "string or null",
      "location": "string or null"
    }
  ],
  "education": [
    {
      "institution": "string",
      "degree": "string or null",
      "field": "string or null",
      "graduationDate": "string or null",
      "gpa": "string or null"
    }
  ],
  "skills": ["string"]
}"""

EXTRACTION_RULES = """Rules:
- Return ONLY the JSON object, nothing else
- No markdown formatting and no code block wrapper
- Use null for any missing information
- Extract ALL work experiences and education entries
- List ALL skills mentioned"""


def build_extraction_prompt(resume_text: str) -> str:
    """User message: the resume text embedded in the fixed extraction instructions."""
    return (
        "Extract information from this resume and return ONLY a valid JSON object.\n\n"
        f'Resume text:\n"""\n{resume_text}\n"""\n\n'
        "Return this exact JSON structure (use null for missing fields):\n\n"
        f"{RESUME_JSON_SHAPE}\n\n{EXTRACTION_RULES}"
    )


def _status_error(e: APIStatusError) -> ResumeParserError:
    status = e.status_code
    if status == 401:
        return ResumeParserError(
            ErrorKind.CONFIG_ERROR,
            "Invalid API key for the model service",
            {"statusCode": 401, "suggestion": "Verify your GROQ_API_KEY at https://console.groq.com/"},
        )
    if status == 429:
        return ResumeParserError(
            ErrorKind.LLM_ERROR,
            "Rate limit exceeded",
            {"statusCode": 429, "suggestion": "Wait a moment and try again"},
        )
    body: Any = e.body if e.body is not None else e.response.text
    return ResumeParserError(
        ErrorKind.LLM_ERROR,
        f"Model API error: {e.message}",
        {"statusCode": status, "response": body},
    )


def _malformed_response(body: Any, original: Optional[Exception] = None) -> ResumeParserError:
    details = {"response": make_preview(str(body), 500)}
    if original is not None:
        details["originalError"] = str(original)
    return ResumeParserError(ErrorKind.LLM_ERROR, "Invalid response from model API", details)


def _network_error(e: APIConnectionError, timeout: float) -> ResumeParserError:
    if isinstance(e, APITimeoutError):
        return ResumeParserError(
            ErrorKind.LLM_ERROR,
            f"Model request timed out after {timeout:g}s",
            {"suggestion": "Try again, or raise LLM_TIMEOUT_SECONDS"},
        )
    return ResumeParserError(
        ErrorKind.LLM_ERROR,
        f"Model request failed: {e}",
        {"originalError": str(e)},
    )


async def _create_completion(client: AsyncOpenAI, resume_text: str, settings: ParserSettings):
    """
    One chat completion, retried on rate limits, 5xx and network errors with
    linear backoff. Auth and other client errors are not retried.
    """
    max_retries = max(0, settings.llm_max_retries)
    for attempt in range(max_retries + 1):
        try:
            return await client.chat.completions.create(
                model=settings.model,
                messages=[
                    {"role": "system", "content": CV_EXTRACTION_SYSTEM_PROMPT},
                    {"role": "user", "content": build_extraction_prompt(resume_text)},
                ],
                temperature=settings.llm_temperature,
                max_tokens=settings.llm_max_tokens,
                response_format={"type": "json_object"},
            )
        except (RateLimitError, InternalServerError) as e:
            if attempt >= max_retries:
                raise _status_error(e) from e
            logger.warning(
                "LLM HTTP %s (attempt %s/%s): %s",
                e.status_code,
                attempt + 1,
                max_retries + 1,
                str(e)[:240],
            )
        except APIStatusError as e:
            raise _status_error(e) from e
        except APIResponseValidationError as e:
            raise _malformed_response(e.body if e.body is not None else e.response.text, e) from e
        except json.JSONDecodeError as e:
            raise _malformed_response(e.doc, e) from e
        except APIConnectionError as e:
            if attempt >= max_retries:
                raise _network_error(e, settings.llm_timeout_seconds) from e
            logger.warning(
                "LLM network error (attempt %s/%s): %s",
                attempt + 1,
                max_retries + 1,
                str(e)[:240],
            )
        await asyncio.sleep(settings.llm_retry_backoff * (attempt + 1))


async def extract_resume_fields(
    resume_text: str,
    settings: ParserSettings,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, Any]:
    """Call the model on bounded resume text and recover its JSON answer."""
    if not settings.api_key:
        raise ResumeParserError(
            ErrorKind.CONFIG_ERROR,
            "Groq API key is required",
            {"suggestion": "Set GROQ_API_KEY in .env. Get a free key at https://console.groq.com/"},
        )
    if not resume_text or not resume_text.strip():
        raise ResumeParserError(
            ErrorKind.LLM_ERROR,
            "Resume text is empty",
            {"suggestion": "Ensure the file contains extractable text"},
        )

    logger.info("Using model: %s", settings.model)
    client = AsyncOpenAI(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.llm_timeout_seconds,
        max_retries=0,
        http_client=http_client,
    )
    try:
        response = await _create_completion(client, resume_text, settings)
    finally:
        if http_client is None:
            await client.close()

    if not isinstance(response, ChatCompletion):
        raise _malformed_response(response)
    choice = response.choices[0] if response.choices else None
    content = choice.message.content if choice and choice.message else None
    if not content:
        raise _malformed_response(response)
    logger.info("Received %s characters from model", len(content))
    return recover_json(content, settings.preview_chars)
