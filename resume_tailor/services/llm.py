from __future__ import annotations

import json
import logging
import os
import re
import time
from functools import lru_cache
from typing import Any

import openai
from openai import OpenAI

from resume_tailor.core.errors import LLMError

logger = logging.getLogger(__name__)

_FENCE_OPEN_RE = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r"\n?```\s*$")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def llm_enabled() -> bool:
    if not _env_bool("TOOLS_LLM_ENABLED", True):
        return False
    api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
    return bool(api_key) and not _looks_like_placeholder(api_key)


@lru_cache(maxsize=1)
def _client() -> OpenAI:
    return OpenAI(
        api_key=(os.getenv("OPENAI_API_KEY") or "").strip(),
        base_url=(os.getenv("OPENAI_BASE_URL") or None),
        timeout=float(os.getenv("TOOLS_LLM_TIMEOUT_S", "60")),
        max_retries=int(os.getenv("OPENAI_MAX_RETRIES", "2")),
    )


def _model() -> str:
    return (os.getenv("AI_MODEL") or os.getenv("OPENAI_MODEL") or "gpt-4").strip()


def strip_code_fences(text: str) -> str:
    cleaned = (text or "").strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_OPEN_RE.sub("", cleaned)
        cleaned = _FENCE_CLOSE_RE.sub("", cleaned)
    return cleaned.strip()


def parse_json_reply(text: str) -> Any:
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except ValueError as exc:
        logger.error("llm_json_parse_failed preview=%r", cleaned[:500])
        raise LLMError(
            "Failed to parse AI response. The AI may not have returned valid JSON.",
            reason="llm_invalid",
        ) from exc


def _api_error(exc: openai.APIStatusError) -> LLMError:
    if exc.status_code == 401:
        return LLMError("Invalid OpenAI API key. Please check your .env file.", reason="llm_auth")
    if exc.status_code == 429:
        return LLMError("OpenAI API rate limit exceeded. Please try again later.", reason="llm_rate_limited")
    if exc.status_code >= 500:
        return LLMError("OpenAI API server error. Please try again later.", reason="llm_server_error")
    return LLMError(f"AI request failed: {exc.message}", reason="llm_request_failed")


def json_completion(
    *,
    system_prompt: str,
    user_prompt: str,
    temperature: float = 0.7,
    max_output_tokens: int = 1000,
    tool_slug: str = "unknown",
) -> Any:
    if not llm_enabled():
        raise LLMError(
            "OpenAI API key is not configured. Please set OPENAI_API_KEY in your .env file.",
            reason="llm_disabled",
        )

    create_kwargs: dict[str, Any] = {
        "model": _model(),
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        "temperature": temperature,
        "max_tokens": max_output_tokens,
    }
    if (os.getenv("OPENAI_RESPONSE_FORMAT") or "").strip().lower() == "json":
        create_kwargs["response_format"] = {"type": "json_object"}

    started = time.perf_counter()
    try:
        response = _client().chat.completions.create(**create_kwargs)
    except openai.APIStatusError as exc:
        logger.warning("llm_request_failed tool=%s model=%s status=%s", tool_slug, _model(), exc.status_code)
        raise _api_error(exc) from exc
    except openai.APIError as exc:
        logger.warning("llm_request_failed tool=%s model=%s: %s", tool_slug, _model(), exc)
        raise LLMError(f"AI request failed: {exc}", reason="llm_unavailable") from exc

    content = response.choices[0].message.content if response.choices else ""
    latency_ms = int((time.perf_counter() - started) * 1000)
    logger.info(
        "llm_completion tool=%s model=%s prompt_len=%s latency_ms=%s",
        tool_slug,
        _model(),
        len(user_prompt),
        latency_ms,
    )
    if not content:
        raise LLMError("AI returned an empty response. Please try again.", reason="llm_empty")
    return parse_json_reply(content)
