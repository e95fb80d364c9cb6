from __future__ import annotations

import logging
import os
import time
from functools import lru_cache

from openai import APIStatusError, OpenAI, OpenAIError, RateLimitError

from app.ai.config import load_ai_config

logger = logging.getLogger(__name__)


class AssistantLLMError(RuntimeError):
    def __init__(self, message: str, *, code: str = "llm_unavailable", status_code: int = 503):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def assistant_llm_enabled() -> bool:
    if not _env_bool("ASSISTANT_LLM_ENABLED", True):
        return False
    config = load_ai_config()
    return config.provider == "openai" and bool(config.api_key)


@lru_cache(maxsize=1)
def _client() -> OpenAI:
    config = load_ai_config()
    return OpenAI(
        api_key=config.api_key,
        base_url=config.base_url,
        timeout=config.timeout_s,
        max_retries=config.max_retries,
    )


def _is_quota_error(exc: APIStatusError) -> bool:
    if exc.status_code == 402:
        return True
    code = getattr(exc, "code", None)
    return code == "insufficient_quota"


def chat_completion(*, system_prompt: str, user_prompt: str, action: str = "unknown") -> str:
    """Run one chat completion and return the raw reply text."""
    if not assistant_llm_enabled():
        raise AssistantLLMError("AI assistant is not configured.", code="llm_disabled")

    config = load_ai_config()
    started = time.perf_counter()
    try:
        response = _client().chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=config.temperature,
            response_format={"type": "json_object"},
        )
    except RateLimitError as exc:
        if _is_quota_error(exc):
            raise AssistantLLMError(
                "AI credits exhausted. Please add credits to continue.", code="llm_quota", status_code=402
            ) from exc
        raise AssistantLLMError(
            "Rate limit exceeded. Please try again in a moment.", code="llm_rate_limited", status_code=429
        ) from exc
    except APIStatusError as exc:
        if _is_quota_error(exc):
            raise AssistantLLMError(
                "AI credits exhausted. Please add credits to continue.", code="llm_quota", status_code=402
            ) from exc
        logger.warning("assistant_llm_status_error action=%s status=%s", action, exc.status_code)
        raise AssistantLLMError("AI service error. Please try again.", code="llm_error") from exc
    except OpenAIError as exc:
        logger.warning("assistant_llm_failed action=%s model=%s: %s", action, config.model, exc)
        raise AssistantLLMError("AI service error. Please try again.", code="llm_error") from exc

    content = response.choices[0].message.content if response.choices else ""
    latency_ms = int((time.perf_counter() - started) * 1000)
    if not content:
        logger.warning("assistant_llm_empty action=%s latency_ms=%s", action, latency_ms)
        raise AssistantLLMError("AI service returned an empty response. Try again.", code="llm_invalid")

    logger.info("assistant_llm_completed action=%s model=%s latency_ms=%s", action, config.model, latency_ms)
    return str(content)
