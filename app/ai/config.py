import os
from dataclasses import dataclass


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str
    base_url: str | None
    timeout_s: float
    max_retries: int
    temperature: float


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def load_ai_config() -> AIConfig:
    api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
    return AIConfig(
        provider=os.getenv("AI_PROVIDER", "openai").strip().lower(),
        model=(os.getenv("AI_MODEL") or os.getenv("OPENAI_MODEL") or "gpt-4o-mini").strip(),
        api_key="" if _looks_like_placeholder(api_key) else api_key,
        base_url=(os.getenv("OPENAI_BASE_URL") or None),
        timeout_s=_float_env("ASSISTANT_LLM_TIMEOUT_S", 30.0),
        max_retries=_int_env("OPENAI_MAX_RETRIES", 2),
        temperature=_float_env("ASSISTANT_TEMPERATURE", 0.7),
    )
