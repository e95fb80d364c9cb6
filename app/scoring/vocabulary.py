from __future__ import annotations

from dataclasses import dataclass

from app.core.config.scoring import get_scoring_value


@dataclass(frozen=True)
class Vocabulary:
    action_words: tuple[str, ...]
    skill_keywords: tuple[str, ...]


def _string_list(path: str) -> tuple[str, ...]:
    raw = get_scoring_value(path)
    if not isinstance(raw, list) or not raw:
        raise RuntimeError(f"Scoring config value '{path}' must be a non-empty list.")
    return tuple(str(item) for item in raw)


def get_vocabulary() -> Vocabulary:
    return Vocabulary(
        action_words=_string_list("vocabularies.action_words"),
        skill_keywords=_string_list("vocabularies.skill_keywords"),
    )


def matching_terms(text: str, terms: tuple[str, ...]) -> list[str]:
    """Terms contained in ``text``, case-insensitive substring test."""
    lowered = text.lower()
    return [term for term in terms if term.lower() in lowered]


def count_terms(text: str, terms: tuple[str, ...]) -> int:
    return len(matching_terms(text, terms))


def contains_any_term(text: str, terms: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(term.lower() in lowered for term in terms)
