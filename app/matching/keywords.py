from __future__ import annotations

import logging
import re

from app.core.config.scoring import get_scoring_value
from app.schemas.ats import KeywordMatchResult
from app.scoring.aggregate import round_half_up
from app.scoring.categories import match_level_for

logger = logging.getLogger(__name__)

_PUNCTUATION_RE = re.compile(r"[^\w\s]", re.ASCII)
_DEFAULT_MIN_TOKEN_LENGTH = 4
_DEFAULT_MAX_RESULTS = 30


def _stopwords() -> frozenset[str]:
    raw = get_scoring_value("keyword_matching.stopwords") or []
    return frozenset(str(word).lower() for word in raw)


def extract_job_keywords(job_description: str) -> list[str]:
    """Unique job-description keywords in first-occurrence order."""
    min_length = int(get_scoring_value("keyword_matching.min_token_length", _DEFAULT_MIN_TOKEN_LENGTH))
    stopwords = _stopwords()
    cleaned = _PUNCTUATION_RE.sub(" ", (job_description or "").lower())

    keywords: list[str] = []
    seen: set[str] = set()
    for token in cleaned.split():
        if len(token) < min_length or token in seen:
            continue
        seen.add(token)
        if token not in stopwords:
            keywords.append(token)
    return keywords


def match_keywords(resume_text: str, job_description: str) -> KeywordMatchResult:
    max_results = int(get_scoring_value("keyword_matching.max_results", _DEFAULT_MAX_RESULTS))
    keywords = extract_job_keywords(job_description)
    haystack = (resume_text or "").lower()

    matched = [keyword for keyword in keywords if keyword in haystack]
    missing = [keyword for keyword in keywords if keyword not in haystack]
    percentage = round_half_up(100 * len(matched) / len(keywords)) if keywords else 0

    logger.info(
        "keyword_match keywords=%s matched=%s percentage=%s",
        len(keywords),
        len(matched),
        percentage,
    )
    return KeywordMatchResult(
        matched_keywords=matched[:max_results],
        missing_keywords=missing[:max_results],
        match_percentage=percentage,
        match_level=match_level_for(percentage),
        total_keywords=len(keywords),
    )
