from __future__ import annotations

import re

from .models import ExtractedContact

_EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)*\.[A-Za-z]{2,}")
_PHONE_RE = re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
_LINKEDIN_RE = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)
_WEBSITE_RE = re.compile(
    r"\b(?:https?://)?(?:www\.)?[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*"
    r"\.(?:com|net|org|io|dev|me|app|co|ai|tech|site|xyz)\b(?:/[^\s,;|]*)?",
    re.IGNORECASE,
)

# Tried in order; the first pattern with any match wins.
_LOCATION_PATTERNS = (
    re.compile(r"\b([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)*,[ \t]*[A-Z]{2})\b"),
    re.compile(r"\b([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)*,[ \t]*[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)?)\b"),
)


def _first_match(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    return match.group(0).strip() if match else ""


def extract_location(text: str) -> str:
    for pattern in _LOCATION_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return ""


def extract_contact(text: str) -> ExtractedContact:
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    return ExtractedContact(
        name=lines[0] if lines else "",
        email=_first_match(_EMAIL_RE, text),
        phone=_first_match(_PHONE_RE, text),
        linkedin=_first_match(_LINKEDIN_RE, text),
        location=extract_location(text),
    )


def extract_website(text: str) -> str:
    """First personal URL in ``text``; emails and LinkedIn profiles are not websites."""
    cleaned = _EMAIL_RE.sub(" ", text)
    cleaned = re.sub(r"(?:https?://)?(?:www\.)?linkedin\.com\S*", " ", cleaned, flags=re.IGNORECASE)
    return _first_match(_WEBSITE_RE, cleaned)
