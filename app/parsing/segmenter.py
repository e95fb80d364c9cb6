from __future__ import annotations

import re

from .models import SECTION_NAMES, DocumentMetadata, ParsedDocument, ResumeSections, SectionName

CONTACT_BLOCK_MAX_LINES = 10

_SECTION_HEADER_SYNONYMS: dict[SectionName, tuple[str, ...]] = {
    "contact": (r"contact\s+info(?:rmation)?", r"personal\s+info(?:rmation)?", r"contact"),
    "summary": (
        r"professional\s+summary",
        r"career\s+objective",
        r"about\s+me",
        r"summary",
        r"objective",
        r"profile",
    ),
    "experience": (
        r"work\s+experience",
        r"professional\s+experience",
        r"work\s+history",
        r"employment",
        r"experience",
    ),
    "education": (r"educational\s+background", r"education", r"academic", r"qualifications"),
    "skills": (
        r"technical\s+skills",
        r"core\s+competencies",
        r"skills",
        r"expertise",
        r"proficiencies",
    ),
    "certifications": (
        r"professional\s+certifications?",
        r"certifications?",
        r"licenses?",
        r"credentials",
    ),
    "projects": (r"personal\s+projects?", r"key\s+projects?", r"projects?", r"portfolio"),
    "achievements": (
        r"achievements?",
        r"accomplishments?",
        r"awards?",
        r"honors?",
        r"recognition",
    ),
}

_SECTION_HEADER_PATTERNS: tuple[tuple[SectionName, re.Pattern[str]], ...] = tuple(
    (name, re.compile(rf"^(?:{'|'.join(synonyms)})\b", re.IGNORECASE))
    for name, synonyms in _SECTION_HEADER_SYNONYMS.items()
)

# Decoration allowed after a bare header word, e.g. "SKILLS:" or "Experience --".
_HEADER_TRAILER_CHARS = " \t:.-–—|"
_WORD_RE = re.compile(r"\S+")


def match_section_header(line: str) -> tuple[SectionName, str] | None:
    """Return (section, inline content) when ``line`` opens a section.

    A header is a synonym at the start of the line followed either by
    nothing but decoration or by a colon and inline content
    ("Skills: Python, SQL").
    """
    stripped = line.strip()
    if not stripped:
        return None
    for name, pattern in _SECTION_HEADER_PATTERNS:
        match = pattern.match(stripped)
        if match is None:
            continue
        rest = stripped[match.end():]
        if not rest.strip(_HEADER_TRAILER_CHARS):
            return name, ""
        if rest.lstrip().startswith(":"):
            return name, rest.lstrip()[1:].strip()
    return None


def is_section_header(line: str) -> bool:
    return match_section_header(line) is not None


def segment(full_text: str) -> ResumeSections:
    lines = full_text.split("\n")
    buffers: dict[SectionName, list[str]] = {name: [] for name in SECTION_NAMES}

    # Non-blank lines of the leading window, up to the first header, form the contact block.
    index = 0
    for position in range(min(len(lines), CONTACT_BLOCK_MAX_LINES)):
        line = lines[position].strip()
        if not line:
            continue
        if is_section_header(line):
            break
        buffers["contact"].append(line)
        index = position + 1

    current: SectionName | None = None
    for raw_line in lines[index:]:
        line = raw_line.strip()
        if not line:
            continue
        header = match_section_header(line)
        if header is not None:
            current, inline = header
            if inline:
                buffers[current].append(inline)
            continue
        if current is not None:
            buffers[current].append(line)

    return ResumeSections(**{name: "\n".join(buffers[name]) for name in SECTION_NAMES})


def count_words(text: str) -> int:
    return len(_WORD_RE.findall(text))


def build_parsed_document(full_text: str, *, page_count: int = 1, file_name: str = "") -> ParsedDocument:
    return ParsedDocument(
        full_text=full_text,
        sections=segment(full_text),
        metadata=DocumentMetadata(
            page_count=max(1, page_count),
            word_count=count_words(full_text),
            file_name=file_name,
        ),
    )
