from __future__ import annotations

from app.parsing.contact import extract_contact
from app.parsing.models import ParsedDocument, SectionName
from app.schemas.ats import OptimizedPreview, PreviewSection

PLACEHOLDER_NAME = "Your Name"
CONTACT_FALLBACK_CHARS = 500

# Single-column order used by the ATS-friendly layout; contact renders as the header.
PREVIEW_SECTIONS: tuple[tuple[SectionName, str], ...] = (
    ("summary", "Professional Summary"),
    ("experience", "Work Experience"),
    ("skills", "Skills"),
    ("education", "Education"),
    ("certifications", "Certifications"),
    ("projects", "Projects"),
    ("achievements", "Achievements"),
)

_PARAGRAPH_SECTIONS: frozenset[str] = frozenset({"summary", "skills"})


def section_lines(text: str) -> list[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]


def build_optimized_preview(document: ParsedDocument) -> OptimizedPreview:
    sections = document.sections
    contact = extract_contact(sections.contact or document.full_text[:CONTACT_FALLBACK_CHARS])
    contact_lines = [
        value for value in (contact.email, contact.phone, contact.location, contact.linkedin) if value
    ]

    rendered: list[PreviewSection] = []
    for key, title in PREVIEW_SECTIONS:
        lines = section_lines(sections.get(key))
        if not lines:
            continue
        if key in _PARAGRAPH_SECTIONS:
            lines = [" ".join(lines)]
        rendered.append(PreviewSection(title=title, lines=lines))

    return OptimizedPreview(
        name=contact.name or PLACEHOLDER_NAME,
        contact_lines=contact_lines,
        sections=rendered,
    )
