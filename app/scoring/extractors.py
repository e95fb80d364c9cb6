from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Protocol

from app.parsing.contact import extract_contact, extract_website
from app.parsing.models import SECTION_NAMES, ParsedDocument
from app.parsing.segmenter import count_words
from app.schemas.resume import ATS_FRIENDLY_TEMPLATES, Resume

from .evidence import (
    ContactEvidence,
    EducationEvidence,
    ExperienceEvidence,
    FormattingEvidence,
    KeywordEvidence,
    SkillsEvidence,
    SummaryEvidence,
)
from .vocabulary import Vocabulary, contains_any_term, count_terms, get_vocabulary

MIN_SUMMARY_CHARS = 20
MIN_EXPERIENCE_CHARS = 50
MIN_SKILLS_CHARS = 20
MIN_EDUCATION_CHARS = 20

_DIGIT_RE = re.compile(r"\d")
_NON_ASCII_RE = re.compile(r"[^\x00-\x7F]")
_BULLET_RE = re.compile(r"^\s*(?:[-*•·▪◦●‣⁃]|\d+[.)])\s+")
_DATE_RANGE_PATTERNS = (
    re.compile(r"\b(?:19|20)\d{2}\s*[-–—]\s*(?:(?:19|20)\d{2}|present|current|now)\b", re.IGNORECASE),
    re.compile(r"\b\d{1,2}/(?:19|20)\d{2}\b"),
    re.compile(
        r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?\s+(?:19|20)\d{2}\b",
        re.IGNORECASE,
    ),
)
_SKILL_SPLIT_RE = re.compile(r"[,;|•·\n]")
_SKILL_CATEGORY_PREFIX_RE = re.compile(r"^[A-Za-z][\w &/+-]{0,40}:\s*")
_ADVANCED_LEVEL_RE = re.compile(r"\b(?:advanced|expert)\b", re.IGNORECASE)
# Bare BA/BS/MA/MS are skipped after a comma ("Boston, MA") and before "Office".
_DEGREE_RE = re.compile(
    r"\b(?:bachelor|master|doctor|associate|diploma|"
    r"(?:mba|ph\.?\s?d|[bm]\.?\s?sc|[bm]\.?\s?eng|[bm]\.?\s?tech)\b|[bm]\.\s?[as]\.)"
    r"|(?<!,\s)(?<!,)\b[bm][as]\b(?!\s+office)",
    re.IGNORECASE,
)
_GPA_RE = re.compile(r"\b(?:c?gpa|grade point average)\b", re.IGNORECASE)
_MAX_SKILL_ITEM_CHARS = 60


class Extractor(Protocol):
    """Source-specific producer of per-category rubric evidence."""

    def contact(self) -> ContactEvidence: ...

    def summary(self) -> SummaryEvidence: ...

    def experience(self) -> ExperienceEvidence: ...

    def skills(self) -> SkillsEvidence: ...

    def education(self) -> EducationEvidence: ...

    def keywords(self) -> KeywordEvidence: ...

    def formatting(self) -> FormattingEvidence: ...


@dataclass
class _TextEntry:
    dated: bool = False
    description: list[str] = field(default_factory=list)
    highlights: list[str] = field(default_factory=list)


def has_date_range(line: str) -> bool:
    return any(pattern.search(line) for pattern in _DATE_RANGE_PATTERNS)


def split_experience_entries(text: str) -> list[_TextEntry]:
    """Group experience lines into roles; a non-bullet line carrying a date opens a new role.

    Lines ahead of the first dated line belong to the first role, so a title
    printed above its dates is not counted twice.
    """
    current = _TextEntry()
    entries = [current]
    seen_dated = False
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        bullet = _BULLET_RE.match(line)
        if bullet is None and has_date_range(line):
            if seen_dated:
                current = _TextEntry()
                entries.append(current)
            current.dated = True
            seen_dated = True
            continue
        if bullet is not None:
            current.highlights.append(line[bullet.end():].strip())
        else:
            current.description.append(line)
    return entries


def split_skill_items(text: str) -> list[str]:
    items: list[str] = []
    seen: set[str] = set()
    for raw_line in text.split("\n"):
        line = _BULLET_RE.sub("", raw_line.strip())
        line = _SKILL_CATEGORY_PREFIX_RE.sub("", line)
        for piece in _SKILL_SPLIT_RE.split(line):
            item = piece.strip(" \t.-")
            if not item or len(item) > _MAX_SKILL_ITEM_CHARS:
                continue
            key = item.lower()
            if key in seen:
                continue
            seen.add(key)
            items.append(item)
    return items


class TextExtractor:
    """Evidence derived from an uploaded or pasted resume's segmented text."""

    def __init__(self, document: ParsedDocument, vocabulary: Vocabulary | None = None) -> None:
        if document is None:
            raise TypeError("TextExtractor requires a parsed document.")
        self.document = document
        self.sections = document.sections
        self.vocabulary = vocabulary or get_vocabulary()

    def contact(self) -> ContactEvidence:
        block = self.sections.contact
        if not block.strip():
            return ContactEvidence(present=False)
        found = extract_contact(block)
        return ContactEvidence(
            present=True,
            name=found.name,
            email=found.email,
            phone=found.phone,
            location=found.location,
            linkedin=found.linkedin,
            website=extract_website(block),
        )

    def summary(self) -> SummaryEvidence:
        text = self.sections.summary.strip()
        if len(text) < MIN_SUMMARY_CHARS:
            return SummaryEvidence(present=False)
        return SummaryEvidence(
            present=True,
            word_count=count_words(text),
            has_action_word=contains_any_term(text, self.vocabulary.action_words),
            has_number=bool(_DIGIT_RE.search(text)),
        )

    def experience(self) -> ExperienceEvidence:
        text = self.sections.experience.strip()
        if len(text) < MIN_EXPERIENCE_CHARS:
            return ExperienceEvidence(present=False)

        entries = split_experience_entries(text)
        body = "\n".join(line for entry in entries for line in entry.description + entry.highlights)
        return ExperienceEvidence(
            present=True,
            entry_count=len(entries),
            has_action_word=contains_any_term(text, self.vocabulary.action_words),
            has_metric=bool(_DIGIT_RE.search(body)),
            has_detailed_description=any(
                len(" ".join(entry.description)) > 50 or len(entry.highlights) >= 2 for entry in entries
            ),
            undated_entries=sum(1 for entry in entries if not entry.dated),
        )

    def skills(self) -> SkillsEvidence:
        text = self.sections.skills.strip()
        if len(text) < MIN_SKILLS_CHARS:
            return SkillsEvidence(present=False)
        return SkillsEvidence(
            present=True,
            skill_count=len(split_skill_items(text)),
            keyword_overlap=count_terms(text, self.vocabulary.skill_keywords),
            has_advanced_level=bool(_ADVANCED_LEVEL_RE.search(text)),
        )

    def education(self) -> EducationEvidence:
        text = self.sections.education.strip()
        if len(text) < MIN_EDUCATION_CHARS:
            return EducationEvidence(present=False)

        lines = [line.strip() for line in text.split("\n") if line.strip()]
        degree_lines = sum(1 for line in lines if _DEGREE_RE.search(line))
        return EducationEvidence(
            present=True,
            entry_count=max(1, degree_lines),
            gpa_count=sum(1 for line in lines if _GPA_RE.search(line)),
            degree_token_present=degree_lines > 0,
        )

    def keywords(self) -> KeywordEvidence:
        text = self.document.full_text
        if count_words(text) == 0:
            return KeywordEvidence(present=False)
        return KeywordEvidence(
            present=True,
            action_word_count=count_terms(text, self.vocabulary.action_words),
            skill_keyword_count=count_terms(text, self.vocabulary.skill_keywords),
        )

    def formatting(self) -> FormattingEvidence:
        metadata = self.document.metadata
        return FormattingEvidence(
            present=metadata.word_count > 0,
            page_count=metadata.page_count,
            word_count=metadata.word_count,
            sections_present=self.sections.non_empty_count(),
            has_non_ascii=bool(_NON_ASCII_RE.search(self.document.full_text)),
        )


class FormExtractor:
    """Evidence derived from a structured resume built in the editor."""

    def __init__(self, resume: Resume, vocabulary: Vocabulary | None = None) -> None:
        if resume is None:
            raise TypeError("FormExtractor requires a resume.")
        self.resume = resume
        self.vocabulary = vocabulary or get_vocabulary()

    def contact(self) -> ContactEvidence:
        info = self.resume.personal_info
        values = {
            "name": info.full_name.strip(),
            "email": info.email.strip(),
            "phone": info.phone.strip(),
            "location": info.location.strip(),
            "linkedin": info.linkedin.strip(),
            "website": info.website.strip(),
        }
        return ContactEvidence(present=any(values.values()), **values)

    def summary(self) -> SummaryEvidence:
        text = self.resume.personal_info.summary.strip()
        if not text:
            return SummaryEvidence(present=False)
        return SummaryEvidence(
            present=True,
            word_count=count_words(text),
            has_action_word=contains_any_term(text, self.vocabulary.action_words),
            has_number=bool(_DIGIT_RE.search(text)),
        )

    def experience(self) -> ExperienceEvidence:
        entries = self.resume.experience
        if not entries:
            return ExperienceEvidence(present=False)

        missing: list[str] = []
        has_action = has_metric = detailed = False
        for index, entry in enumerate(entries, start=1):
            if not entry.company.strip():
                missing.append(f"Experience {index}: Company name missing")
            if not entry.position.strip():
                missing.append(f"Experience {index}: Job title missing")
            body = " ".join([entry.description, *entry.highlights])
            has_action = has_action or contains_any_term(body, self.vocabulary.action_words)
            has_metric = has_metric or bool(_DIGIT_RE.search(body))
            detailed = detailed or len(entry.description) > 50 or len(entry.highlights) >= 2

        return ExperienceEvidence(
            present=True,
            entry_count=len(entries),
            has_action_word=has_action,
            has_metric=has_metric,
            has_detailed_description=detailed,
            undated_entries=sum(1 for entry in entries if not entry.start_date.strip()),
            missing_fields=missing,
        )

    def skills(self) -> SkillsEvidence:
        skills = self.resume.skills
        if not skills:
            return SkillsEvidence(present=False)
        names = [skill.name.lower() for skill in skills]
        overlap = sum(
            1 for keyword in self.vocabulary.skill_keywords if any(keyword.lower() in name for name in names)
        )
        return SkillsEvidence(
            present=True,
            skill_count=len(skills),
            keyword_overlap=overlap,
            has_advanced_level=any(skill.level in ("advanced", "expert") for skill in skills),
        )

    def education(self) -> EducationEvidence:
        entries = self.resume.education
        if not entries:
            return EducationEvidence(present=False)

        missing: list[str] = []
        for index, entry in enumerate(entries, start=1):
            if not entry.institution.strip():
                missing.append(f"Education {index}: Institution name missing")
            if not entry.degree.strip():
                missing.append(f"Education {index}: Degree missing")
        return EducationEvidence(
            present=True,
            entry_count=len(entries),
            gpa_count=sum(1 for entry in entries if entry.gpa.strip()),
            missing_fields=missing,
        )

    def keywords(self) -> KeywordEvidence:
        text = self.keyword_text()
        if count_words(text) == 0:
            return KeywordEvidence(present=False)
        return KeywordEvidence(
            present=True,
            action_word_count=count_terms(text, self.vocabulary.action_words),
            skill_keyword_count=count_terms(text, self.vocabulary.skill_keywords),
        )

    def formatting(self) -> FormattingEvidence:
        text = self.full_text()
        word_count = count_words(text)
        sections = self.section_texts()
        return FormattingEvidence(
            present=word_count > 0,
            page_count=1,
            word_count=word_count,
            sections_present=sum(1 for name in SECTION_NAMES if sections.get(name, "").strip()),
            has_non_ascii=bool(_NON_ASCII_RE.search(text)),
            ats_friendly_template=self.resume.template in ATS_FRIENDLY_TEMPLATES,
        )

    def keyword_text(self) -> str:
        resume = self.resume
        parts: list[str] = [resume.personal_info.summary]
        for entry in resume.experience:
            parts.append(entry.description)
            parts.extend(entry.highlights)
        parts.extend(skill.name for skill in resume.skills)
        for project in resume.projects:
            parts.append(project.description)
            parts.extend(project.technologies)
        return " ".join(part for part in parts if part)

    def section_texts(self) -> dict[str, str]:
        resume = self.resume
        info = resume.personal_info

        def join(parts: list[str]) -> str:
            return "\n".join(part for part in parts if part and part.strip())

        return {
            "contact": join([info.full_name, info.email, info.phone, info.location, info.linkedin, info.website]),
            "summary": info.summary,
            "experience": join(
                [
                    value
                    for entry in resume.experience
                    for value in (entry.position, entry.company, entry.location, entry.description, *entry.highlights)
                ]
            ),
            "education": join(
                [
                    value
                    for entry in resume.education
                    for value in (entry.degree, entry.field, entry.institution, entry.gpa, entry.description)
                ]
            ),
            "skills": join([skill.name for skill in resume.skills]),
            "certifications": join(
                [value for cert in resume.certifications for value in (cert.name, cert.issuer)]
            ),
            "projects": join(
                [
                    value
                    for project in resume.projects
                    for value in (project.name, project.description, *project.technologies)
                ]
            ),
            "achievements": "",
        }

    def full_text(self) -> str:
        return "\n".join(text for text in self.section_texts().values() if text)
