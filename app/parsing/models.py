from __future__ import annotations

from typing import Literal

from pydantic import Field

from app.schemas.base import FrozenCamelModel

SectionName = Literal[
    "contact",
    "summary",
    "experience",
    "education",
    "skills",
    "certifications",
    "projects",
    "achievements",
]

SECTION_NAMES: tuple[SectionName, ...] = (
    "contact",
    "summary",
    "experience",
    "education",
    "skills",
    "certifications",
    "projects",
    "achievements",
)


class ResumeSections(FrozenCamelModel):
    contact: str = ""
    summary: str = ""
    experience: str = ""
    education: str = ""
    skills: str = ""
    certifications: str = ""
    projects: str = ""
    achievements: str = ""

    def get(self, name: SectionName) -> str:
        return getattr(self, name)

    def non_empty_count(self) -> int:
        return sum(1 for name in SECTION_NAMES if self.get(name).strip())


class DocumentMetadata(FrozenCamelModel):
    page_count: int = Field(default=1, ge=1)
    word_count: int = Field(default=0, ge=0)
    file_name: str = ""


class ParsedDocument(FrozenCamelModel):
    full_text: str
    sections: ResumeSections = Field(default_factory=ResumeSections)
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)


class ExtractedContact(FrozenCamelModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    location: str = ""
