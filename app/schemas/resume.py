from __future__ import annotations

from typing import Literal

from pydantic import Field

from app.schemas.base import CamelModel

SkillLevel = Literal["beginner", "intermediate", "advanced", "expert"]
TemplateType = Literal[
    "minimalist",
    "modern",
    "creative",
    "professional",
    "classic",
    "academic",
    "technical",
    "executive",
]

ATS_FRIENDLY_TEMPLATES: frozenset[str] = frozenset(
    {"minimalist", "professional", "academic", "technical", "executive"}
)


class PersonalInfo(CamelModel):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    website: str = ""
    summary: str = ""


class Education(CamelModel):
    id: str = ""
    institution: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: str = ""
    description: str = ""


class Experience(CamelModel):
    id: str = ""
    company: str = ""
    position: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""
    highlights: list[str] = Field(default_factory=list)


class Skill(CamelModel):
    id: str = ""
    name: str
    level: SkillLevel = "intermediate"


class Project(CamelModel):
    id: str = ""
    name: str = ""
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    link: str = ""
    start_date: str = ""
    end_date: str = ""


class Certification(CamelModel):
    id: str = ""
    name: str = ""
    issuer: str = ""
    date: str = ""
    expiry_date: str = ""
    credential_id: str = ""
    link: str = ""


class Resume(CamelModel):
    """Structured resume as edited in the builder forms."""

    id: str = ""
    name: str = "Untitled Resume"
    template: TemplateType = "modern"
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    education: list[Education] = Field(default_factory=list)
    experience: list[Experience] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
