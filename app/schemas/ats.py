from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import Field, model_validator

from app.parsing.models import ParsedDocument
from app.schemas.base import CamelModel

SESSION_ID_MIN_LENGTH = 8
SESSION_ID_MAX_LENGTH = 200

CategoryStatus = Literal["good", "warning", "error"]


class CategoryId(str, Enum):
    CONTACT = "contact"
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    SKILLS = "skills"
    EDUCATION = "education"
    KEYWORDS = "keywords"
    FORMATTING = "formatting"


class CategoryResult(CamelModel):
    id: CategoryId
    name: str
    score: int = Field(ge=0)
    max_score: int = Field(ge=1)
    status: CategoryStatus
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _score_within_max(self) -> "CategoryResult":
        if self.score > self.max_score:
            raise ValueError("score must not exceed max_score")
        return self


class ATSAnalysisResult(CamelModel):
    overall_score: int = Field(ge=0, le=100)
    rating: str
    rubric_version: str
    categories: list[CategoryResult]
    critical_issues: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list, max_length=10)


class KeywordMatchResult(CamelModel):
    matched_keywords: list[str] = Field(default_factory=list, max_length=30)
    missing_keywords: list[str] = Field(default_factory=list, max_length=30)
    match_percentage: int = Field(ge=0, le=100)
    match_level: str
    total_keywords: int = Field(ge=0)


class AnalyzeTextRequest(CamelModel):
    text: str = Field(default="", max_length=100000)
    file_name: str = Field(default="pasted-resume.txt", max_length=255)
    page_count: int = Field(default=1, ge=1, le=50)


class KeywordMatchRequest(CamelModel):
    job_description: str = Field(min_length=1, max_length=50000)
    resume_text: str | None = Field(default=None, max_length=100000)
    session_id: str | None = Field(default=None, min_length=SESSION_ID_MIN_LENGTH, max_length=SESSION_ID_MAX_LENGTH)

    @model_validator(mode="after")
    def _needs_resume_source(self) -> "KeywordMatchRequest":
        if self.resume_text is None and not self.session_id:
            raise ValueError("Provide resumeText or the sessionId of an uploaded resume.")
        return self


class UploadAnalysisResponse(CamelModel):
    session_id: str
    document: ParsedDocument
    analysis: ATSAnalysisResult


class PreviewSection(CamelModel):
    title: str
    lines: list[str] = Field(default_factory=list)


class OptimizedPreview(CamelModel):
    name: str
    contact_lines: list[str] = Field(default_factory=list)
    sections: list[PreviewSection] = Field(default_factory=list)
