from __future__ import annotations

from pydantic import BaseModel, Field


class ContactEvidence(BaseModel):
    present: bool
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    website: str = ""


class SummaryEvidence(BaseModel):
    present: bool
    word_count: int = 0
    has_action_word: bool = False
    has_number: bool = False


class ExperienceEvidence(BaseModel):
    present: bool
    entry_count: int = 0
    has_action_word: bool = False
    has_metric: bool = False
    has_detailed_description: bool = False
    undated_entries: int = 0
    missing_fields: list[str] = Field(default_factory=list)


class SkillsEvidence(BaseModel):
    present: bool
    skill_count: int = 0
    keyword_overlap: int = 0
    has_advanced_level: bool = False


class EducationEvidence(BaseModel):
    present: bool
    entry_count: int = 0
    gpa_count: int = 0
    missing_fields: list[str] = Field(default_factory=list)
    # Only the text path inspects degree tokens; form entries report missing fields instead.
    degree_token_present: bool | None = None


class KeywordEvidence(BaseModel):
    present: bool
    action_word_count: int = 0
    skill_keyword_count: int = 0


class FormattingEvidence(BaseModel):
    present: bool
    page_count: int = 1
    word_count: int = 0
    sections_present: int = 0
    has_non_ascii: bool = False
    ats_friendly_template: bool | None = None
