from __future__ import annotations

from app.schemas.ats import CategoryResult

from .categories import CategorySpec
from .evidence import (
    ContactEvidence,
    EducationEvidence,
    ExperienceEvidence,
    FormattingEvidence,
    KeywordEvidence,
    SkillsEvidence,
    SummaryEvidence,
)
from .vocabulary import Vocabulary, get_vocabulary

SUMMARY_MIN_WORDS = 30
SUMMARY_MAX_WORDS = 100
RESUME_MIN_WORDS = 300
RESUME_MAX_WORDS = 800
ATS_MAX_PAGES = 2


def _result(spec: CategorySpec, score: int, issues: list[str], suggestions: list[str]) -> CategoryResult:
    clamped = max(0, min(score, spec.max_score))
    return CategoryResult(
        id=spec.id,
        name=spec.label,
        score=clamped,
        max_score=spec.max_score,
        status=spec.status_for(clamped),
        issues=issues,
        suggestions=suggestions,
    )


def _missing(spec: CategorySpec, issue: str, suggestion: str) -> CategoryResult:
    return CategoryResult(
        id=spec.id,
        name=spec.label,
        score=0,
        max_score=spec.max_score,
        status="error",
        issues=[issue],
        suggestions=[suggestion],
    )


def score_contact(evidence: ContactEvidence, spec: CategorySpec) -> CategoryResult:
    if not evidence.present:
        return _missing(
            spec,
            "Contact information not found",
            "Add your full name, email address, and phone number at the top of your resume",
        )

    score = 0
    issues: list[str] = []
    suggestions: list[str] = []

    if evidence.name:
        score += 3
    else:
        issues.append("Full name not detected")

    if evidence.email:
        score += 3
        if "@" not in evidence.email:
            issues.append("Email format appears invalid")
    else:
        issues.append("Email address not found")

    if evidence.phone:
        score += 3
    else:
        issues.append("Phone number not found")

    if evidence.location:
        score += 3
    else:
        suggestions.append("Consider adding your location")

    if evidence.linkedin:
        score += 2
    else:
        suggestions.append("Adding LinkedIn profile increases credibility")

    if evidence.website:
        score += 1

    return _result(spec, score, issues, suggestions)


def score_summary(evidence: SummaryEvidence, spec: CategorySpec) -> CategoryResult:
    if not evidence.present:
        return _missing(
            spec,
            "Professional summary is missing or too short",
            "Add a 2-4 sentence summary highlighting your key qualifications",
        )

    score = 5
    suggestions: list[str] = []

    if SUMMARY_MIN_WORDS <= evidence.word_count <= SUMMARY_MAX_WORDS:
        score += 5
    elif evidence.word_count < SUMMARY_MIN_WORDS:
        suggestions.append("Summary is too short. Aim for 30-100 words")
    else:
        suggestions.append("Summary is too long. Keep it under 100 words")

    if evidence.has_action_word:
        score += 3
    else:
        suggestions.append('Include action verbs like "Led", "Developed", "Achieved"')

    if evidence.has_number:
        score += 2
    else:
        suggestions.append('Add quantifiable achievements (e.g., "5+ years experience")')

    return _result(spec, score, [], suggestions)


def score_experience(evidence: ExperienceEvidence, spec: CategorySpec) -> CategoryResult:
    if not evidence.present:
        return _missing(
            spec,
            "Work experience section is missing or too brief",
            "Add your work history with job titles, companies, and dates",
        )

    score = min(evidence.entry_count * 5, 15)
    issues = list(evidence.missing_fields)
    suggestions: list[str] = []

    if evidence.has_action_word:
        score += 4
    else:
        suggestions.append("Start bullet points with strong action verbs")

    if evidence.has_metric:
        score += 3
    else:
        suggestions.append('Quantify achievements with numbers and percentages (e.g., "Increased sales by 25%")')

    if evidence.has_detailed_description:
        score += 3
    else:
        suggestions.append("Add detailed descriptions with 2-4 bullet points per role")

    if evidence.undated_entries:
        suggestions.append("Add start and end dates to every role")

    return _result(spec, score, issues, suggestions)


def score_skills(
    evidence: SkillsEvidence, spec: CategorySpec, vocabulary: Vocabulary | None = None
) -> CategoryResult:
    if not evidence.present:
        return _missing(
            spec,
            "Skills section is missing or too brief",
            "Add a dedicated skills section with 5-10 relevant skills",
        )

    vocabulary = vocabulary or get_vocabulary()
    score = 0
    suggestions: list[str] = []

    if evidence.skill_count >= 10:
        score += 8
    elif evidence.skill_count >= 5:
        score += 5
    else:
        score += 2
        suggestions.append("List at least 5-10 relevant skills")

    if evidence.keyword_overlap >= 5:
        score += 5
    elif evidence.keyword_overlap >= 2:
        score += 3
    if evidence.keyword_overlap < 3:
        examples = ", ".join(vocabulary.skill_keywords[:5])
        suggestions.append(f"Include more industry-standard keywords like: {examples}")

    if evidence.has_advanced_level:
        score += 2
    else:
        suggestions.append('Mark your strongest skills as "Advanced" or "Expert"')

    return _result(spec, score, [], suggestions)


def score_education(evidence: EducationEvidence, spec: CategorySpec) -> CategoryResult:
    if not evidence.present:
        return _missing(
            spec,
            "Education section is missing",
            "Add your educational background with institution, degree, and dates",
        )

    score = min(evidence.entry_count * 4, 8) + evidence.gpa_count
    issues = list(evidence.missing_fields)
    suggestions: list[str] = []

    if evidence.degree_token_present is False:
        suggestions.append("Ensure degree title is clearly stated")
    if evidence.gpa_count == 0:
        suggestions.append("Consider adding GPA if it's 3.0 or higher")

    return _result(spec, score, issues, suggestions)


def score_keywords(evidence: KeywordEvidence, spec: CategorySpec) -> CategoryResult:
    if not evidence.present:
        return _missing(
            spec,
            "No readable text found for keyword analysis",
            "Make sure your resume contains selectable text rather than images",
        )

    score = 0
    issues: list[str] = []
    suggestions: list[str] = []

    actions = evidence.action_word_count
    if actions >= 10:
        score += 5
    elif actions >= 5:
        score += 3
    elif actions >= 2:
        score += 1
    if actions < 5:
        suggestions.append(f"Found {actions} action words. Aim for 10+ for better ATS matching")

    skills = evidence.skill_keyword_count
    if skills >= 8:
        score += 5
    elif skills >= 4:
        score += 3
    elif skills >= 2:
        score += 1
    if skills < 5:
        suggestions.append(f"Found {skills} industry keywords. Include more relevant skills")

    if score == 0:
        issues.append("No action verbs or industry keywords detected")

    return _result(spec, score, issues, suggestions)


def score_formatting(evidence: FormattingEvidence, spec: CategorySpec) -> CategoryResult:
    if not evidence.present:
        return _missing(
            spec,
            "No readable text found. The file may be a scanned image",
            "Upload a text-based PDF exported from a word processor",
        )

    score = 0
    issues: list[str] = []
    suggestions: list[str] = []

    if evidence.page_count <= ATS_MAX_PAGES:
        score += 3
    else:
        issues.append(f"Resume is {evidence.page_count} pages. ATS prefers 1-2 pages")

    if RESUME_MIN_WORDS <= evidence.word_count <= RESUME_MAX_WORDS:
        score += 2
    elif evidence.word_count < RESUME_MIN_WORDS:
        suggestions.append("Resume content is too brief. Add more detail to your experience")
    else:
        suggestions.append("Resume may be too long. Consider condensing to the most relevant content")

    if evidence.sections_present >= 5:
        score += 3
    elif evidence.sections_present >= 3:
        score += 2
    else:
        suggestions.append("Add more standard sections (Summary, Experience, Education, Skills)")

    if evidence.has_non_ascii:
        suggestions.append("Remove special characters and symbols that may confuse ATS parsers")
    else:
        score += 2

    if evidence.ats_friendly_template is False:
        suggestions.append("Consider using an ATS-friendly template for better compatibility")

    return _result(spec, score, issues, suggestions)
