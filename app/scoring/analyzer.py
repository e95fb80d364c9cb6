from __future__ import annotations

import logging
from collections.abc import Callable

from app.parsing.models import ParsedDocument
from app.schemas.ats import ATSAnalysisResult, CategoryId, CategoryResult
from app.schemas.resume import Resume

from .aggregate import aggregate
from .categories import CategorySpec, category_specs
from .extractors import Extractor, FormExtractor, TextExtractor
from .rubric import (
    score_contact,
    score_education,
    score_experience,
    score_formatting,
    score_keywords,
    score_skills,
    score_summary,
)
from .vocabulary import Vocabulary, get_vocabulary

logger = logging.getLogger(__name__)


def _scorers(
    extractor: Extractor, vocabulary: Vocabulary
) -> dict[CategoryId, Callable[[CategorySpec], CategoryResult]]:
    return {
        CategoryId.CONTACT: lambda spec: score_contact(extractor.contact(), spec),
        CategoryId.SUMMARY: lambda spec: score_summary(extractor.summary(), spec),
        CategoryId.EXPERIENCE: lambda spec: score_experience(extractor.experience(), spec),
        CategoryId.SKILLS: lambda spec: score_skills(extractor.skills(), spec, vocabulary),
        CategoryId.EDUCATION: lambda spec: score_education(extractor.education(), spec),
        CategoryId.KEYWORDS: lambda spec: score_keywords(extractor.keywords(), spec),
        CategoryId.FORMATTING: lambda spec: score_formatting(extractor.formatting(), spec),
    }


def score_categories(extractor: Extractor, vocabulary: Vocabulary | None = None) -> list[CategoryResult]:
    """Run every rubric category against one extractor, in declaration order."""
    scorers = _scorers(extractor, vocabulary or get_vocabulary())
    return [scorers[spec.id](spec) for spec in category_specs()]


def analyze_document(document: ParsedDocument) -> ATSAnalysisResult:
    if document is None:
        raise TypeError("analyze_document requires a parsed document.")
    vocabulary = get_vocabulary()
    result = aggregate(score_categories(TextExtractor(document, vocabulary), vocabulary))
    logger.info(
        "ats_document_scored file=%s overall=%s critical=%s",
        document.metadata.file_name or "-",
        result.overall_score,
        len(result.critical_issues),
    )
    return result


def analyze_resume(resume: Resume) -> ATSAnalysisResult:
    if resume is None:
        raise TypeError("analyze_resume requires a resume.")
    vocabulary = get_vocabulary()
    result = aggregate(score_categories(FormExtractor(resume, vocabulary), vocabulary))
    logger.info(
        "ats_resume_scored template=%s overall=%s critical=%s",
        resume.template,
        result.overall_score,
        len(result.critical_issues),
    )
    return result
