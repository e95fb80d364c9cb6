from .aggregate import aggregate, overall_score
from .analyzer import analyze_document, analyze_resume, score_categories
from .categories import CategorySpec, category_specs, rating_for, rubric_version
from .extractors import Extractor, FormExtractor, TextExtractor

__all__ = [
    "CategorySpec",
    "Extractor",
    "FormExtractor",
    "TextExtractor",
    "aggregate",
    "analyze_document",
    "analyze_resume",
    "category_specs",
    "overall_score",
    "rating_for",
    "rubric_version",
    "score_categories",
]
