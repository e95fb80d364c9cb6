from __future__ import annotations

import math
from collections.abc import Sequence

from app.schemas.ats import ATSAnalysisResult, CategoryResult

from .categories import rating_for, rubric_version

MAX_IMPROVEMENTS = 10


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def overall_score(categories: Sequence[CategoryResult]) -> int:
    total_max = sum(category.max_score for category in categories)
    if total_max <= 0:
        return 0
    total = sum(category.score for category in categories)
    return round_half_up(100 * total / total_max)


def aggregate(categories: Sequence[CategoryResult], *, version: str | None = None) -> ATSAnalysisResult:
    """Roll category results up into the overall report.

    Pure function of its input: critical issues come only from ``error``
    categories, improvements are the first suggestions in category order.
    """
    score = overall_score(categories)
    critical = [issue for category in categories if category.status == "error" for issue in category.issues]
    improvements = [suggestion for category in categories for suggestion in category.suggestions]
    return ATSAnalysisResult(
        overall_score=score,
        rating=rating_for(score),
        rubric_version=version if version is not None else rubric_version(),
        categories=list(categories),
        critical_issues=critical,
        improvements=improvements[:MAX_IMPROVEMENTS],
    )
