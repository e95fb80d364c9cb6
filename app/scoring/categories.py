from __future__ import annotations

from dataclasses import dataclass

from app.core.config.scoring import get_scoring_value
from app.schemas.ats import CategoryId, CategoryStatus


@dataclass(frozen=True)
class CategorySpec:
    id: CategoryId
    label: str
    max_score: int
    good: int
    warning: int

    def status_for(self, score: int) -> CategoryStatus:
        if score >= self.good:
            return "good"
        if score >= self.warning:
            return "warning"
        return "error"


def rubric_version() -> str:
    return str(get_scoring_value("version", "unversioned"))


def category_specs() -> tuple[CategorySpec, ...]:
    """Category table in declaration order."""
    raw = get_scoring_value("categories")
    if not isinstance(raw, dict):
        raise RuntimeError("Scoring config is missing the 'categories' mapping.")

    specs: list[CategorySpec] = []
    for key, entry in raw.items():
        try:
            category_id = CategoryId(key)
        except ValueError as exc:
            raise RuntimeError(f"Unknown rubric category '{key}' in scoring config.") from exc
        if not isinstance(entry, dict):
            raise RuntimeError(f"Rubric category '{key}' must be a mapping.")
        spec = CategorySpec(
            id=category_id,
            label=str(entry.get("label") or key.title()),
            max_score=int(entry["max_score"]),
            good=int(entry["good"]),
            warning=int(entry["warning"]),
        )
        if spec.max_score <= 0 or not 0 <= spec.warning <= spec.good <= spec.max_score:
            raise RuntimeError(f"Rubric category '{key}' has inconsistent thresholds.")
        specs.append(spec)

    missing = set(CategoryId) - {spec.id for spec in specs}
    if missing:
        names = ", ".join(sorted(item.value for item in missing))
        raise RuntimeError(f"Scoring config is missing rubric categories: {names}")
    return tuple(specs)


def _banded_label(path: str, threshold_key: str, value: int, default: str) -> str:
    bands = get_scoring_value(path) or []
    ordered = sorted(
        (band for band in bands if isinstance(band, dict)),
        key=lambda band: int(band.get(threshold_key, 0)),
        reverse=True,
    )
    for band in ordered:
        if value >= int(band.get(threshold_key, 0)):
            return str(band.get("label", default))
    return default


def rating_for(overall_score: int) -> str:
    return _banded_label("ratings", "min_score", overall_score, "Needs Improvement")


def match_level_for(match_percentage: int) -> str:
    return _banded_label("match_levels", "min_percentage", match_percentage, "poor")
