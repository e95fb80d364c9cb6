from __future__ import annotations

from typing import Any

from pydantic import Field

from app.schemas.base import CamelModel

ASSISTANT_ACTIONS = ("suggestions", "bullet_points", "summary", "job_match", "smart_questions")


class AssistantRequest(CamelModel):
    action: str = Field(min_length=1, max_length=64)
    resume_data: dict[str, Any] | None = None
    job_description: str | None = Field(default=None, max_length=50000)
    context: dict[str, Any] | None = None
