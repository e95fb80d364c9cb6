from __future__ import annotations

import json
import logging
import re
from typing import Any

from app.schemas.assistant import ASSISTANT_ACTIONS, AssistantRequest
from app.services.assistant_llm import chat_completion

logger = logging.getLogger(__name__)

_CODE_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


class UnknownAssistantActionError(ValueError):
    pass


SYSTEM_PROMPTS: dict[str, str] = {
    "suggestions": """You are a professional resume expert and ATS optimization specialist. Analyze the given resume content and provide specific, actionable improvement suggestions. Focus on:
- Missing sections that would strengthen the resume
- Weak bullet points that need stronger action verbs
- Missing quantifiable achievements
- Keyword gaps for ATS optimization
- Grammar and clarity improvements
- Professional tone enhancements

Return your response as a JSON object with this structure:
{
  "suggestions": [
    { "type": "improvement" | "missing" | "grammar" | "keyword", "section": "string", "current": "string or null", "suggested": "string", "priority": "high" | "medium" | "low", "reason": "string" }
  ],
  "overallFeedback": "string",
  "missingSections": ["string"],
  "strengthScore": number (0-100)
}""",
    "bullet_points": """You are a professional resume writer specializing in ATS-optimized bullet points. Generate 3-5 strong, quantifiable bullet points for the given role and context. Each bullet should:
- Start with a powerful action verb
- Include specific metrics/numbers where possible
- Be concise (under 20 words)
- Be ATS-friendly with relevant keywords

Return as JSON: { "bullets": ["string"] }""",
    "summary": """You are a professional resume writer. Generate a compelling professional summary (2-3 sentences, 30-60 words) for the given person based on their experience and target role. The summary should:
- Highlight years of experience and key expertise
- Include industry-specific keywords
- Be ATS-optimized
- Sound professional but not generic

Return as JSON: { "summary": "string" }""",
    "job_match": """You are an ATS (Applicant Tracking System) specialist. Compare the resume content against the provided job description and provide a detailed analysis. Return as JSON:
{
  "matchScore": number (0-100),
  "matchedKeywords": [{ "keyword": "string", "found": boolean, "importance": "critical" | "important" | "nice-to-have" }],
  "missingKeywords": ["string"],
  "formattingFeedback": ["string"],
  "optimizationTips": ["string"],
  "grammarIssues": [{ "text": "string", "suggestion": "string" }],
  "sectionFeedback": { "summary": "string", "experience": "string", "skills": "string", "education": "string" }
}""",
    "smart_questions": """You are an AI career coach helping build a professional resume. Based on the current resume state, ask 2-3 smart follow-up questions to gather information that would significantly improve the resume. Questions should be specific and actionable.

Return as JSON: { "questions": [{ "question": "string", "section": "string", "context": "string" }] }""",
}


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def _context_value(context: dict[str, Any], key: str, fallback: str) -> str:
    value = context.get(key)
    if value is None:
        return fallback
    text = str(value).strip()
    return text or fallback


def build_user_message(payload: AssistantRequest) -> str:
    resume = payload.resume_data or {}
    context = payload.context or {}
    action = payload.action

    if action == "suggestions":
        return f"Analyze this resume and provide improvement suggestions:\n\n{_dump(resume)}"
    if action == "bullet_points":
        return (
            "Generate professional bullet points for this role:\n"
            f"Position: {_context_value(context, 'position', 'Not specified')}\n"
            f"Company: {_context_value(context, 'company', 'Not specified')}\n"
            f"Industry: {_context_value(context, 'industry', 'General')}\n"
            f"Existing description: {_context_value(context, 'description', 'None')}"
        )
    if action == "summary":
        personal = resume.get("personalInfo") or {}
        experience = resume.get("experience") or []
        skills = [str(skill.get("name", "")) for skill in resume.get("skills") or [] if isinstance(skill, dict)]
        return (
            "Generate a professional summary for:\n"
            f"Name: {personal.get('fullName') or 'Professional'}\n"
            f"Target Role: {_context_value(context, 'targetRole', 'Not specified')}\n"
            f"Experience: {json.dumps(experience[:3], ensure_ascii=False)}\n"
            f"Skills: {', '.join(name for name in skills if name) or 'Not specified'}"
        )
    if action == "job_match":
        return (
            "Compare this resume against the job description:\n\n"
            f"RESUME:\n{_dump(resume)}\n\n"
            f"JOB DESCRIPTION:\n{payload.job_description or ''}"
        )
    if action == "smart_questions":
        return f"Based on this resume state, what questions should I ask to improve it?\n\n{_dump(resume)}"
    raise UnknownAssistantActionError(f"Unknown action: {action}")


def parse_assistant_reply(content: str) -> dict[str, Any]:
    """Decode a model reply, tolerating markdown code fences; unparseable text comes back as rawContent."""
    match = _CODE_FENCE_RE.search(content)
    candidate = match.group(1).strip() if match else content.strip()
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        return {"rawContent": content}
    if not isinstance(parsed, dict):
        return {"rawContent": content}
    return parsed


def run_assistant(payload: AssistantRequest) -> dict[str, Any]:
    if payload.action not in ASSISTANT_ACTIONS:
        raise UnknownAssistantActionError(f"Unknown action: {payload.action}")

    user_message = build_user_message(payload)
    content = chat_completion(
        system_prompt=SYSTEM_PROMPTS[payload.action],
        user_prompt=user_message,
        action=payload.action,
    )
    result = parse_assistant_reply(content)
    if "rawContent" in result:
        logger.info("assistant_reply_unstructured action=%s chars=%s", payload.action, len(content))
    return result
