from __future__ import annotations

import logging

from app.core.session_store import AnalysisSession, AnalysisSessionStore, new_session_id, session_store
from app.export.pdf_export import export_file_name, render_preview_pdf
from app.matching.keywords import match_keywords
from app.parsing.parse import DocumentParseError, parse_pdf_bytes
from app.parsing.segmenter import build_parsed_document
from app.preview.optimized import build_optimized_preview
from app.schemas.ats import (
    AnalyzeTextRequest,
    ATSAnalysisResult,
    KeywordMatchRequest,
    KeywordMatchResult,
    OptimizedPreview,
    UploadAnalysisResponse,
)
from app.schemas.resume import Resume
from app.scoring.analyzer import analyze_document, analyze_resume

logger = logging.getLogger(__name__)


def analyze_upload(
    *,
    content: bytes,
    file_name: str,
    session_id: str | None = None,
    store: AnalysisSessionStore = session_store,
) -> UploadAnalysisResponse:
    """Parse, score and remember an uploaded PDF; a failed upload clears the session's previous result."""
    session_id = session_id or new_session_id()
    try:
        document = parse_pdf_bytes(content, file_name=file_name)
    except DocumentParseError:
        store.clear(session_id)
        logger.info("ats_upload_rejected session=%s file=%s", session_id, file_name)
        raise

    analysis = analyze_document(document)
    store.save(session_id, document, analysis)
    logger.info(
        "ats_upload_analyzed file=%s pages=%s score=%s",
        file_name,
        document.metadata.page_count,
        analysis.overall_score,
    )
    return UploadAnalysisResponse(session_id=session_id, document=document, analysis=analysis)


def analyze_text(payload: AnalyzeTextRequest) -> ATSAnalysisResult:
    document = build_parsed_document(payload.text, page_count=payload.page_count, file_name=payload.file_name)
    return analyze_document(document)


def analyze_structured_resume(resume: Resume) -> ATSAnalysisResult:
    return analyze_resume(resume)


def run_keyword_match(payload: KeywordMatchRequest, *, store: AnalysisSessionStore = session_store) -> KeywordMatchResult:
    if payload.resume_text is not None:
        resume_text = payload.resume_text
    else:
        resume_text = store.get(payload.session_id or "").document.full_text
    return match_keywords(resume_text, payload.job_description)


def get_session(session_id: str, *, store: AnalysisSessionStore = session_store) -> AnalysisSession:
    return store.get(session_id)


def session_preview(session_id: str, *, store: AnalysisSessionStore = session_store) -> OptimizedPreview:
    return build_optimized_preview(store.get(session_id).document)


def export_session_pdf(session_id: str, *, store: AnalysisSessionStore = session_store) -> tuple[bytes, str]:
    preview = session_preview(session_id, store=store)
    return render_preview_pdf(preview), export_file_name()


def clear_session(session_id: str, *, store: AnalysisSessionStore = session_store) -> bool:
    cleared = store.clear(session_id)
    if cleared:
        logger.info("ats_session_cleared session=%s", session_id)
    return cleared
