from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import Response

from app.core.config import settings
from app.core.rate_limit import rate_limit
from app.export.pdf_export import ExportError
from app.parsing.parse import DocumentParseError
from app.schemas.ats import (
    SESSION_ID_MAX_LENGTH,
    SESSION_ID_MIN_LENGTH,
    AnalyzeTextRequest,
    ATSAnalysisResult,
    KeywordMatchRequest,
    KeywordMatchResult,
    OptimizedPreview,
    UploadAnalysisResponse,
)
from app.schemas.resume import Resume
from app.services.ats_service import (
    analyze_structured_resume,
    analyze_text,
    analyze_upload,
    clear_session,
    export_session_pdf,
    get_session,
    run_keyword_match,
    session_preview,
)

router = APIRouter()

UPLOAD_CHUNK_BYTES = 1024 * 64


def _session_not_found(session_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"No analysis found for session '{session_id}'. Upload a resume first.",
    )


async def _read_upload(file: UploadFile) -> bytes:
    max_bytes = settings.max_upload_bytes
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"File too large. Maximum allowed size is {max_bytes // (1024 * 1024)} MB.",
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/ats/upload", response_model=UploadAnalysisResponse)
@rate_limit()
async def ats_upload(
    request: Request,
    file: UploadFile = File(...),
    session_id: str | None = Form(default=None, min_length=SESSION_ID_MIN_LENGTH, max_length=SESSION_ID_MAX_LENGTH),
):
    _ = request
    content = await _read_upload(file)
    try:
        return analyze_upload(content=content, file_name=file.filename or "resume.pdf", session_id=session_id)
    except DocumentParseError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


@router.post("/ats/analyze-text", response_model=ATSAnalysisResult)
@rate_limit()
async def ats_analyze_text(request: Request, payload: AnalyzeTextRequest):
    _ = request
    return analyze_text(payload)


@router.post("/ats/analyze-resume", response_model=ATSAnalysisResult)
@rate_limit()
async def ats_analyze_resume(request: Request, payload: Resume):
    _ = request
    return analyze_structured_resume(payload)


@router.post("/ats/keyword-match", response_model=KeywordMatchResult)
@rate_limit()
async def ats_keyword_match(request: Request, payload: KeywordMatchRequest):
    _ = request
    try:
        return run_keyword_match(payload)
    except KeyError as exc:
        raise _session_not_found(payload.session_id or "") from exc


@router.get("/ats/sessions/{session_id}", response_model=UploadAnalysisResponse)
async def ats_get_session(session_id: str):
    try:
        session = get_session(session_id)
    except KeyError as exc:
        raise _session_not_found(session_id) from exc
    return UploadAnalysisResponse(session_id=session.session_id, document=session.document, analysis=session.analysis)


@router.get("/ats/sessions/{session_id}/preview", response_model=OptimizedPreview)
async def ats_session_preview(session_id: str):
    try:
        return session_preview(session_id)
    except KeyError as exc:
        raise _session_not_found(session_id) from exc


@router.get("/ats/sessions/{session_id}/export")
@rate_limit()
async def ats_session_export(request: Request, session_id: str):
    _ = request
    try:
        pdf_bytes, file_name = export_session_pdf(session_id)
    except KeyError as exc:
        raise _session_not_found(session_id) from exc
    except ExportError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Export failed. Your analysis is still available, please try exporting again.",
        ) from exc
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )


@router.delete("/ats/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def ats_clear_session(session_id: str):
    if not clear_session(session_id):
        raise _session_not_found(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
