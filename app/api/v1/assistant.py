from typing import Any

from fastapi import APIRouter, HTTPException, Request, status

from app.core.rate_limit import rate_limit
from app.schemas.assistant import AssistantRequest
from app.services.assistant_llm import AssistantLLMError
from app.services.assistant_service import UnknownAssistantActionError, run_assistant

router = APIRouter()


@router.post("/assistant", response_model=dict[str, Any])
@rate_limit("20/minute")
async def assistant(request: Request, payload: AssistantRequest):
    _ = request
    try:
        return run_assistant(payload)
    except UnknownAssistantActionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except AssistantLLMError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
