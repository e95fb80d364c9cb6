from fastapi import APIRouter

from app.scoring.categories import rubric_version

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {"status": "healthy", "rubricVersion": rubric_version()}
