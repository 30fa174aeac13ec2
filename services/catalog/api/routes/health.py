from fastapi import APIRouter

from ..handler import instrumented

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health-check")
@instrumented("health.check.handler")
async def health_check():
    """Liveness probe."""
    return "OK"
