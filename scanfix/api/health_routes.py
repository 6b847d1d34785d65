from fastapi import APIRouter

from scanfix.core.config import settings

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness probe")
def health() -> dict[str, str]:
    """Report that the service is up, with its version."""
    return {"status": "healthy", "version": settings.APP_VERSION}
