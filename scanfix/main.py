import uvicorn
from fastapi import FastAPI

from scanfix.api.health_routes import router as health_router
from scanfix.api.remediation_routes import router as remediation_router
from scanfix.core.config import settings
from scanfix.core.logging import setup_logging

setup_logging()

tags_metadata = [
    {
        "name": "remediation",
        "description": "Turn scan findings and AI narratives into patched, copyable source files.",
    },
    {
        "name": "health",
        "description": "Liveness probe for container orchestration.",
    },
]

app = FastAPI(
    title="scanfix remediation API",
    description="Synthesizes best-effort corrected source from security scan results.",
    version=settings.APP_VERSION,
    openapi_tags=tags_metadata,
)

app.include_router(health_router)
app.include_router(remediation_router)


if __name__ == "__main__":
    uvicorn.run("scanfix.main:app", host="0.0.0.0", port=8000, reload=True)
