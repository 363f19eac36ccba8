"""Health check endpoint with database and revocation store connectivity."""

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel

from microblog.api.deps import get_app_settings, get_revocation_store
from microblog.core.config import Settings
from microblog.core.database import check_db_connection
from microblog.services.revocation import RevocationStore

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    database: str
    revocation_store: str


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        status.HTTP_200_OK: {"description": "Service is healthy"},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "A backing store is unreachable"},
    },
)
async def health_check(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_app_settings),
    revocations: RevocationStore = Depends(get_revocation_store),
) -> HealthResponse:
    """
    Health check endpoint.

    Returns 503 if either store is unavailable: without the database nobody
    can log in, and without the revocation store no token can be verified.
    """
    db_healthy = await check_db_connection(request.app.state.session_maker)
    store_healthy = await revocations.ping()
    healthy = db_healthy and store_healthy

    # Set appropriate status code for container orchestration
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=settings.app_version,
        database="connected" if db_healthy else "disconnected",
        revocation_store="connected" if store_healthy else "disconnected",
    )
