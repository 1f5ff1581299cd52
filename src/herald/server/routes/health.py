"""Health check routes."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness check.

    Returns:
        Health status.
    """
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check(request: Request) -> dict[str, str]:
    """Readiness check covering the database and the scheduler.

    Returns:
        Readiness status with per-dependency details.
    """
    server = request.app.state.server
    db_ok = await server.database.ping()
    scheduler = server.scheduler
    return {
        "status": "ready" if db_ok else "degraded",
        "database": "connected" if db_ok else "disconnected",
        "scheduler": scheduler.state.value if scheduler else "disabled",
    }
