"""FastAPI dependencies for service access.

Services are initialized during application startup and stored in
``app.state``.
"""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from recyclehub.services.status.service import StatusService


async def get_status_service(request: Request) -> StatusService:
    """Get the status service from app state.

    Raises:
        HTTPException: 503 if the service is not initialized.
    """
    service: StatusService | None = getattr(request.app.state, "status_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Status service not available",
        )
    return service
