"""Admin status for the signed-in caller."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from app.auth.dependencies import get_current_external_id, is_admin
from app.config import Settings, get_settings
from app.infra.logging_config import get_logger
from app.schemas.admin import AdminStatus

logger = get_logger("admin")

admin_router = APIRouter(prefix="/admin", tags=["Admin"])


@admin_router.get("/is-admin", response_model=AdminStatus)
def check_is_admin(
    response: Response,
    external_id: str = Depends(get_current_external_id),
    settings: Settings = Depends(get_settings),
) -> AdminStatus:
    """
    Whether the caller is the configured admin.

    Clients use this to decide whether to show admin tools. The answer depends
    on the caller's token, so it must never be served from a shared cache.
    """
    response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
    response.headers["Vary"] = "Authorization"
    admin = is_admin(external_id, settings)
    if admin:
        logger.debug("Admin status confirmed for %s", external_id)
    return AdminStatus(is_admin=admin)
