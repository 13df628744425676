"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from ingredient_catalog.api.models import HealthScoreResponse

if TYPE_CHECKING:
    from ingredient_catalog.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.delete(
    "/ingredients/{entry_id}",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_ingredient(entry_id: UUID, request: Request) -> None:
    """Soft-delete a catalog ingredient."""
    container: AppContainer = request.app.state.container
    container.catalog_service.soft_delete(entry_id)


@router.get("/ingredients/{entry_id}/health-score", dependencies=[Depends(require_admin)])
async def ingredient_health_score(entry_id: UUID, request: Request) -> dict[str, object]:
    """Recompute an ingredient's health score from its stored nutrition."""
    container: AppContainer = request.app.state.container
    health = container.catalog_service.recompute_health(entry_id)
    return HealthScoreResponse.from_health(health).model_dump(by_alias=True)
