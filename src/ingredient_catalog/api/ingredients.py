"""Ingredient search, import and lookup endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, Response, status

from ingredient_catalog.api.dependencies import get_container, require_user
from ingredient_catalog.api.models import (
    ExternalResult,
    ImportBody,
    IngredientToLog,
    LocalResult,
    ManualEntryBody,
)
from ingredient_catalog.domain.catalog import CatalogItem
from ingredient_catalog.services.auth import UserIdentity  # noqa: TC001

if TYPE_CHECKING:
    from ingredient_catalog.containers import AppContainer

router = APIRouter(prefix="/ingredients", tags=["ingredients"])


@router.get("/search")
async def search_ingredients(
    request: Request,
    query: str | None = None,
    q: str | None = None,
    include_external: bool | None = Query(default=None, alias="includeExternal"),
    external_limit: int | None = Query(default=None, alias="externalLimit"),
    include_external_legacy: bool = Query(default=False, alias="include_external"),
    external_limit_legacy: int | None = Query(default=None, alias="external_limit"),
    _user: UserIdentity = Depends(require_user),
) -> dict[str, object]:
    """Search the local catalog, optionally blended with reference foods."""
    container: AppContainer = get_container(request)
    if include_external is None:
        include_external = include_external_legacy
    if external_limit is None:
        external_limit = external_limit_legacy
    results = await container.search_service.search(
        query or q or "",
        include_external=include_external,
        external_limit=external_limit,
    )
    local = [
        LocalResult.from_match(match).model_dump(by_alias=True, mode="json")
        for match in results.local
    ]
    if not include_external:
        return {"results": local}

    external = [
        ExternalResult.from_ranked(item).model_dump(by_alias=True, mode="json")
        for item in results.external
    ]
    return {
        "localResults": local,
        "externalResults": external,
        "localCount": len(local),
        "externalCount": len(external),
        "externalTotalAvailable": results.external_total_available,
    }


@router.post("/import")
async def import_ingredient(
    body: ImportBody,
    request: Request,
    response: Response,
    user: UserIdentity = Depends(require_user),
) -> dict[str, object]:
    """Import a reference food into the catalog (idempotent per external id)."""
    container: AppContainer = get_container(request)
    result = await container.import_service.import_candidate(
        body.to_request(), user.user_id
    )
    response.status_code = status.HTTP_201_CREATED if result.created else status.HTTP_200_OK
    item = CatalogItem(entry=result.entry, nutrition=result.nutrition)
    return IngredientToLog.from_item(item).model_dump(by_alias=True, mode="json")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_ingredient(
    body: ManualEntryBody,
    request: Request,
    user: UserIdentity = Depends(require_user),
) -> dict[str, object]:
    """Create a user-entered ingredient."""
    container: AppContainer = get_container(request)
    item = container.catalog_service.create_manual_entry(
        user.user_id, body.to_manual_entry()
    )
    return IngredientToLog.from_item(item).model_dump(by_alias=True, mode="json")


@router.get("/{entry_id}")
async def get_ingredient(
    entry_id: UUID,
    request: Request,
    _user: UserIdentity = Depends(require_user),
) -> dict[str, object]:
    """Return a catalog ingredient ready to log."""
    container: AppContainer = get_container(request)
    item = container.catalog_service.get(entry_id)
    return IngredientToLog.from_item(item).model_dump(by_alias=True, mode="json")
