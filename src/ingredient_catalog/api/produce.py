"""Produce weight extraction endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from ingredient_catalog.api.dependencies import get_container, require_user
from ingredient_catalog.api.models import ProduceExtractBody, ProduceResult
from ingredient_catalog.services.auth import UserIdentity  # noqa: TC001

if TYPE_CHECKING:
    from ingredient_catalog.containers import AppContainer

router = APIRouter(prefix="/produce", tags=["produce"])


@router.post("/extract")
async def extract_produce(
    body: ProduceExtractBody,
    request: Request,
    _user: UserIdentity = Depends(require_user),
) -> dict[str, object]:
    """Resolve the fruit and vegetable items of an ingredient list to grams."""
    container: AppContainer = get_container(request)
    estimates = await container.produce_service.extract(body.to_items())
    return {
        "produceIngredients": [
            ProduceResult.from_estimate(estimate).model_dump(by_alias=True)
            for estimate in estimates
        ]
    }
