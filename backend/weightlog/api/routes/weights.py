"""Weights Routes — HTTP surface for the weight series.

Invariants:
    - Bodies are parsed by Pydantic before any handler runs (400 on failure)
    - Every route delegates to WeightHandlers; no SQL here
    - GET returns entries ascending by date

Design Decisions:
    - One collection URL with method-per-verb (GET/POST/PUT/DELETE), bodies
      carry ids, matching what the chart/form UI already sends
    - DELETE reads a JSON body: {"id": n} or {"deleteAll": true}
"""

import logging

from fastapi import APIRouter, Depends

from weightlog.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)
from weightlog.schemas.weight import (
    WeightCreate, WeightDelete, WeightEntryDetail, WeightEntryResponse,
    WeightUpdate,
)
from weightlog.services.handle_weights import WeightHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/weights", tags=["weights"])


def get_weight_handlers(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
) -> WeightHandlers:
    return WeightHandlers(db_manager)


@router.get("", response_model=list[WeightEntryResponse])
async def list_weights(handlers: WeightHandlers = Depends(get_weight_handlers)):
    """All weight entries, oldest date first."""
    return await handlers.list_entries()


@router.get("/latest", response_model=WeightEntryDetail)
async def latest_weight(handlers: WeightHandlers = Depends(get_weight_handlers)):
    """Most recent entry by date; 404 when nothing is recorded yet."""
    return await handlers.latest_entry()


@router.post("")
async def create_weight(
    body: WeightCreate, handlers: WeightHandlers = Depends(get_weight_handlers),
):
    """Record a weight. A date that already has an entry is overwritten."""
    return await handlers.create_entry(body.weight, body.date)


@router.put("")
async def update_weight(
    body: WeightUpdate, handlers: WeightHandlers = Depends(get_weight_handlers),
):
    """Change the weight of an entry by id.

    id must be a JSON integer within the signed 64-bit range: 1.0, "1" and
    true are rejected with 400 rather than matched against entry 1.
    """
    return await handlers.update_entry(body.id, body.weight)


@router.delete("")
async def delete_weight(
    body: WeightDelete, handlers: WeightHandlers = Depends(get_weight_handlers),
):
    """Delete one entry, or all of them when deleteAll is true.

    A single-entry id follows the same rule as PUT: JSON integers only
    (1.0 is a 400), within the signed 64-bit range.
    """
    if body.delete_all:
        return await handlers.delete_all_entries()
    return await handlers.delete_entry(body.id)
