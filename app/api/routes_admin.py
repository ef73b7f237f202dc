"""
Admin API routes - layout editing, requires authentication
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from app.api.ws import websocket_manager
from app.core.errors import ValidationError
from app.models import Table
from app.schemas.guest import GuestAssign
from app.schemas.layout import (
    EntreeCreate,
    TableCreate,
    TableDescriptionUpdate,
    TableNumberUpdate,
    TablePosition,
    TableResponse,
)
from app.services.layout_store import LayoutStore, get_layout_store
from app.utils.security import verify_admin_token
from app.utils.responses import success_response, validation_error_response

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(verify_admin_token)])

async def table_change_response(
    store: LayoutStore,
    table: Optional[Table],
    action: str,
    message: str,
    status_code: int = 200,
    **extra
):
    """Build the response for a table edit and notify viewers when it applied.

    A missing table means the edit targeted a stale id; it is reported as
    not applied rather than as an error.
    """
    statistics = store.compute_statistics()

    if table is None:
        return success_response(
            message="Table no longer exists; nothing changed",
            data={"applied": False, "table": None, "statistics": statistics.to_dict()}
        )

    await websocket_manager.broadcast_layout_update(action, statistics, table_id=table.id)

    data = {
        "applied": True,
        "table": TableResponse.model_validate(table).model_dump(mode="json"),
        "statistics": statistics.to_dict(),
    }
    data.update(extra)
    return success_response(message=message, data=data, status_code=status_code)

@router.post("/tables")
async def add_table(
    table_data: TableCreate,
    store: LayoutStore = Depends(get_layout_store)
):
    """Add a table to the layout"""
    try:
        table = store.add_table(table_data.shape, table_data.seat_count)
    except ValidationError as e:
        return validation_error_response(e)

    return await table_change_response(
        store, table, "table_added",
        message=f"Table {table.number} added",
        status_code=201
    )

@router.patch("/tables/{table_id}/position")
async def move_table(
    table_id: str,
    position: TablePosition,
    store: LayoutStore = Depends(get_layout_store)
):
    """Move a table on the canvas (called repeatedly while dragging)"""
    table = store.reposition(table_id, position.x, position.y)
    return await table_change_response(
        store, table, "table_moved",
        message="Table moved"
    )

@router.put("/tables/{table_id}/seats/{seat_number}")
async def assign_guest(
    table_id: str,
    seat_number: int,
    guest_data: GuestAssign,
    store: LayoutStore = Depends(get_layout_store)
):
    """Seat a guest, replacing any current occupant"""
    try:
        table = store.assign_guest(table_id, seat_number, guest_data.to_guest())
    except ValidationError as e:
        return validation_error_response(e)

    return await table_change_response(
        store, table, "guest_assigned",
        message="Guest assigned to seat"
    )

@router.delete("/tables/{table_id}/seats/{seat_number}")
async def remove_guest(
    table_id: str,
    seat_number: int,
    store: LayoutStore = Depends(get_layout_store)
):
    """Clear a seat"""
    table = store.remove_guest(table_id, seat_number)
    return await table_change_response(
        store, table, "guest_removed",
        message="Guest removed from seat"
    )

@router.patch("/tables/{table_id}/number")
async def renumber_table(
    table_id: str,
    number_data: TableNumberUpdate,
    store: LayoutStore = Depends(get_layout_store)
):
    """Change a table's display number; duplicates are reported, not blocked"""
    table = store.renumber_table(table_id, number_data.number)
    duplicates = store.duplicate_numbers()
    if table is not None and table.number in duplicates:
        logger.warning(f"Table number {table.number} is now used by more than one table")

    return await table_change_response(
        store, table, "table_renumbered",
        message="Table number updated",
        duplicate_numbers=duplicates
    )

@router.patch("/tables/{table_id}/description")
async def update_description(
    table_id: str,
    description_data: TableDescriptionUpdate,
    store: LayoutStore = Depends(get_layout_store)
):
    """Set a table's free-text description"""
    table = store.set_description(table_id, description_data.description)
    return await table_change_response(
        store, table, "table_described",
        message="Table description updated"
    )

@router.delete("/tables/{table_id}")
async def remove_table(
    table_id: str,
    store: LayoutStore = Depends(get_layout_store)
):
    """Remove a table and unseat its guests"""
    table = store.remove_table(table_id)
    return await table_change_response(
        store, table, "table_removed",
        message="Table removed"
    )

@router.post("/entrees")
async def add_entree(
    entree_data: EntreeCreate,
    store: LayoutStore = Depends(get_layout_store)
):
    """Add a custom entrée option"""
    try:
        options = store.add_entree_option(entree_data.name)
    except ValidationError as e:
        return validation_error_response(e)

    return success_response(
        message="Entrée added successfully",
        data={"options": options, "custom": store.custom_entrees()},
        status_code=201
    )

@router.delete("/entrees/{name}")
async def remove_entree(
    name: str,
    store: LayoutStore = Depends(get_layout_store)
):
    """Remove a custom entrée option (no-op when absent)"""
    options = store.remove_entree_option(name)
    return success_response(
        message="Entrée removed",
        data={"options": options, "custom": store.custom_entrees()}
    )

@router.post("/layout/reset")
async def reset_layout(store: LayoutStore = Depends(get_layout_store)):
    """Start over with an empty layout"""
    store.reset()
    statistics = store.compute_statistics()
    await websocket_manager.broadcast_layout_update("layout_reset", statistics)
    return success_response(
        message="Layout reset",
        data={"statistics": statistics.to_dict()}
    )
