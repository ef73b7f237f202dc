"""
Public API routes - read-only views and exports, no authentication required
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from app.core.config import settings
from app.models import Table
from app.schemas.guest import GuestResponse
from app.schemas.layout import LayoutStatisticsResponse, SeatInfo, TableSeats
from app.services.export_service import ExportService
from app.services.layout_store import LayoutStore, get_layout_store
from app.services.seat_layout import hit_test_seat, seat_anchors_for, table_dimensions
from app.utils.security import enforce_rate_limit
from app.utils.responses import success_response, not_found_error

router = APIRouter()

def build_table_seats(table: Table) -> TableSeats:
    """Seat anchors for a table joined with who sits where"""
    width, height = table_dimensions(table.shape)
    seats = []
    for seat_number, anchor in enumerate(seat_anchors_for(table), start=1):
        guest = table.guests.get(seat_number)
        seats.append(SeatInfo(
            seat_number=seat_number,
            x=anchor.x,
            y=anchor.y,
            occupied=guest is not None,
            guest=GuestResponse.model_validate(guest) if guest else None
        ))
    return TableSeats(
        table_id=table.id,
        table_number=table.number,
        shape=table.shape,
        width=width,
        height=height,
        seat_size=settings.SEAT_SIZE,
        seats=seats
    )

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/layout", dependencies=[Depends(enforce_rate_limit)])
async def get_layout(store: LayoutStore = Depends(get_layout_store)):
    """Full layout: tables, guests, entrée options and statistics"""
    return success_response(
        message="Layout retrieved successfully",
        data=store.snapshot()
    )

@router.get("/layout/statistics", dependencies=[Depends(enforce_rate_limit)])
async def get_statistics(store: LayoutStore = Depends(get_layout_store)):
    """Seat and guest counters"""
    statistics = LayoutStatisticsResponse.model_validate(store.compute_statistics())
    return success_response(
        message="Statistics retrieved successfully",
        data=statistics.model_dump()
    )

@router.get("/layout/tables/{table_id}/seats", dependencies=[Depends(enforce_rate_limit)])
async def get_table_seats(table_id: str, store: LayoutStore = Depends(get_layout_store)):
    """Seat anchors relative to the table's top-left corner"""
    table = store.get_table(table_id)
    if table is None:
        not_found_error("Table")

    return success_response(
        message="Seats computed successfully",
        data=build_table_seats(table).model_dump(mode="json")
    )

@router.get("/layout/tables/{table_id}/hit", dependencies=[Depends(enforce_rate_limit)])
async def hit_test(
    table_id: str,
    x: float = Query(..., description="Table-local x"),
    y: float = Query(..., description="Table-local y"),
    store: LayoutStore = Depends(get_layout_store)
):
    """Find the seat under a point relative to the table's top-left corner"""
    table = store.get_table(table_id)
    if table is None:
        not_found_error("Table")

    seat_number = hit_test_seat(table, x, y)
    return success_response(
        message="Seat found" if seat_number else "No seat at this point",
        data={"table_id": table.id, "seat_number": seat_number}
    )

@router.get("/entrees", dependencies=[Depends(enforce_rate_limit)])
async def list_entrees(store: LayoutStore = Depends(get_layout_store)):
    """Entrée options offered when seating a guest"""
    return success_response(
        message="Entrée options retrieved successfully",
        data={
            "options": store.entree_options(),
            "custom": store.custom_entrees()
        }
    )

@router.get("/layout/export/guests.csv", dependencies=[Depends(enforce_rate_limit)])
async def export_guests_csv(store: LayoutStore = Depends(get_layout_store)):
    """Guest list, one row per occupied seat"""
    return Response(
        content=ExportService.export_csv(store),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=guest-list.csv"}
    )

@router.get("/layout/export/guests.xlsx", dependencies=[Depends(enforce_rate_limit)])
async def export_guests_excel(store: LayoutStore = Depends(get_layout_store)):
    """Guest list as an Excel workbook"""
    return Response(
        content=ExportService.export_excel(store),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=guest-list.xlsx"}
    )

@router.get("/layout/export/seating.png", dependencies=[Depends(enforce_rate_limit)])
async def export_seating_png(store: LayoutStore = Depends(get_layout_store)):
    """Rendered seating chart"""
    return Response(
        content=ExportService.export_png(store),
        media_type="image/png",
        headers={"Content-Disposition": "attachment; filename=seating-chart.png"}
    )
