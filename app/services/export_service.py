"""
Export service for guest lists and layout images
"""

import csv
import io
import logging
from typing import Dict, List, Tuple

import pandas as pd
from PIL import Image, ImageDraw, ImageFont

from app.core.config import settings
from app.models import Table, TableShape
from app.services.layout_store import LayoutStore
from app.services.seat_layout import seat_anchors_for, table_dimensions

logger = logging.getLogger(__name__)

class ExportService:
    """Read-only exports of the current layout"""

    GUEST_COLUMNS = ['Table Number', 'Seat Number', 'First Name', 'Last Name', 'Entree', 'Allergy Info']

    @staticmethod
    def guest_rows(store: LayoutStore) -> List[Dict]:
        """One row per occupied seat"""
        return [
            {
                'Table Number': table.number,
                'Seat Number': seat_number,
                'First Name': guest.first_name,
                'Last Name': guest.last_name,
                'Entree': guest.entree,
                'Allergy Info': guest.allergy_info,
            }
            for table, seat_number, guest in store.occupied_seats()
        ]

    @staticmethod
    def guest_dataframe(store: LayoutStore) -> pd.DataFrame:
        return pd.DataFrame(ExportService.guest_rows(store), columns=ExportService.GUEST_COLUMNS)

    @staticmethod
    def export_csv(store: LayoutStore) -> bytes:
        """Export the guest list as CSV with every field quoted"""
        df = ExportService.guest_dataframe(store)
        content = df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator='\n')
        logger.info(f"Exported {len(df)} guests to CSV")
        return content.encode('utf-8')

    @staticmethod
    def export_excel(store: LayoutStore) -> bytes:
        """Export the guest list to Excel"""
        df = ExportService.guest_dataframe(store)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Guest List')

        logger.info(f"Exported {len(df)} guests to Excel")
        return buffer.getvalue()

    @staticmethod
    def export_png(store: LayoutStore) -> bytes:
        """Render the layout to a PNG image"""
        tables = store.list_tables()
        scale = settings.EXPORT_PNG_SCALE
        padding = settings.EXPORT_PNG_PADDING
        seat_size = settings.SEAT_SIZE * scale

        min_x, min_y, max_x, max_y = _layout_bounds(tables)
        image_width = max(400, max_x - min_x + 2 * padding)
        image_height = max(300, max_y - min_y + 2 * padding)

        image = Image.new('RGB', (int(image_width * scale), int(image_height * scale)), 'white')
        draw = ImageDraw.Draw(image)
        font = ImageFont.load_default()

        for table in tables:
            width, height = table_dimensions(table.shape)
            origin_x = (padding - min_x + table.x) * scale
            origin_y = (padding - min_y + table.y) * scale
            box = [origin_x, origin_y, origin_x + width * scale, origin_y + height * scale]
            if table.shape is TableShape.ROUND:
                draw.ellipse(box, fill='#faf7f2', outline='#8a8a8a', width=2)
            else:
                draw.rectangle(box, fill='#faf7f2', outline='#8a8a8a', width=2)

            _draw_centered(
                draw, f"Table {table.number}",
                origin_x + width * scale / 2, origin_y + height * scale / 2,
                font, 'black'
            )

            for seat_number, anchor in enumerate(seat_anchors_for(table), start=1):
                left = origin_x + anchor.x * scale
                top = origin_y + anchor.y * scale
                occupied = seat_number in table.guests
                draw.ellipse(
                    [left, top, left + seat_size, top + seat_size],
                    fill='#7d9b76' if occupied else 'white',
                    outline='#5f7a59' if occupied else '#b0b0b0',
                    width=2,
                )
                _draw_centered(
                    draw, str(seat_number),
                    left + seat_size / 2, top + seat_size / 2,
                    font, 'white' if occupied else 'black'
                )

        buffer = io.BytesIO()
        image.save(buffer, format='PNG')
        logger.info(f"Rendered layout with {len(tables)} tables to PNG")
        return buffer.getvalue()


def _layout_bounds(tables: List[Table]) -> Tuple[float, float, float, float]:
    """Canvas box (min_x, min_y, max_x, max_y) covering every table and seat"""
    if not tables:
        return 0.0, 0.0, 0.0, 0.0

    seat_size = settings.SEAT_SIZE
    xs, ys = [], []
    for table in tables:
        width, height = table_dimensions(table.shape)
        xs.extend([table.x, table.x + width])
        ys.extend([table.y, table.y + height])
        # Seats hang past the table edge
        for anchor in seat_anchors_for(table):
            xs.extend([table.x + anchor.x, table.x + anchor.x + seat_size])
            ys.extend([table.y + anchor.y, table.y + anchor.y + seat_size])
    return min(xs), min(ys), max(xs), max(ys)


def _draw_centered(draw: ImageDraw.ImageDraw, text: str, center_x: float, center_y: float, font, fill: str) -> None:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    draw.text(
        (center_x - (right - left) / 2 - left, center_y - (bottom - top) / 2 - top),
        text, fill=fill, font=font
    )
