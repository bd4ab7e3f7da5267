"""PDF calendar renderer for the day, week and month views."""

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from symera.engine.cells import CellSummary, ItemColor, hour_slots, item_color, summarize
from symera.engine.index import DateBucketIndex, lookup
from symera.engine.navigation import ViewState
from symera.engine.window import SUNDAY, ViewMode, compute_window, window_title
from symera.sources.base import CalendarItem

logger = logging.getLogger(__name__)

# ── Layout Constants ──────────────────────────────────────────────────────────

MARGIN_LEFT = 12 * mm
MARGIN_RIGHT = 12 * mm
MARGIN_TOP = 12 * mm
MARGIN_BOTTOM = 10 * mm

HEADER_HEIGHT = 12 * mm
WEEKDAY_ROW_HEIGHT = 6 * mm
FOOTER_HEIGHT = 5 * mm
ITEM_HEIGHT = 4 * mm
ITEM_GAP = 0.8 * mm
INDICATOR_HEIGHT = 1 * mm
HOUR_LABEL_WIDTH = 14 * mm

# Pages narrower than this get single-letter weekday names.
COMPACT_WIDTH = 150 * mm

# Colors
COLOR_HEADER_BG = colors.HexColor("#1a1a2e")
COLOR_HEADER_TEXT = colors.white
COLOR_GRID = colors.HexColor("#d0d0d0")
COLOR_DAY_TEXT = colors.HexColor("#1a1a2e")
COLOR_MUTED_TEXT = colors.HexColor("#999999")
COLOR_OUT_OF_MONTH_BG = colors.HexColor("#f5f5f5")
COLOR_TODAY_BG = colors.HexColor("#eef2ff")
COLOR_SELECTED_BG = colors.HexColor("#e0e7ff")
COLOR_SELECTED_BORDER = colors.HexColor("#818cf8")
COLOR_HOUR_LINE = colors.HexColor("#d0d0d0")
COLOR_HOUR_TEXT = colors.HexColor("#555555")
COLOR_FOOTER_TEXT = colors.HexColor("#888888")

# Item fill colors, shared by every view
ITEM_COLORS = {
    ItemColor.PRIMARY: colors.HexColor("#4f46e5"),
    ItemColor.GREEN: colors.HexColor("#22c55e"),
    ItemColor.RED: colors.HexColor("#ef4444"),
    ItemColor.AMBER: colors.HexColor("#f59e0b"),
    ItemColor.BLUE: colors.HexColor("#3b82f6"),
}
COLOR_ITEM_TEXT = colors.white

# Font sizes
FONT_SIZE_TITLE = 16
FONT_SIZE_WEEKDAY = 8
FONT_SIZE_DAY = 9
FONT_SIZE_ITEM = 7
FONT_SIZE_MORE = 7
FONT_SIZE_HOUR = 8
FONT_SIZE_FOOTER = 6


@dataclass(frozen=True)
class Viewport:
    """Drawing area handed to the renderer, in points."""
    width: float
    height: float

    @property
    def compact(self) -> bool:
        return self.width < COMPACT_WIDTH

    @classmethod
    def for_view(cls, view_mode: ViewMode) -> "Viewport":
        if view_mode is ViewMode.DAY:
            return cls(*A4)
        return cls(*landscape(A4))


def fit_text(text: str, font: str, size: float, width: float) -> str:
    """Truncate text with an ellipsis so it fits in width."""
    if stringWidth(text, font, size) <= width:
        return text
    while text and stringWidth(text + "…", font, size) > width:
        text = text[:-1]
    return text + "…" if text else ""


class CalendarPDFGenerator:
    """Renders one calendar view of a DateBucketIndex to a PDF page."""

    def __init__(
        self,
        week_start: int = SUNDAY,
        day_start_hour: int = 7,
        day_end_hour: int = 22,
    ):
        self.week_start = week_start
        self.day_start_hour = day_start_hour
        self.day_end_hour = day_end_hour

    def generate(
        self,
        index: DateBucketIndex,
        state: ViewState,
        today: date,
        output_path: str | Path,
        max_visible: Optional[int] = None,
        viewport: Optional[Viewport] = None,
    ) -> Path:
        """Generate a PDF of the view described by state and return its path."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        viewport = viewport or Viewport.for_view(state.view_mode)

        days = compute_window(state.cursor_date, state.view_mode, self.week_start)
        summaries = [
            summarize(day, lookup(index, day), state.selected_date, max_visible, today=today)
            for day in days
        ]

        c = canvas.Canvas(str(output_path), pagesize=(viewport.width, viewport.height))
        title = window_title(state.cursor_date, state.view_mode, self.week_start)
        c.setTitle(f"Symera - {title}")

        top = self._draw_header(c, viewport, title)
        bottom = MARGIN_BOTTOM + FOOTER_HEIGHT

        if state.view_mode is ViewMode.MONTH:
            self._draw_month(c, viewport, summaries, state.cursor_date.month, top, bottom)
        elif state.view_mode is ViewMode.WEEK:
            self._draw_week(c, viewport, summaries, top, bottom)
        else:
            self._draw_day(c, viewport, index, summaries[0], top, bottom)

        self._draw_footer(c, viewport)
        c.save()
        logger.info("Generated %s view PDF: %s", state.view_mode.value, output_path)
        return output_path

    # ── Header ────────────────────────────────────────────────────────────────

    def _draw_header(self, c: canvas.Canvas, viewport: Viewport, title: str) -> float:
        """Draw the title bar. Returns the Y position below the header."""
        content_width = viewport.width - MARGIN_LEFT - MARGIN_RIGHT
        header_y = viewport.height - MARGIN_TOP - HEADER_HEIGHT

        c.setFillColor(COLOR_HEADER_BG)
        c.roundRect(
            MARGIN_LEFT, header_y,
            content_width, HEADER_HEIGHT,
            radius=3 * mm, fill=1, stroke=0
        )

        c.setFillColor(COLOR_HEADER_TEXT)
        c.setFont("Helvetica-Bold", FONT_SIZE_TITLE)
        text_y = header_y + (HEADER_HEIGHT - FONT_SIZE_TITLE) / 2
        c.drawString(MARGIN_LEFT + 6 * mm, text_y, title)

        return header_y - 3 * mm

    def _weekday_label(self, weekday: int, viewport: Viewport) -> str:
        if viewport.compact:
            return calendar.day_name[weekday][0]
        return calendar.day_abbr[weekday]

    # ── Month ─────────────────────────────────────────────────────────────────

    def _draw_month(self, c: canvas.Canvas, viewport: Viewport, summaries: list[CellSummary],
                    month: int, top: float, bottom: float) -> None:
        """Draw the month grid: a weekday row and one row per week."""
        col_width = (viewport.width - MARGIN_LEFT - MARGIN_RIGHT) / 7
        rows = len(summaries) // 7

        c.setFont("Helvetica-Bold", FONT_SIZE_WEEKDAY)
        c.setFillColor(COLOR_HOUR_TEXT)
        for col, summary in enumerate(summaries[:7]):
            label = self._weekday_label(summary.day.weekday(), viewport)
            c.drawCentredString(
                MARGIN_LEFT + col * col_width + col_width / 2,
                top - WEEKDAY_ROW_HEIGHT + 1.5 * mm,
                label.upper(),
            )

        grid_top = top - WEEKDAY_ROW_HEIGHT
        row_height = (grid_top - bottom) / rows

        for i, summary in enumerate(summaries):
            row, col = divmod(i, 7)
            self._draw_cell(
                c,
                MARGIN_LEFT + col * col_width,
                grid_top - row * row_height,
                col_width,
                row_height,
                summary,
                in_month=summary.day.month == month,
            )

    def _draw_cell(self, c: canvas.Canvas, x: float, top: float, width: float, height: float,
                   summary: CellSummary, in_month: bool = True) -> int:
        """Draw one day cell with its inline items, overflow and indicators.

        Returns how many of the day's items are not drawn.
        """
        bottom = top - height

        if summary.is_selected:
            background = COLOR_SELECTED_BG
        elif summary.is_today:
            background = COLOR_TODAY_BG
        elif not in_month:
            background = COLOR_OUT_OF_MONTH_BG
        else:
            background = None

        if background is not None:
            c.setFillColor(background)
            c.rect(x, bottom, width, height, fill=1, stroke=0)

        c.setStrokeColor(COLOR_SELECTED_BORDER if summary.is_selected else COLOR_GRID)
        c.setLineWidth(0.8 if summary.is_selected else 0.4)
        c.rect(x, bottom, width, height, fill=0, stroke=1)

        self._draw_day_number(c, x + 2 * mm, top - 4 * mm, summary, in_month)

        hidden = self._draw_stack(c, summary.visible_items, summary.overflow_count,
                                  x + 1 * mm, top - 7 * mm, bottom + INDICATOR_HEIGHT + 1 * mm,
                                  width - 2 * mm)

        self._draw_indicators(c, summary, x + 1 * mm, bottom + 0.8 * mm, width - 2 * mm)
        return hidden

    def _draw_stack(self, c: canvas.Canvas, items: list[CalendarItem], overflow: int,
                    x: float, top: float, floor: float, width: float) -> int:
        """Draw items top-down above floor, ending with "+N more" for anything left out.

        overflow counts items already cut by the summarizer. Returns the total
        number of items not drawn.
        """
        step = ITEM_HEIGHT + ITEM_GAP
        if top - ITEM_HEIGHT < floor:
            capacity = 0
        else:
            capacity = int((top - ITEM_HEIGHT - floor) // step) + 1

        if overflow == 0 and len(items) <= capacity:
            shown = items
        else:
            # keep the last line for the "+N more" label
            shown = items[:max(min(len(items), capacity - 1), 0)]
        hidden = overflow + len(items) - len(shown)

        y = top
        for item in shown:
            self._draw_item(c, item, x, y, width)
            y -= step

        if hidden > 0 and len(shown) < capacity:
            c.setFillColor(COLOR_MUTED_TEXT)
            c.setFont("Helvetica", FONT_SIZE_MORE)
            c.drawString(x + 1 * mm, y - ITEM_HEIGHT + 1.2 * mm, f"+{hidden} more")
        return hidden

    def _draw_day_number(self, c: canvas.Canvas, x: float, y: float,
                         summary: CellSummary, in_month: bool = True) -> None:
        label = str(summary.day.day)
        if summary.is_today:
            c.setFillColor(ITEM_COLORS[ItemColor.PRIMARY])
            c.circle(x + 1.5 * mm, y + 1 * mm, 2.3 * mm, fill=1, stroke=0)
            c.setFillColor(COLOR_ITEM_TEXT)
            c.setFont("Helvetica-Bold", FONT_SIZE_DAY)
            c.drawCentredString(x + 1.5 * mm, y, label)
            return

        c.setFillColor(COLOR_DAY_TEXT if in_month else COLOR_MUTED_TEXT)
        c.setFont("Helvetica-Bold" if summary.is_selected else "Helvetica", FONT_SIZE_DAY)
        c.drawString(x, y, label)

    def _draw_item(self, c: canvas.Canvas, item: CalendarItem, x: float, y: float,
                   width: float, prefix: str = "") -> None:
        """Draw a colored item bar whose top edge is at y."""
        c.setFillColor(ITEM_COLORS[item_color(item)])
        c.roundRect(x, y - ITEM_HEIGHT, width, ITEM_HEIGHT, radius=0.8 * mm, fill=1, stroke=0)

        c.setFillColor(COLOR_ITEM_TEXT)
        c.setFont("Helvetica", FONT_SIZE_ITEM)
        text = fit_text(prefix + item.label, "Helvetica", FONT_SIZE_ITEM, width - 2 * mm)
        c.drawString(x + 1 * mm, y - ITEM_HEIGHT + 1.2 * mm, text)

    def _draw_indicators(self, c: canvas.Canvas, summary: CellSummary,
                         x: float, y: float, width: float) -> None:
        """Bottom strip: event, pending-task and completed-task markers."""
        flags = summary.indicators
        segments = []
        if flags.has_event:
            segments.append(ITEM_COLORS[ItemColor.PRIMARY])
        if flags.has_pending_task:
            segments.append(ITEM_COLORS[ItemColor.AMBER])
        if flags.has_completed_task:
            segments.append(ITEM_COLORS[ItemColor.GREEN])
        if not segments:
            return

        gap = 0.5 * mm
        seg_width = (width - gap * (len(segments) - 1)) / len(segments)
        for i, color in enumerate(segments):
            c.setFillColor(color)
            c.roundRect(x + i * (seg_width + gap), y, seg_width, INDICATOR_HEIGHT,
                        radius=INDICATOR_HEIGHT / 2, fill=1, stroke=0)

    # ── Week ──────────────────────────────────────────────────────────────────

    def _draw_week(self, c: canvas.Canvas, viewport: Viewport, summaries: list[CellSummary],
                   top: float, bottom: float) -> None:
        """Draw seven day columns, each headed by its weekday and date."""
        col_width = (viewport.width - MARGIN_LEFT - MARGIN_RIGHT) / 7
        header_height = 10 * mm

        for col, summary in enumerate(summaries):
            x = MARGIN_LEFT + col * col_width

            c.setFillColor(COLOR_HOUR_TEXT)
            c.setFont("Helvetica-Bold", FONT_SIZE_WEEKDAY)
            c.drawCentredString(x + col_width / 2, top - 3.5 * mm,
                                self._weekday_label(summary.day.weekday(), viewport))

            self._draw_cell(c, x, top - header_height + 4 * mm, col_width,
                            top - header_height + 4 * mm - bottom, summary)

    # ── Day ───────────────────────────────────────────────────────────────────

    def _draw_day(self, c: canvas.Canvas, viewport: Viewport, index: DateBucketIndex,
                  summary: CellSummary, top: float, bottom: float) -> None:
        """Draw the hourly schedule with all-day items above it."""
        content_width = viewport.width - MARGIN_LEFT - MARGIN_RIGHT
        schedule = hour_slots(summary.day, lookup(index, summary.day))

        y = top
        if schedule.all_day:
            hidden = self._draw_stack(c, schedule.all_day, 0, MARGIN_LEFT, y, bottom, content_width)
            lines = len(schedule.all_day) - hidden + (1 if hidden else 0)
            y -= lines * (ITEM_HEIGHT + ITEM_GAP) + 2 * mm

        # Items outside the printed hours go in the first or last slot.
        slots: dict[int, list[CalendarItem]] = {}
        for hour, items in sorted(schedule.by_hour.items()):
            clamped = min(max(hour, self.day_start_hour), self.day_end_hour - 1)
            slots.setdefault(clamped, []).extend(items)

        num_hours = self.day_end_hour - self.day_start_hour
        slot_height = min((y - bottom) / num_hours, 12 * mm)
        line_x = MARGIN_LEFT + HOUR_LABEL_WIDTH
        lane_width = content_width - HOUR_LABEL_WIDTH - 1 * mm

        for hour_idx in range(num_hours):
            hour = self.day_start_hour + hour_idx
            slot_y = y - hour_idx * slot_height

            c.setFillColor(COLOR_HOUR_TEXT)
            c.setFont("Helvetica", FONT_SIZE_HOUR)
            c.drawString(MARGIN_LEFT, slot_y - 3 * mm, f"{hour:02d}:00")

            c.setStrokeColor(COLOR_HOUR_LINE)
            c.setLineWidth(0.3)
            c.line(line_x, slot_y, MARGIN_LEFT + content_width, slot_y)

            items = slots.get(hour, [])
            if not items:
                continue
            item_width = lane_width / len(items)
            for i, item in enumerate(items):
                prefix = ""
                if item.is_event and item.item.start_time is not None:
                    prefix = item.item.start_time.strftime("%H:%M ")
                self._draw_item(c, item, line_x + 1 * mm + i * item_width,
                                slot_y - 1 * mm, item_width - 1 * mm, prefix=prefix)

    # ── Footer ────────────────────────────────────────────────────────────────

    def _draw_footer(self, c: canvas.Canvas, viewport: Viewport) -> None:
        """Draw the footer with generation timestamp."""
        c.setFillColor(COLOR_FOOTER_TEXT)
        c.setFont("Helvetica", FONT_SIZE_FOOTER)
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M")
        c.drawString(MARGIN_LEFT, MARGIN_BOTTOM - 3 * mm, f"Generated: {timestamp}")
        c.drawRightString(
            viewport.width - MARGIN_RIGHT, MARGIN_BOTTOM - 3 * mm,
            "Symera"
        )
