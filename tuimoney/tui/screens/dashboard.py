"""Dashboard screen: browse, filter and record entries."""

from datetime import date
from enum import Enum, auto
from typing import Any, Callable

import structlog

from tuimoney.dates import current_month, format_date, month_range, parse_optional_date
from tuimoney.domain.errors import StorageError, ValidationError
from tuimoney.domain.models import Entry, EntryFilter, EntryKind, NewEntry
from tuimoney.domain.money import format_amount, parse_amount
from tuimoney.domain.repository import EntryRepository
from tuimoney.domain.validation import validate
from tuimoney.tui.actions import Action, ActionKind
from tuimoney.tui.layout import Palette, button, field, put, put_segments
from tuimoney.tui.navigation import ScreenId, ScreenResult
from tuimoney.tui.screens.base import Screen
from tuimoney.tui.widgets import TextField, cycle

logger = structlog.get_logger(__name__)

HELP_TEXT = "[Tab] next  [Enter] save/apply  [Esc] back  [a]dd [f]ilter [m]onth [c]lear [r]eload [l]ogout [q]uit"


class DashboardFocus(Enum):
    ENTRIES = auto()
    KIND = auto()
    AMOUNT = auto()
    CATEGORY = auto()
    NOTE = auto()
    DATE = auto()
    SAVE = auto()
    FILTER_CATEGORY = auto()
    FILTER_FROM = auto()
    FILTER_TO = auto()
    APPLY = auto()


FOCUS_ORDER = tuple(DashboardFocus)
FILTER_FOCUS = (
    DashboardFocus.FILTER_CATEGORY,
    DashboardFocus.FILTER_FROM,
    DashboardFocus.FILTER_TO,
    DashboardFocus.APPLY,
)


class DashboardScreen(Screen):
    screen_id = ScreenId.DASHBOARD

    def __init__(self, currency_symbol: str = "$", today: Callable[[], date] = date.today) -> None:
        self.currency_symbol = currency_symbol
        self.today = today
        self.entries: list[Entry] = []
        self.selected: int | None = None
        self.focus = DashboardFocus.ENTRIES
        self.kind = EntryKind.EXPENSE
        self.fields = {
            DashboardFocus.AMOUNT: TextField(max_length=16),
            DashboardFocus.CATEGORY: TextField(max_length=32),
            DashboardFocus.NOTE: TextField(max_length=80),
            DashboardFocus.DATE: TextField(format_date(today()), max_length=10),
            DashboardFocus.FILTER_CATEGORY: TextField(max_length=32),
            DashboardFocus.FILTER_FROM: TextField(max_length=10),
            DashboardFocus.FILTER_TO: TextField(max_length=10),
        }
        self.active_filter = EntryFilter()
        self.form_error: str | None = None
        self.filter_error: str | None = None
        self.message: str | None = None
        self.status: str | None = None

    def text(self, focus: DashboardFocus) -> str:
        return self.fields[focus].value

    @property
    def selected_entry(self) -> Entry | None:
        if self.selected is None:
            return None
        return self.entries[self.selected]

    def init(self, repo: EntryRepository) -> None:
        self.refresh(repo)

    def refresh(self, repo: EntryRepository) -> bool:
        """Reload entries for the active filter.

        On failure the previously shown entries stay and a message is shown.
        """
        try:
            entries = repo.list(self.active_filter)
        except StorageError as e:
            logger.warning("dashboard_refresh_failed", error=str(e))
            self.message = f"Could not load entries: {e}"
            return False

        self.entries = entries
        if not entries:
            self.selected = None
        elif self.selected is None:
            self.selected = 0
        elif self.selected >= len(entries):
            self.selected = len(entries) - 1
        return True

    def submit(self, repo: EntryRepository) -> None:
        """Validate the form and store it as a new entry."""
        self.form_error = None
        self.filter_error = None
        self.status = None
        note = self.text(DashboardFocus.NOTE)
        try:
            candidate = NewEntry(
                kind=self.kind,
                amount_cents=parse_amount(self.text(DashboardFocus.AMOUNT)),
                category=self.text(DashboardFocus.CATEGORY),
                note=note or None,
                occurred_on=self.text(DashboardFocus.DATE),
            )
            valid = validate(candidate)
        except ValidationError as e:
            logger.debug("entry_rejected", reason=type(e).__name__)
            self.form_error = str(e)
            return

        try:
            entry = repo.add(valid)
        except StorageError as e:
            # Input stays in the form so the user can retry.
            self.message = f"Could not save entry: {e}"
            return

        for focus in (DashboardFocus.AMOUNT, DashboardFocus.CATEGORY, DashboardFocus.NOTE):
            self.fields[focus].clear()
        self.status = f"Saved entry #{entry.id}"
        if self.refresh(repo):
            for idx, shown in enumerate(self.entries):
                if shown.id == entry.id:
                    self.selected = idx
                    break

    def apply_filter(self, repo: EntryRepository) -> None:
        """Build a filter from the filter fields and reload."""
        self.form_error = None
        self.status = None
        try:
            start = parse_optional_date(self.text(DashboardFocus.FILTER_FROM))
            end = parse_optional_date(self.text(DashboardFocus.FILTER_TO))
        except ValidationError as e:
            self.filter_error = str(e)
            return

        self.filter_error = None
        category = self.text(DashboardFocus.FILTER_CATEGORY).strip() or None
        previous, previous_selected = self.active_filter, self.selected
        self.active_filter = EntryFilter(start=start, end=end, category=category)
        self.selected = None
        if not self.refresh(repo):
            self.active_filter, self.selected = previous, previous_selected

    def filter_current_month(self, repo: EntryRepository) -> None:
        first_day, last_day = month_range(current_month(self.today()))
        self.fields[DashboardFocus.FILTER_FROM].value = format_date(first_day)
        self.fields[DashboardFocus.FILTER_TO].value = format_date(last_day)
        self.apply_filter(repo)

    def clear_filter(self, repo: EntryRepository) -> None:
        for focus in (DashboardFocus.FILTER_CATEGORY, DashboardFocus.FILTER_FROM, DashboardFocus.FILTER_TO):
            self.fields[focus].clear()
        self.apply_filter(repo)

    def _move_selection(self, step: int) -> None:
        if not self.entries:
            return
        if self.selected is None:
            self.selected = 0
        else:
            self.selected = (self.selected + step) % len(self.entries)

    def _handle_entries(self, action: Action, repo: EntryRepository) -> ScreenResult:
        kind = action.kind
        if kind is ActionKind.NAV_DOWN:
            self._move_selection(1)
        elif kind is ActionKind.NAV_UP:
            self._move_selection(-1)
        elif kind is ActionKind.INPUT_CHAR:
            char = action.char
            if char == "q":
                return ScreenResult.exit()
            if char == "l":
                return ScreenResult.go_to(ScreenId.LOGIN)
            if char == "r":
                self.refresh(repo)
            elif char == "a":
                self.focus = DashboardFocus.AMOUNT
            elif char == "f":
                self.focus = DashboardFocus.FILTER_CATEGORY
            elif char == "m":
                self.filter_current_month(repo)
            elif char == "c":
                self.clear_filter(repo)
        return ScreenResult.none()

    def _handle_kind(self, action: Action, repo: EntryRepository) -> None:
        kind = action.kind
        if kind in (ActionKind.NAV_LEFT, ActionKind.NAV_RIGHT):
            self.kind = self.kind.toggled()
        elif kind is ActionKind.INPUT_CHAR:
            if action.char == " ":
                self.kind = self.kind.toggled()
            elif action.char == "e":
                self.kind = EntryKind.EXPENSE
            elif action.char == "i":
                self.kind = EntryKind.INCOME
        elif kind is ActionKind.ACTIVATE:
            self.submit(repo)
        elif kind is ActionKind.NAV_DOWN:
            self.focus = cycle(FOCUS_ORDER, self.focus, 1)
        elif kind is ActionKind.NAV_UP:
            self.focus = cycle(FOCUS_ORDER, self.focus, -1)

    def _handle_text(self, action: Action, repo: EntryRepository) -> None:
        kind = action.kind
        if kind is ActionKind.INPUT_CHAR:
            self.fields[self.focus].insert(action.char)
        elif kind is ActionKind.BACKSPACE:
            self.fields[self.focus].backspace()
        elif kind is ActionKind.NAV_DOWN:
            self.focus = cycle(FOCUS_ORDER, self.focus, 1)
        elif kind is ActionKind.NAV_UP:
            self.focus = cycle(FOCUS_ORDER, self.focus, -1)
        elif kind is ActionKind.ACTIVATE:
            if self.focus in FILTER_FOCUS:
                self.apply_filter(repo)
            else:
                self.submit(repo)

    def handle_action(self, action: Action, repo: EntryRepository) -> ScreenResult:
        kind = action.kind
        if kind is ActionKind.CANCEL:
            if self.message is not None:
                self.message = None
            else:
                self.focus = DashboardFocus.ENTRIES
            return ScreenResult.none()
        if kind is ActionKind.FOCUS_NEXT:
            self.focus = cycle(FOCUS_ORDER, self.focus, 1)
            return ScreenResult.none()
        if kind is ActionKind.FOCUS_PREV:
            self.focus = cycle(FOCUS_ORDER, self.focus, -1)
            return ScreenResult.none()

        if self.focus is DashboardFocus.ENTRIES:
            return self._handle_entries(action, repo)
        if self.focus is DashboardFocus.KIND:
            self._handle_kind(action, repo)
        elif self.focus is DashboardFocus.SAVE:
            if kind is ActionKind.ACTIVATE:
                self.submit(repo)
        elif self.focus is DashboardFocus.APPLY:
            if kind is ActionKind.ACTIVATE:
                self.apply_filter(repo)
        else:
            self._handle_text(action, repo)
        return ScreenResult.none()

    def describe_filter(self) -> str:
        current = self.active_filter
        if current.is_empty:
            return "all entries"
        parts = []
        if current.category is not None:
            parts.append(f"category={current.category}")
        if current.start is not None:
            parts.append(f"from {format_date(current.start)}")
        if current.end is not None:
            parts.append(f"to {format_date(current.end)}")
        return ", ".join(parts)

    def format_row(self, entry: Entry, width: int) -> str:
        amount = format_amount(entry.kind, entry.amount_cents, self.currency_symbol)
        row = f"{format_date(entry.occurred_on):<12}{entry.kind.label:<9}{entry.category[:16]:<17}{amount:>14}"
        if entry.note:
            row += f"  {entry.note}"
        return row[:width]

    def render(self, win: Any, palette: Palette) -> None:
        height, width = win.getmaxyx()
        focus = self.focus

        put(win, 0, 0, " TUI Money ", palette.title)
        put(win, 0, 12, f"- {len(self.entries)} shown, {self.describe_filter()}", palette.dim)

        list_top = 2
        list_bottom = max(list_top, height - 8)
        put(win, 1, 0, f"   {'Date':<12}{'Kind':<9}{'Category':<17}{'Amount':>14}  Note", palette.label)
        if not self.entries:
            put(win, list_top, 3, "No entries found. Press 'a' to add one or 'r' to reload.", palette.dim)
        else:
            rows = max(1, list_bottom - list_top)
            first = 0
            if self.selected is not None and self.selected >= rows:
                first = self.selected - rows + 1
            for offset, entry in enumerate(self.entries[first : first + rows]):
                idx = first + offset
                is_selected = idx == self.selected
                marker = ">> " if is_selected and focus is DashboardFocus.ENTRIES else "   "
                attr = palette.expense if entry.kind is EntryKind.EXPENSE else palette.income
                if is_selected:
                    attr |= palette.selected
                put(win, list_top + offset, 0, marker + self.format_row(entry, width - 3), attr)

        form_y = height - 6
        put_segments(
            win,
            form_y,
            0,
            [
                ("Kind ", palette.focus if focus is DashboardFocus.KIND else palette.label),
                (f"< {self.kind.label:<7} >", palette.focus if focus is DashboardFocus.KIND else 0),
                ("  ", 0),
                *field("Amount", self.text(DashboardFocus.AMOUNT), 10, focus is DashboardFocus.AMOUNT, palette),
                ("  ", 0),
                *field("Category", self.text(DashboardFocus.CATEGORY), 16, focus is DashboardFocus.CATEGORY, palette),
            ],
        )
        put_segments(
            win,
            form_y + 1,
            0,
            [
                *field("Note", self.text(DashboardFocus.NOTE), 24, focus is DashboardFocus.NOTE, palette),
                ("  ", 0),
                *field("Date", self.text(DashboardFocus.DATE), 10, focus is DashboardFocus.DATE, palette),
                ("  ", 0),
                button("Save", focus is DashboardFocus.SAVE, palette),
            ],
        )
        put_segments(
            win,
            form_y + 2,
            0,
            [
                *field(
                    "Filter category",
                    self.text(DashboardFocus.FILTER_CATEGORY),
                    12,
                    focus is DashboardFocus.FILTER_CATEGORY,
                    palette,
                ),
                ("  ", 0),
                *field("From", self.text(DashboardFocus.FILTER_FROM), 10, focus is DashboardFocus.FILTER_FROM, palette),
                ("  ", 0),
                *field("To", self.text(DashboardFocus.FILTER_TO), 10, focus is DashboardFocus.FILTER_TO, palette),
                ("  ", 0),
                button("Apply", focus is DashboardFocus.APPLY, palette),
            ],
        )

        if self.message is not None:
            put(win, form_y + 3, 0, f"{self.message}  (Esc to dismiss)", palette.error)
        elif self.form_error is not None:
            put(win, form_y + 3, 0, self.form_error, palette.error)
        elif self.filter_error is not None:
            put(win, form_y + 3, 0, self.filter_error, palette.error)
        elif self.status is not None:
            put(win, form_y + 3, 0, self.status, palette.status)

        put(win, height - 1, 0, HELP_TEXT, palette.dim)
