"""Headless controller for the library screen.

All screen state lives in a :class:`LibraryState` owned by one
:class:`LibraryController`. The controller talks to the entries API
through an injected client and reports outcomes through an injected
``notify(message, level)`` callback, so a renderer only has to draw the
state and forward user events.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol

from medialib.client.api import ClientError
from medialib.client.models import EntryPageResult, EntryResult, MediaEntry
from medialib.ui.format import format_budget, format_type

logger = logging.getLogger(__name__)

Notify = Callable[[str, str], None]

FORM_FIELDS: tuple[str, ...] = (
    "title",
    "type",
    "director",
    "budget",
    "location",
    "duration",
    "year",
    "poster_url",
    "notes",
)

# Load the next page once the remaining scroll distance is within this
# many viewport heights
SCROLL_THRESHOLD = 1.5


class EntryApi(Protocol):
    def get_entries(self, page: int = 1, limit: int = 10) -> EntryPageResult: ...

    def create_entry(self, entry: Mapping[str, Any]) -> EntryResult: ...

    def update_entry(self, entry_id: int | str, fields: Mapping[str, Any]) -> EntryResult: ...

    def delete_entry(self, entry_id: int | str) -> str | None: ...


def empty_form() -> dict[str, Any]:
    form = {name: "" for name in FORM_FIELDS}
    form["type"] = "MOVIE"
    return form


@dataclass
class LibraryState:
    """Everything the library screen renders."""

    entries: list[MediaEntry] = field(default_factory=list)
    page: int = 1
    has_more: bool = True
    loading: bool = False
    form: dict[str, Any] = field(default_factory=empty_form)
    show_add_modal: bool = False
    show_edit_modal: bool = False
    editing: MediaEntry | None = None
    delete_confirm: int | None = None
    # Server message is shown for the first successful load only
    initial_load: bool = True


@dataclass(frozen=True)
class EntryRow:
    """One table row, formatted for display."""

    id: int
    title: str
    type_label: str
    director: str
    budget: str
    location: str
    duration: str
    year: str
    poster_url: str | None
    notes: str | None


def _failure_text(verb: str, noun: str, error: ClientError) -> str:
    """User-facing text for a failed operation, by failure kind."""
    if error.kind == "validation":
        fields = [
            d["field"] for d in error.detail or [] if isinstance(d, dict) and "field" in d
        ]
        if fields:
            return f"Could not {verb} {noun}. Check: {', '.join(fields)}."
        return f"Could not {verb} {noun}. Check the form and try again."
    if error.kind == "not_found":
        return "That entry no longer exists."
    if error.kind == "transport":
        return f"Could not {verb} {noun}. The server is unreachable."
    return f"Failed to {verb} {noun}. Please try again."


class LibraryController:
    """Drives list, pagination and form state for the library screen.

    Args:
        client: Entries API client.
        notify: Toast sink, called as notify(message, "success" | "error").
        page_size: Entries per page.
        state: Initial state. Defaults to an empty LibraryState.
    """

    def __init__(
        self,
        client: EntryApi,
        notify: Notify,
        page_size: int = 10,
        state: LibraryState | None = None,
    ):
        self.client = client
        self.notify = notify
        self.page_size = page_size
        self.state = state if state is not None else LibraryState()

    # ------------------------------------------------------------------
    # Loading and pagination
    # ------------------------------------------------------------------

    def mount(self) -> bool:
        """Load the current page (page 1 on a fresh state)."""
        return self._fetch_page(previous_page=None)

    def set_page(self, page: int) -> bool:
        """Move the page cursor and load that page.

        Ignored while a fetch is in flight.
        """
        if self.state.loading:
            return False
        previous_page = self.state.page
        self.state.page = page
        return self._fetch_page(previous_page=previous_page)

    def on_scroll(self, scroll_top: float, client_height: float, scroll_height: float) -> bool:
        """Handle a scroll event on the table container.

        Returns:
            True if the next page was requested.
        """
        state = self.state
        near_bottom = scroll_height - scroll_top <= client_height * SCROLL_THRESHOLD
        if not (near_bottom and state.has_more and not state.loading):
            return False
        self.set_page(state.page + 1)
        return True

    def _fetch_page(self, previous_page: int | None) -> bool:
        state = self.state
        state.loading = True
        try:
            result = self.client.get_entries(state.page, self.page_size)
        except ClientError as e:
            logger.warning(f"Failed to fetch page {state.page}: {e.kind} {e.detail}")
            # Roll back so the next scroll retries the same page
            if previous_page is not None:
                state.page = previous_page
            self.notify(_failure_text("fetch", "entries", e), "error")
            return False
        finally:
            state.loading = False

        if state.initial_load:
            if result.message:
                self.notify(result.message, "success")
            state.initial_load = False

        if state.page == 1:
            state.entries = list(result.items)
        else:
            state.entries = state.entries + list(result.items)
        state.has_more = result.has_more
        return True

    # ------------------------------------------------------------------
    # Form state
    # ------------------------------------------------------------------

    def reset_form(self) -> None:
        self.state.form = empty_form()

    def update_form(self, name: str, value: Any) -> None:
        """Set one form field. Accepts posterUrl for poster_url."""
        if name == "posterUrl":
            name = "poster_url"
        if name not in self.state.form:
            raise KeyError(f"Unknown form field: {name}")
        self.state.form[name] = value

    def open_add(self) -> None:
        self.state.show_add_modal = True

    def close_add(self) -> None:
        self.state.show_add_modal = False
        self.reset_form()

    def open_edit(self, entry: MediaEntry) -> None:
        """Open the edit modal with the form filled from ``entry``."""
        form = entry.fields()
        form["poster_url"] = entry.poster_url or ""
        form["notes"] = entry.notes or ""
        self.state.editing = entry
        self.state.form = form
        self.state.show_edit_modal = True

    def close_edit(self) -> None:
        self.state.show_edit_modal = False
        self.state.editing = None
        self.reset_form()

    def request_delete(self, entry_id: int) -> None:
        self.state.delete_confirm = entry_id

    def cancel_delete(self) -> None:
        self.state.delete_confirm = None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def submit_add(self) -> bool:
        """Create an entry from the form and prepend it to the list.

        On failure the modal stays open with the form untouched.
        """
        try:
            result = self.client.create_entry(dict(self.state.form))
        except ClientError as e:
            logger.warning(f"Failed to add entry: {e.kind} {e.detail}")
            self.notify(_failure_text("add", "entry", e), "error")
            return False

        self.state.entries = [result.item] + self.state.entries
        if result.message:
            self.notify(result.message, "success")
        self.close_add()
        return True

    def submit_edit(self) -> bool:
        """Send the form as an update for the entry being edited."""
        editing = self.state.editing
        if editing is None:
            return False

        try:
            result = self.client.update_entry(editing.id, dict(self.state.form))
        except ClientError as e:
            logger.warning(f"Failed to update entry {editing.id}: {e.kind} {e.detail}")
            self.notify(_failure_text("update", "entry", e), "error")
            return False

        self.state.entries = [
            result.item if entry.id == editing.id else entry for entry in self.state.entries
        ]
        if result.message:
            self.notify(result.message, "success")
        self.close_edit()
        return True

    def confirm_delete(self) -> bool:
        """Delete the entry awaiting confirmation and drop it from the list."""
        entry_id = self.state.delete_confirm
        if entry_id is None:
            return False

        try:
            message = self.client.delete_entry(entry_id)
        except ClientError as e:
            logger.warning(f"Failed to delete entry {entry_id}: {e.kind} {e.detail}")
            self.notify(_failure_text("delete", "entry", e), "error")
            return False

        self.state.entries = [e for e in self.state.entries if e.id != entry_id]
        self.state.delete_confirm = None
        if message:
            self.notify(message, "success")
        return True

    # ------------------------------------------------------------------
    # View model
    # ------------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        """True when the empty-collection placeholder should show."""
        return not self.state.entries and not self.state.loading

    def rows(self) -> list[EntryRow]:
        return [
            EntryRow(
                id=e.id,
                title=e.title,
                type_label=format_type(e.type),
                director=e.director,
                budget=format_budget(e.budget),
                location=e.location,
                duration=e.duration,
                year=e.year,
                poster_url=e.poster_url,
                notes=e.notes,
            )
            for e in self.state.entries
        ]
