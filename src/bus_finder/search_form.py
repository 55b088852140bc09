"""Search form controller: validation, route query and result rendering."""

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Protocol

from .autocomplete import DEBOUNCE_DELAY, FieldAutocompleteController, SuggestionView
from .client import RouteFinderClient
from .errors import InputValidationError, TransportError
from .models import RouteRecord
from .route_search import normalize

logger = logging.getLogger(__name__)

EMPTY_FORM_MESSAGE = "Please enter at least one location (From or To)"


class ResultsView(Protocol):
    """Result area, error banner and submit button of the search form."""

    def show_error(self, message: str) -> None: ...

    def hide_error(self) -> None: ...

    def set_loading(self, loading: bool) -> None:
        """Disable the submit button and show progress, or undo it."""
        ...

    def render_routes(self, routes: Sequence[RouteRecord], count: int) -> None: ...

    def render_empty(self) -> None:
        """Show the "no routes found" state."""
        ...

    def render_failure(self, message: str) -> None:
        """Show the "search failed" state."""
        ...


class SearchOutcome(str, Enum):
    INVALID = "invalid"
    RESULTS = "results"
    EMPTY = "empty"
    FAILED = "failed"
    BUSY = "busy"  # a search is already running


class SearchController:
    """Drives the origin/destination form.

    Owns one FieldAutocompleteController per field; both share the client
    for suggestions but nothing else.
    """

    def __init__(
        self,
        client: RouteFinderClient,
        view: ResultsView,
        origin_view: SuggestionView,
        destination_view: SuggestionView,
        delay: float = DEBOUNCE_DELAY,
    ):
        self.client = client
        self.view = view
        self.loading = False
        self.origin = FieldAutocompleteController(
            "origin", client.suggest, origin_view, delay=delay, on_input=view.hide_error
        )
        self.destination = FieldAutocompleteController(
            "destination", client.suggest, destination_view, delay=delay, on_input=view.hide_error
        )

    @property
    def fields(self) -> tuple[FieldAutocompleteController, FieldAutocompleteController]:
        return (self.origin, self.destination)

    def validate(self) -> tuple[str, str]:
        """Return the trimmed field values.

        Raises:
            InputValidationError: if both fields are blank.
        """
        origin = self.origin.value.strip()
        destination = self.destination.value.strip()
        if not normalize(origin) and not normalize(destination):
            raise InputValidationError(EMPTY_FORM_MESSAGE)
        return origin, destination

    async def submit(self) -> SearchOutcome:
        """Handle form submission."""
        if self.loading:
            return SearchOutcome.BUSY

        try:
            origin, destination = self.validate()
        except InputValidationError as e:
            self.view.show_error(str(e))
            return SearchOutcome.INVALID

        for field in self.fields:
            field.reset()
        self.view.hide_error()
        self._set_loading(True)

        try:
            result = await self.client.search(origin, destination)
        except TransportError as e:
            logger.warning("Route search failed: %s", e)
            self.view.show_error(f"Failed to search buses: {e}")
            self.view.render_failure("Unable to search buses. Please try again.")
            return SearchOutcome.FAILED
        finally:
            self._set_loading(False)

        if not result.routes:
            self.view.render_empty()
            return SearchOutcome.EMPTY

        self.view.render_routes(result.routes, result.count)
        return SearchOutcome.RESULTS

    def _set_loading(self, loading: bool) -> None:
        self.loading = loading
        self.view.set_loading(loading)

    def swap(self) -> None:
        """Exchange the origin and destination values."""
        self.origin.value, self.destination.value = self.destination.value, self.origin.value
        self.view.hide_error()
        for field in self.fields:
            field.reset()

    def document_click(self, target: str | None) -> None:
        """Dispatch a page click to each field.

        Args:
            target: Name of the field (or its dropdown) that was hit, or
                None for anywhere else on the page.
        """
        for field in self.fields:
            field.on_document_click(inside=target == field.name)
