"""Debounced, keyboard-navigable place-name autocompletion for one input field.

The controller is presentation-agnostic: it drives a SuggestionView and is
fed events (input, focus, keys, clicks) by whatever UI hosts it. It must be
used from within a running asyncio event loop.

Only the response to the most recent request may update the dropdown.
Every debounce cycle gets a sequence number, and responses carrying an
older number are dropped.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from enum import Enum
from typing import Protocol

from .errors import TransportError
from .route_search import normalize

logger = logging.getLogger(__name__)

DEBOUNCE_DELAY = 0.3  # seconds

ARROW_DOWN = "ArrowDown"
ARROW_UP = "ArrowUp"
ENTER = "Enter"
ESCAPE = "Escape"

SuggestionFetcher = Callable[[str], Awaitable[Sequence[str]]]


class SuggestionView(Protocol):
    """Dropdown that displays suggestions for one field."""

    def render(self, suggestions: Sequence[str]) -> None:
        """Replace the displayed options and show the dropdown."""
        ...

    def clear(self) -> None:
        """Remove all options and hide the dropdown."""
        ...

    def highlight(self, index: int) -> None:
        """Highlight option `index` and bring it into view; -1 removes it."""
        ...


class FieldState(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    AWAITING_RESPONSE = "awaiting_response"
    SHOWING_SUGGESTIONS = "showing_suggestions"


class FieldAutocompleteController:
    """Autocomplete state machine for a single input field.

    Args:
        name: Field identity (e.g., "origin"), used for outside-click checks
        fetch: Coroutine function returning suggestions for a prefix. Any
            exception it raises is logged and leaves the dropdown unchanged.
        view: Dropdown to drive
        delay: Debounce delay in seconds
        on_input: Called on every input event (e.g., to hide an error banner)
    """

    def __init__(
        self,
        name: str,
        fetch: SuggestionFetcher,
        view: SuggestionView,
        delay: float = DEBOUNCE_DELAY,
        on_input: Callable[[], None] | None = None,
    ):
        self.name = name
        self.value = ""
        self.focused = False
        self.visible = False
        self.last_suggestions: list[str] = []
        self.highlighted_index = -1

        self._fetch = fetch
        self._view = view
        self._delay = delay
        self._on_input = on_input
        self._timer: asyncio.TimerHandle | None = None
        self._seq = 0
        self._requests: set[asyncio.Task] = set()

    @property
    def state(self) -> FieldState:
        if self._timer is not None:
            return FieldState.DEBOUNCING
        if self._requests:
            return FieldState.AWAITING_RESPONSE
        if self.visible:
            return FieldState.SHOWING_SUGGESTIONS
        return FieldState.IDLE

    # Input and timers

    def on_input(self, text: str) -> None:
        """Handle a keystroke that changed the field text."""
        self.value = text
        if self._on_input:
            self._on_input()
        if self.visible:
            self._set_highlight(-1)
        else:
            self.highlighted_index = -1
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._delay, self._fire)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        self._timer = None
        self._seq += 1
        prefix = self.value.strip()
        if not normalize(prefix):
            self.hide()
            return

        task = asyncio.ensure_future(self._request(self._seq, prefix))
        self._requests.add(task)
        task.add_done_callback(self._requests.discard)

    async def _request(self, seq: int, prefix: str) -> None:
        try:
            suggestions = await self._fetch(prefix)
        except TransportError as e:
            # Best-effort: keep the dropdown as it is.
            logger.debug("Suggestions for %s field failed: %s", self.name, e)
            return
        except Exception:
            logger.debug("Suggestion fetcher for %s field raised", self.name, exc_info=True)
            return

        if seq != self._seq:
            logger.debug("Dropping stale suggestions for %s field (%r)", self.name, prefix)
            return

        self.last_suggestions = list(suggestions)
        self._show(self.last_suggestions)

    async def settle(self) -> None:
        """Wait until the pending debounce timer and all requests are done."""
        loop = asyncio.get_running_loop()
        while self._timer is not None:
            await asyncio.sleep(max(self._timer.when() - loop.time(), 0))
        while self._requests:
            await asyncio.gather(*self._requests)

    # Dropdown

    def _show(self, suggestions: Sequence[str]) -> None:
        if not suggestions:
            self.hide()
            return
        self.highlighted_index = -1
        self._view.render(suggestions)
        self.visible = True

    def hide(self) -> None:
        """Hide the dropdown. Keeps the last suggestions for refocus."""
        self._view.clear()
        self.visible = False

    def dismiss(self) -> None:
        """Hide the dropdown and ignore the answer to any in-flight lookup."""
        self._seq += 1
        self.highlighted_index = -1
        self.hide()

    def reset(self) -> None:
        """Dismiss the dropdown and cancel a pending lookup."""
        self._cancel_timer()
        self.dismiss()

    def commit(self, text: str) -> None:
        """Write a chosen suggestion into the field."""
        self.value = text
        self.dismiss()
        self.focused = True

    # UI events

    def on_focus(self) -> None:
        self.focused = True
        if self.last_suggestions:
            self._show(self.last_suggestions)

    def on_blur(self) -> None:
        self.focused = False

    def on_keydown(self, key: str) -> bool:
        """Handle a key press in the field.

        Returns:
            True if the key was consumed and its default action (cursor
            movement, form submission) must be suppressed.
        """
        if not self.visible or not self.last_suggestions:
            return False

        if key == ARROW_DOWN:
            self._set_highlight(min(self.highlighted_index + 1, len(self.last_suggestions) - 1))
            return True
        if key == ARROW_UP:
            self._set_highlight(max(self.highlighted_index - 1, -1))
            return True
        if key == ENTER:
            if self.highlighted_index < 0:
                return False
            self.commit(self.last_suggestions[self.highlighted_index])
            return True
        if key == ESCAPE:
            self.dismiss()
            return True
        return False

    def _set_highlight(self, index: int) -> None:
        self.highlighted_index = index
        self._view.highlight(index)

    def on_option_hover(self, index: int) -> None:
        if self.visible and 0 <= index < len(self.last_suggestions):
            self._set_highlight(index)

    def on_option_click(self, index: int) -> None:
        if self.visible and 0 <= index < len(self.last_suggestions):
            self.commit(self.last_suggestions[index])

    def on_document_click(self, inside: bool) -> None:
        """Handle a pointer interaction anywhere on the page.

        Args:
            inside: Whether it hit this field or its dropdown
        """
        if inside:
            return
        self.dismiss()
