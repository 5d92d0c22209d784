"""Selection State - query, suggestions and chosen lane for one viewer.

Each viewer (lane viewer, panel viewer, list viewer) owns its own
SelectionState; instances share nothing.

Transitions:
- set_query(text): query := text, show suggestions, keep the selection
- focus(): show suggestions
- blur(): hide suggestions after a short delay so a pending click lands
- select_lane(lane): selected := lane, query := lane.intent, hide suggestions
- set_show_suggestions(flag): direct override
"""

import logging
import threading
from collections.abc import Callable, Sequence
from typing import Any, Optional, Protocol

from about_time.models import LaneTemplate, TemplateStore
from about_time.services.suggestion_index import suggest

logger = logging.getLogger(__name__)

DEFAULT_BLUR_DELAY_MS = 150


class Cancellable(Protocol):
    """Handle returned by a scheduler for a deferred callback."""

    def cancel(self) -> Any:
        ...


Scheduler = Callable[[float, Callable[[], None]], Cancellable]


def timer_scheduler(delay_seconds: float, callback: Callable[[], None]) -> Cancellable:
    """Run ``callback`` once after ``delay_seconds`` on a daemon timer thread."""
    timer = threading.Timer(delay_seconds, callback)
    timer.daemon = True
    timer.start()
    return timer


class SelectionState:
    """Per-viewer selection state machine."""

    def __init__(
        self,
        lane_templates: Sequence[LaneTemplate],
        on_select: Optional[Callable[[LaneTemplate], None]] = None,
        blur_delay_ms: int = DEFAULT_BLUR_DELAY_MS,
        scheduler: Scheduler = timer_scheduler,
    ):
        """Create the state with its initial values.

        Args:
            lane_templates: Candidate lanes offered as suggestions
            on_select: Called with the lane after each select_lane
            blur_delay_ms: Delay before blur hides the suggestion list
            scheduler: Runs a callback after a delay in seconds and returns
                a handle with ``cancel()``
        """
        self.lane_templates = list(lane_templates)
        self.on_select = on_select
        self.blur_delay_ms = blur_delay_ms
        self._scheduler = scheduler
        self._pending_hides: dict[object, Cancellable] = {}

        self.query: str = ""
        self.selected_lane: Optional[LaneTemplate] = None
        self.show_suggestions: bool = False

    @classmethod
    def from_store(
        cls,
        store: TemplateStore,
        on_select: Optional[Callable[[LaneTemplate], None]] = None,
        scheduler: Scheduler = timer_scheduler,
    ) -> "SelectionState":
        """Create a viewer's state over every lane in ``store``, using the configured blur delay."""
        from about_time.config import get_settings

        return cls(
            store.lane_templates(),
            on_select=on_select,
            blur_delay_ms=get_settings().blur_delay_ms,
            scheduler=scheduler,
        )

    @property
    def suggestions(self) -> list[LaneTemplate]:
        """Lanes matching the current query, recomputed on every access."""
        return suggest(self.query, self.lane_templates)

    def set_query(self, text: str) -> None:
        self.query = text
        self.set_show_suggestions(True)

    def focus(self) -> None:
        self.set_show_suggestions(True)

    def blur(self) -> None:
        """Schedule the suggestion list to hide after ``blur_delay_ms``.

        The hide is not cancelled by a later focus; a click that arrives
        after the delay simply finds the list closed. Each blur schedules
        its own hide and close() cancels every one still pending.
        """
        token = object()

        def hide() -> None:
            self._pending_hides.pop(token, None)
            self._hide_suggestions()

        self._pending_hides[token] = self._scheduler(self.blur_delay_ms / 1000.0, hide)

    def select_lane(self, lane: LaneTemplate) -> None:
        logger.debug("Selected lane %s", lane.id)
        self.selected_lane = lane
        self.query = lane.intent
        self.set_show_suggestions(False)
        if self.on_select is not None:
            self.on_select(lane)

    def set_show_suggestions(self, show: bool) -> None:
        self.show_suggestions = show

    def close(self) -> None:
        """Discard the state, cancelling every pending deferred hide."""
        handles = list(self._pending_hides.values())
        self._pending_hides.clear()
        for handle in handles:
            handle.cancel()

    def _hide_suggestions(self) -> None:
        self.set_show_suggestions(False)
