"""
Base classes for layout engines.

This module provides abstract base classes that define the common interface
and shared functionality for layout engines:

- BaseLayout: Abstract base with event system
- IterativeLayout: For layouts advanced one iteration at a time with an
  iteration cap and a batch loop
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from typing_extensions import Self

from .types import Event, EventType
from .validation import validate_iterations

EventCallback = Callable[[Optional[Event]], None]


class BaseLayout(ABC):
    """
    Abstract base class for layout engines.

    Provides the event system (start/tick/end events). Callbacks receive an
    Event payload; presentation code subscribes to ``tick`` to pick up
    published positions.
    """

    def __init__(
        self,
        *,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
    ) -> None:
        """
        Initialize layout with event callbacks.

        Args:
            on_start: Callback for start event
            on_tick: Callback for tick event (positions published)
            on_end: Callback for end event
        """
        self._events: dict[EventType, EventCallback] = {}

        if on_start:
            self._events[EventType.start] = on_start
        if on_tick:
            self._events[EventType.tick] = on_tick
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: EventCallback) -> Self:
        """
        Subscribe to a layout event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """
        Trigger an event, calling the registered callback.

        Args:
            event: Event payload with type and optional data
        """
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)


class IterativeLayout(BaseLayout):
    """
    Base class for layouts advanced one iteration at a time.

    Subclasses implement step() (one full iteration) and is_complete;
    kick() drives step() back-to-back until completion, bounded by the
    iteration cap.
    """

    def __init__(
        self,
        *,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
        max_iterations: int = 300,
    ) -> None:
        super().__init__(on_start=on_start, on_tick=on_tick, on_end=on_end)
        self._max_iterations: int = validate_iterations(max_iterations)

    @property
    def max_iterations(self) -> int:
        """Get maximum iterations per run."""
        return self._max_iterations

    @max_iterations.setter
    def max_iterations(self, value: int) -> None:
        """Set maximum iterations (minimum 1)."""
        self._max_iterations = validate_iterations(value)

    @property
    @abstractmethod
    def is_complete(self) -> bool:
        """Whether the current run reached a terminal state."""

    @abstractmethod
    def step(self) -> bool:
        """
        Perform one iteration of the layout.

        Returns:
            True if the run is complete, False if more iterations are needed.
        """

    def kick(self) -> None:
        """Run step() repeatedly until completion or max iterations."""
        for _ in range(self._max_iterations):
            if self.step():
                break


__all__ = [
    "EventCallback",
    "BaseLayout",
    "IterativeLayout",
]
