"""
Host platform interface for InspectorGadget.
A platform tells the engine how to walk a host's UI tree, which text controls
can be intercepted, and how to schedule work on the host's main loop.
"""

import logging
from typing import Any, Callable, Hashable, List, Optional, Sequence

from inspectorgadget.core.interceptor import TextControlTarget

logger = logging.getLogger(__name__)


class TimerHandle:
    """Handle returned by MainLoop.call_repeating."""

    def __init__(self, cancel_func: Callable[[], None]):
        self._cancel_func = cancel_func
        self.cancelled = False

    def cancel(self):
        if not self.cancelled:
            self.cancelled = True
            self._cancel_func()


class MainLoop:
    """Schedules callbacks on the host's UI thread."""

    def call_soon(self, callback: Callable[[], Any]):
        raise NotImplementedError

    def call_repeating(self, interval: float, callback: Callable[[], Any]) -> TimerHandle:
        raise NotImplementedError


class Platform:
    """Adapter between the engine and a concrete UI host."""

    def __init__(self, main_loop: MainLoop):
        self.main_loop = main_loop
        self._activation_observers: List[Callable[[], None]] = []

    # Tree walking

    def frontmost_surfaces(self) -> Sequence[Any]:
        """Top-level surfaces currently in the foreground."""
        raise NotImplementedError

    def children(self, node: Any) -> Sequence[Any]:
        raise NotImplementedError

    def accessibility_elements(self, node: Any) -> Sequence[Any]:
        """Semantic elements declared by ``node`` (may be empty)."""
        raise NotImplementedError

    def label_of(self, element: Any) -> Optional[str]:
        raise NotImplementedError

    def describe(self, element: Any) -> str:
        return repr(element)

    def type_name(self, element: Any) -> str:
        return type(element).__name__

    # Identity and interception

    def identity_func(self) -> Optional[Callable[[Any], Hashable]]:
        """Identity function for elements, or None for object identity."""
        return None

    def text_control_targets(self) -> List[TextControlTarget]:
        return []

    # Side channel

    def new_overlay_label(self) -> Any:
        raise NotImplementedError

    def attach_overlay(self, label: Any) -> bool:
        """Attach ``label`` to an overlay surface; False if none is available yet."""
        raise NotImplementedError

    def add_activation_observer(self, callback: Callable[[], None]):
        if callback not in self._activation_observers:
            self._activation_observers.append(callback)

    def remove_activation_observer(self, callback: Callable[[], None]):
        if callback in self._activation_observers:
            self._activation_observers.remove(callback)

    def _notify_surface_activated(self):
        for callback in list(self._activation_observers):
            try:
                callback()
            except Exception as e:
                logger.error(f"Error in surface activation observer: {e}")
