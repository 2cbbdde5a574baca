"""
Accessibility polling for InspectorGadget.
This module walks the frontmost surfaces on a timer and reports semantic
labels that differ from what was seen on the previous walk.
"""

import logging
from typing import Callable, Optional

from inspectorgadget.core.records import ChangeRecord, ChangeSource
from inspectorgadget.core.registry import IdentityRegistry

logger = logging.getLogger(__name__)


class AccessibilityPoller:
    """Periodic diff of accessibility labels against the registry."""

    def __init__(self, platform, registry: IdentityRegistry,
                 on_change: Callable[[ChangeRecord], None]):
        """Initialize the poller.

        Args:
            platform: The Platform whose tree is walked and whose main loop runs the timer
            registry: Registry holding the last label seen per element
            on_change: Called with each ChangeRecord produced by a tick
        """
        self.platform = platform
        self.registry = registry
        self.on_change = on_change
        self.timer = None
        self.is_ticking = False

    @property
    def running(self) -> bool:
        return self.timer is not None

    def start(self, interval_ms: int = 500):
        """Schedule tick() every ``interval_ms`` on the platform's main loop."""
        if self.timer is not None:
            return
        self.timer = self.platform.main_loop.call_repeating(interval_ms / 1000.0, self.tick)
        logger.debug(f"Accessibility polling every {interval_ms} ms")

    def stop(self):
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None

    def tick(self) -> int:
        """Walk every frontmost surface once. Returns the number of changes reported."""
        if self.is_ticking:
            return 0
        self.is_ticking = True
        changes = 0
        try:
            for surface in list(self.platform.frontmost_surfaces()):
                changes += self._visit(surface)
        except Exception as e:
            logger.error(f"Error during accessibility poll: {e}")
        finally:
            self.is_ticking = False
        return changes

    def _visit(self, node) -> int:
        changes = 0
        try:
            elements = list(self.platform.accessibility_elements(node))
        except Exception as e:
            logger.debug(f"Error getting accessibility elements: {e}")
            elements = []

        for element in elements:
            try:
                if self._check_element(element):
                    changes += 1
            except Exception as e:
                logger.debug(f"Error checking accessibility element: {e}")

        try:
            children = list(self.platform.children(node))
        except Exception as e:
            logger.debug(f"Error getting children: {e}")
            children = []

        for child in children:
            changes += self._visit(child)
        return changes

    def _check_element(self, element) -> bool:
        label = self.platform.label_of(element)
        if not isinstance(label, str) or not label:
            return False

        identity = self.registry.identity_of(element)
        previous = self.registry.get(identity)
        if previous == label:
            return False

        self.registry.set(identity, label)
        self.on_change(ChangeRecord(
            element_identity=identity,
            previous_label=previous,
            new_label=label,
            source=ChangeSource.POLL,
            element_description=self.platform.describe(element),
        ))
        return True
