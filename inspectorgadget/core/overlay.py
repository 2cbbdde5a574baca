"""
Side-channel overlay for InspectorGadget.
Layers whose text controls cannot be intercepted push text through a hidden
label on an invisible overlay window instead.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class OverlaySurface:
    """Hidden label attached to an overlay window once a surface is active."""

    def __init__(self, platform):
        self.platform = platform
        self.label = platform.new_overlay_label()
        self.attached = False
        self.observing = False
        self.open()

    def open(self):
        """Watch for surface activation and try to attach right away."""
        if not self.observing:
            self.platform.add_activation_observer(self.setup_if_possible)
            self.observing = True
        self.setup_if_possible()

    def setup_if_possible(self) -> bool:
        """Attach the label to an overlay window unless that has been done already."""
        if self.attached:
            return True
        try:
            self.attached = bool(self.platform.attach_overlay(self.label))
        except Exception as e:
            logger.error(f"[OverlayWindow] Could not create overlay window: {e}")
            return False
        if self.attached:
            logger.info("[OverlayWindow] Window created successfully")
        else:
            logger.info("[OverlayWindow] No active window scene found yet")
        return self.attached

    def update_text(self, text: str):
        """Set the hidden label's text on the main loop."""
        def apply():
            self.label.text = text
        self.platform.main_loop.call_soon(apply)

    @property
    def held_text(self) -> Optional[str]:
        return self.label.text

    def close(self):
        if self.observing:
            self.platform.remove_activation_observer(self.setup_if_possible)
            self.observing = False
