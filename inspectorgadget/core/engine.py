"""
Main engine class for InspectorGadget.
This module provides the InspectorGadget class that owns the registry and wires
the interceptor, poller, overlay and reporter together.
"""

import logging
from typing import Any, Callable, Optional

from inspectorgadget.core.hierarchy import dump_hierarchy
from inspectorgadget.core.interceptor import TextMutationInterceptor
from inspectorgadget.core.overlay import OverlaySurface
from inspectorgadget.core.poller import AccessibilityPoller
from inspectorgadget.core.records import ChangeRecord
from inspectorgadget.core.registry import IdentityRegistry
from inspectorgadget.core.reporting import ChangeReporter
from inspectorgadget.core.settings import EngineSettings

logger = logging.getLogger(__name__)


class InspectorGadget:
    """Watches a host's UI for text changes and reports them."""

    def __init__(self, platform, settings: Optional[EngineSettings] = None,
                 reporter: Optional[ChangeReporter] = None):
        """Initialize the engine.

        Args:
            platform: Platform adapter for the host UI
            settings: EngineSettings; defaults poll every 500 ms with interception on
            reporter: Sink for change records; built from settings when omitted
        """
        self.platform = platform
        self.settings = settings or EngineSettings()

        logging.getLogger("inspectorgadget").setLevel(self.settings.log_level)

        self.registry = IdentityRegistry(key_func=platform.identity_func())
        self.reporter = reporter or ChangeReporter(
            output_file=self.settings.output_file,
            prefix=self.settings.prefix,
        )
        self.interceptor = TextMutationInterceptor(
            self.registry, self.reporter.report, platform.text_control_targets()
        )
        self.poller = AccessibilityPoller(platform, self.registry, self.reporter.report)
        self.overlay: Optional[OverlaySurface] = None
        self.running = False

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    def start(self):
        """Install interception, create the side channel and start polling.

        Calling start() on a running engine does nothing.
        """
        if self.running:
            return
        self.running = True
        logger.info(f"{self.settings.prefix} Initialized.")

        if self.settings.intercept:
            try:
                if not self.interceptor.install():
                    logger.warning(f"{self.settings.prefix} Continuing without text interception.")
            except Exception as e:
                logger.error(f"{self.settings.prefix} Text interception failed: {e}")

        self._ensure_overlay()

        if self.settings.poll:
            try:
                self.poller.start(self.settings.poll_interval_ms)
            except Exception as e:
                logger.error(f"{self.settings.prefix} Could not start accessibility polling: {e}")

    def _ensure_overlay(self) -> Optional[OverlaySurface]:
        """Create the side channel once per engine, reopening it after stop()."""
        try:
            if self.overlay is None:
                self.overlay = OverlaySurface(self.platform)
            else:
                self.overlay.open()
        except Exception as e:
            logger.error(f"[OverlayWindow] Could not create side channel: {e}")
        return self.overlay

    def stop(self):
        """Cancel polling and restore the original text setters."""
        if not self.running:
            return
        self.running = False
        self.poller.stop()
        self.interceptor.uninstall()
        if self.overlay is not None:
            self.overlay.close()
        logger.info(f"{self.settings.prefix} Stopped.")

    def log_text(self, text: str):
        """Push text from a layer the interceptor cannot see through the side channel.

        The side channel is created on first use, so text logged before start()
        is held until a surface becomes active.
        """
        overlay = self.overlay if self.overlay is not None else self._ensure_overlay()
        if overlay is None:
            return
        overlay.update_text(text)

    def add_callback(self, callback: Callable[[ChangeRecord], None]):
        """Add a callback to be called for every change record."""
        self.reporter.add_callback(callback)

    def element_removed(self, element: Any):
        """Forget an element the host has removed from its tree."""
        self.registry.forget(element)

    def dump_hierarchy(self) -> str:
        return dump_hierarchy(self.platform)
