"""
macOS Accessibility platform for InspectorGadget.

Walks the frontmost application's AX tree out of process. Every AX node is
treated as its own semantic element, labelled by its description or title.
The only in-process text control is the console side-channel label.
"""

import logging
from typing import Optional

import AppKit
from ApplicationServices import AXUIElementCreateApplication
from Foundation import NSTimer
from PyObjCTools import AppHelper

from inspectorgadget.core.interceptor import TextControlTarget
from inspectorgadget.platform.base import MainLoop, Platform, TimerHandle
from inspectorgadget.utils.accessibility import ax_get, clean_label

logger = logging.getLogger(__name__)

LABEL_ATTRIBUTES = ("AXDescription", "AXTitle")
# Static text and text fields carry their visible string here.
VALUE_ATTRIBUTE = "AXValue"


class CocoaMainLoop(MainLoop):
    """Schedules callbacks on the Cocoa main run loop."""

    def call_soon(self, callback):
        AppHelper.callAfter(callback)

    def call_repeating(self, interval, callback):
        def fire(timer):
            try:
                callback()
            except Exception as e:
                logger.error(f"Error in timer callback: {e}")

        timer = NSTimer.scheduledTimerWithTimeInterval_repeats_block_(interval, True, fire)
        return TimerHandle(timer.invalidate)

    def run(self):
        AppHelper.runConsoleEventLoop(installInterrupt=True)

    def stop(self):
        AppHelper.stopEventLoop()


class ConsoleLabel:
    """Side-channel label for hosts without in-process text controls."""

    def __init__(self):
        self._text = None

    def __repr__(self):
        return f"<ConsoleLabel text={self._text!r}>"

    @property
    def text(self) -> Optional[str]:
        return self._text

    @text.setter
    def text(self, value: Optional[str]):
        self._text = value


class AccessibilityPlatform(Platform):
    """Platform adapter for the macOS Accessibility API."""

    def __init__(self, main_loop: Optional[MainLoop] = None, pid: Optional[int] = None):
        """
        Args:
            main_loop: Loop used for timers; defaults to the Cocoa main run loop
            pid: Process to watch; defaults to whichever application is frontmost
        """
        super().__init__(main_loop or CocoaMainLoop())
        self.pid = pid
        self._workspace_observer = None

    def observe_activations(self):
        """Forward application activations as surface-activated signals."""
        if self._workspace_observer is not None:
            return
        center = AppKit.NSWorkspace.sharedWorkspace().notificationCenter()
        self._workspace_observer = center.addObserverForName_object_queue_usingBlock_(
            AppKit.NSWorkspaceDidActivateApplicationNotification,
            None,
            None,
            lambda notification: self._notify_surface_activated(),
        )

    def application_pid(self) -> Optional[int]:
        if self.pid is not None:
            return self.pid
        app = AppKit.NSWorkspace.sharedWorkspace().frontmostApplication()
        if app is None:
            return None
        return app.processIdentifier()

    def frontmost_surfaces(self):
        pid = self.application_pid()
        if pid is None:
            logger.debug("Could not determine frontmost app")
            return []
        ax_app = AXUIElementCreateApplication(pid)
        return list(ax_get(ax_app, "AXWindows") or [])

    def children(self, node):
        return list(ax_get(node, "AXChildren") or [])

    def accessibility_elements(self, node):
        return [node]

    def label_of(self, element):
        for attribute in LABEL_ATTRIBUTES:
            label = clean_label(ax_get(element, attribute))
            if label:
                return label
        value = ax_get(element, VALUE_ATTRIBUTE)
        if isinstance(value, str):
            return clean_label(value) or None
        return None

    def type_name(self, element):
        return clean_label(ax_get(element, "AXRole")) or "AXUIElement"

    def describe(self, element):
        role = self.type_name(element)
        identifier = clean_label(ax_get(element, "AXIdentifier"))
        if identifier:
            return f"<{role} identifier={identifier}>"
        return f"<{role}>"

    def identity_func(self):
        # AX references are fresh proxies per query; they hash and compare via CFHash/CFEqual.
        return lambda element: element

    def text_control_targets(self):
        return [TextControlTarget(ConsoleLabel, "text")]

    def new_overlay_label(self):
        return ConsoleLabel()

    def attach_overlay(self, label):
        return True
