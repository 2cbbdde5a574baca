"""
In-process view toolkit for InspectorGadget.

A small UIKit-shaped hierarchy (application, window scenes, windows, views,
labels and accessibility elements) plus a cooperative run loop standing in
for the host's main thread. It is the reference host for the engine and the
one the test-suite drives.
"""

import heapq
import itertools
import logging
import time
from enum import Enum
from typing import Any, Callable, List, Optional

from inspectorgadget.core.interceptor import TextControlTarget
from inspectorgadget.platform.base import MainLoop, Platform, TimerHandle

logger = logging.getLogger(__name__)


class ActivationState(Enum):
    UNATTACHED = "unattached"
    FOREGROUND_ACTIVE = "foreground_active"
    FOREGROUND_INACTIVE = "foreground_inactive"
    BACKGROUND = "background"


FOREGROUND_STATES = (ActivationState.FOREGROUND_ACTIVE, ActivationState.FOREGROUND_INACTIVE)

WINDOW_LEVEL_NORMAL = 0.0
WINDOW_LEVEL_STATUS_BAR = 1000.0


class UIAccessibilityElement:
    """A synthetic semantic element that is not part of the view tree."""

    def __init__(self, accessibility_label: Optional[str] = None, container=None):
        self.accessibility_label = accessibility_label
        self.container = container

    def __repr__(self):
        return f"<UIAccessibilityElement label={self.accessibility_label!r}>"


class UIView:
    """Base node of the view tree."""

    def __init__(self, accessibility_label: Optional[str] = None):
        self.subviews: List["UIView"] = []
        self.superview: Optional["UIView"] = None
        self.hidden = False
        self.accessibility_label = accessibility_label
        self.accessibility_elements: Optional[List[Any]] = None
        self._appear_callbacks: List[Callable[[], Any]] = []
        self._appeared = False

    def __repr__(self):
        return f"<{type(self).__name__} label={self.accessibility_label!r}>"

    def add_subview(self, view: "UIView"):
        if view.superview is not None:
            view.remove_from_superview()
        self.subviews.append(view)
        view.superview = self
        if self.window is not None and self.window.visible:
            view._did_appear()

    def remove_from_superview(self):
        if self.superview is not None:
            self.superview.subviews.remove(self)
            self.superview = None

    @property
    def window(self) -> Optional["UIWindow"]:
        node = self
        while node is not None and not isinstance(node, UIWindow):
            node = node.superview
        return node

    def on_appear(self, callback: Callable[[], Any]):
        """Run ``callback`` the first time this view becomes visible."""
        if self._appeared:
            callback()
        else:
            self._appear_callbacks.append(callback)

    def _did_appear(self):
        if not self._appeared:
            self._appeared = True
            callbacks, self._appear_callbacks = self._appear_callbacks, []
            for callback in callbacks:
                callback()
        for subview in list(self.subviews):
            subview._did_appear()


class UILabel(UIView):
    """An imperative text control."""

    def __init__(self, text: Optional[str] = None, hidden: bool = False):
        super().__init__()
        self._text = None
        self.text_color = "label"
        self.hidden = hidden
        if text is not None:
            self._text = text

    def __repr__(self):
        return f"<UILabel text={self._text!r}>"

    @property
    def text(self) -> Optional[str]:
        return self._text

    @text.setter
    def text(self, value: Optional[str]):
        self._text = value

    @property
    def accessibility_label(self) -> Optional[str]:
        if self._accessibility_label is not None:
            return self._accessibility_label
        return self._text

    @accessibility_label.setter
    def accessibility_label(self, value: Optional[str]):
        self._accessibility_label = value


class UIWindow(UIView):
    """A top-level surface belonging to a window scene."""

    def __init__(self, scene: Optional["UIWindowScene"] = None, level: float = WINDOW_LEVEL_NORMAL):
        super().__init__()
        self.scene = scene
        self.level = level
        self.hidden = True
        self.user_interaction_enabled = True
        self.background_color = "systemBackground"
        if scene is not None:
            scene.windows.append(self)

    @property
    def visible(self) -> bool:
        return not self.hidden

    def make_key_and_visible(self):
        self.hidden = False
        self._did_appear()


class UIWindowScene:
    """A group of windows sharing one activation state."""

    def __init__(self, application: "UIApplication"):
        self.application = application
        self.windows: List[UIWindow] = []
        self.activation_state = ActivationState.UNATTACHED

    def activate(self):
        self.activation_state = ActivationState.FOREGROUND_ACTIVE
        self.application._scene_did_activate(self)

    def deactivate(self):
        self.activation_state = ActivationState.FOREGROUND_INACTIVE

    def enter_background(self):
        self.activation_state = ActivationState.BACKGROUND


class UIApplication:
    """Owner of the connected scenes."""

    def __init__(self):
        self.connected_scenes: List[UIWindowScene] = []
        self._activation_observers: List[Callable[[UIWindowScene], Any]] = []

    def connect_scene(self) -> UIWindowScene:
        scene = UIWindowScene(self)
        self.connected_scenes.append(scene)
        return scene

    def add_activation_observer(self, callback: Callable[[UIWindowScene], Any]):
        self._activation_observers.append(callback)

    def _scene_did_activate(self, scene: UIWindowScene):
        for callback in list(self._activation_observers):
            callback(scene)


class RunLoop(MainLoop):
    """Cooperative main loop with its own clock.

    Nothing runs until the owner drains it with ``run_pending``, ``advance``
    or ``run_forever``; all callbacks run on the draining thread.
    """

    def __init__(self):
        self._now = 0.0
        self._ready: List[Callable[[], Any]] = []
        self._timers: list = []  # heap of (deadline, seq, entry)
        self._seq = itertools.count()
        self._stopped = False

    def time(self) -> float:
        return self._now

    def call_soon(self, callback: Callable[[], Any]):
        self._ready.append(callback)

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        return self._schedule(delay, callback, repeat=None)

    def call_repeating(self, interval: float, callback: Callable[[], Any]) -> TimerHandle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        return self._schedule(interval, callback, repeat=interval)

    def _schedule(self, delay, callback, repeat):
        entry = {"callback": callback, "repeat": repeat, "cancelled": False}

        def cancel():
            entry["cancelled"] = True

        heapq.heappush(self._timers, (self._now + delay, next(self._seq), entry))
        return TimerHandle(cancel)

    def _run(self, callback):
        try:
            callback()
        except Exception as e:
            logger.error(f"Error in run loop callback: {e}")

    def run_pending(self) -> int:
        """Run callbacks queued with call_soon, including ones they queue."""
        count = 0
        while self._ready:
            ready, self._ready = self._ready, []
            for callback in ready:
                self._run(callback)
                count += 1
        return count

    def advance(self, seconds: float):
        """Move the clock forward, firing every timer that falls due."""
        target = self._now + seconds
        self.run_pending()
        while self._timers and self._timers[0][0] <= target:
            deadline, _, entry = heapq.heappop(self._timers)
            if entry["cancelled"]:
                continue
            self._now = deadline
            self._run(entry["callback"])
            if entry["repeat"] is not None and not entry["cancelled"]:
                heapq.heappush(self._timers, (deadline + entry["repeat"], next(self._seq), entry))
            self.run_pending()
        self._now = target

    def run_forever(self, tick: float = 0.05):
        """Drive the loop in real time until stop() is called."""
        self._stopped = False
        last = time.monotonic()
        while not self._stopped:
            time.sleep(tick)
            current = time.monotonic()
            self.advance(current - last)
            last = current

    def stop(self):
        self._stopped = True


class MemoryPlatform(Platform):
    """Platform adapter for the in-process toolkit."""

    def __init__(self, application: Optional[UIApplication] = None, main_loop: Optional[RunLoop] = None):
        super().__init__(main_loop or RunLoop())
        self.application = application or UIApplication()
        self.application.add_activation_observer(lambda scene: self._notify_surface_activated())

    def frontmost_surfaces(self):
        surfaces = []
        for scene in self.application.connected_scenes:
            if scene.activation_state in FOREGROUND_STATES:
                surfaces.extend(scene.windows)
        return surfaces

    def children(self, node):
        return list(getattr(node, "subviews", None) or [])

    def accessibility_elements(self, node):
        return list(getattr(node, "accessibility_elements", None) or [])

    def label_of(self, element):
        return getattr(element, "accessibility_label", None)

    def text_control_targets(self):
        return [TextControlTarget(UILabel, "text")]

    def new_overlay_label(self):
        return UILabel(hidden=True)

    def attach_overlay(self, label):
        scene = next((s for s in self.application.connected_scenes
                      if s.activation_state == ActivationState.FOREGROUND_ACTIVE), None)
        if scene is None:
            return False
        window = UIWindow(scene, level=WINDOW_LEVEL_STATUS_BAR + 1)
        window.background_color = "clear"
        window.user_interaction_enabled = False
        label.hidden = True
        label.text_color = "clear"
        window.add_subview(label)
        window.hidden = False
        return True
