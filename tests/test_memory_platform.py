#!/usr/bin/env python3
"""
Tests for the in-process toolkit and its run loop.
"""

import os
import sys

import pytest

# Add the repository root to the Python path to import inspectorgadget modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from inspectorgadget.platform.memory import (
    ActivationState,
    MemoryPlatform,
    RunLoop,
    UILabel,
    UIView,
    UIWindow,
)


@pytest.fixture
def loop():
    return RunLoop()


def test_call_soon_runs_in_order(loop):
    calls = []
    loop.call_soon(lambda: calls.append(1))
    loop.call_soon(lambda: calls.append(2))
    assert calls == []

    assert loop.run_pending() == 2
    assert calls == [1, 2]


def test_callbacks_queued_while_draining_also_run(loop):
    calls = []
    loop.call_soon(lambda: loop.call_soon(lambda: calls.append("nested")))
    loop.run_pending()
    assert calls == ["nested"]


def test_repeating_timer_fires_each_interval(loop):
    fired = []
    loop.call_repeating(0.5, lambda: fired.append(loop.time()))

    loop.advance(1.6)

    assert fired == [0.5, 1.0, 1.5]
    assert loop.time() == 1.6


def test_cancelled_timer_stops_firing(loop):
    fired = []
    handle = loop.call_repeating(0.5, lambda: fired.append(1))
    loop.advance(0.5)
    handle.cancel()
    loop.advance(2.0)
    assert fired == [1]
    assert handle.cancelled


def test_call_later_fires_once(loop):
    fired = []
    loop.call_later(1.0, lambda: fired.append(1))
    loop.advance(3.0)
    assert fired == [1]


def test_failing_callback_does_not_break_loop(loop, caplog):
    fired = []

    def broken():
        raise RuntimeError("bad callback")

    loop.call_soon(broken)
    loop.call_soon(lambda: fired.append(1))
    loop.run_pending()

    assert fired == [1]
    assert "bad callback" in caplog.text


def test_non_positive_interval_is_rejected(loop):
    with pytest.raises(ValueError):
        loop.call_repeating(0, lambda: None)


def test_label_accessibility_label_defaults_to_text():
    label = UILabel("Title")
    assert label.accessibility_label == "Title"
    label.accessibility_label = "Custom"
    assert label.accessibility_label == "Custom"


def test_view_window_lookup():
    window = UIWindow()
    outer = UIView()
    inner = UIView()
    window.add_subview(outer)
    outer.add_subview(inner)
    assert inner.window is window

    inner.remove_from_superview()
    assert inner.window is None


def test_frontmost_surfaces_skip_background_scenes():
    platform = MemoryPlatform()
    active = platform.application.connect_scene()
    active.activate()
    inactive = platform.application.connect_scene()
    inactive.activate()
    inactive.deactivate()
    background = platform.application.connect_scene()
    background.enter_background()
    windows = [UIWindow(scene) for scene in (active, inactive, background)]

    assert platform.frontmost_surfaces() == windows[:2]
    assert inactive.activation_state == ActivationState.FOREGROUND_INACTIVE


def test_attach_overlay_requires_active_scene():
    platform = MemoryPlatform()
    scene = platform.application.connect_scene()
    label = platform.new_overlay_label()

    assert platform.attach_overlay(label) is False

    scene.activate()
    assert platform.attach_overlay(label) is True
    assert label.window.visible
