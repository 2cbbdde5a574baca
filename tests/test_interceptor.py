#!/usr/bin/env python3
"""
Tests for text mutation interception.
"""

import logging
import os
import sys

import pytest

# Add the repository root to the Python path to import inspectorgadget modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from inspectorgadget.core.interceptor import TextControlTarget, TextMutationInterceptor
from inspectorgadget.core.records import ChangeSource
from inspectorgadget.core.registry import IdentityRegistry
from inspectorgadget.platform.memory import UILabel


class MethodControl:
    """Control whose text is set through a method rather than a property."""

    def __init__(self):
        self._value = None

    def string_value(self):
        return self._value

    def set_string_value(self, value):
        self._value = value


class ReadOnlyControl:
    @property
    def text(self):
        return "fixed"


class Recorder:
    def __init__(self):
        self.records = []

    def __call__(self, record):
        self.records.append(record)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def interceptor(recorder):
    interceptor = TextMutationInterceptor(IdentityRegistry(), recorder, [TextControlTarget(UILabel, "text")])
    interceptor.install()
    yield interceptor
    interceptor.uninstall()


def test_first_set_records_null_origin(interceptor, recorder):
    label = UILabel()
    label.text = "Hello"

    assert len(recorder.records) == 1
    record = recorder.records[0]
    assert record.previous_label is None
    assert record.new_label == "Hello"
    assert record.source == ChangeSource.INTERCEPTION
    assert record.control_type == "UILabel"


def test_setting_equal_value_is_silent(interceptor, recorder):
    label = UILabel()
    label.text = "Hello"
    recorder.records.clear()

    label.text = "Hello"

    assert recorder.records == []


def test_change_emits_exactly_one_record(interceptor, recorder):
    label = UILabel()
    label.text = "Hello"
    recorder.records.clear()

    label.text = "World"

    assert len(recorder.records) == 1
    assert (recorder.records[0].previous_label, recorder.records[0].new_label) == ("Hello", "World")


def test_mutation_still_takes_effect(interceptor):
    label = UILabel()
    label.text = "Visible"
    assert label.text == "Visible"


def test_clearing_text_is_forwarded_without_record(interceptor, recorder):
    label = UILabel()
    label.text = "Hello"
    recorder.records.clear()

    label.text = None

    assert label.text is None
    assert recorder.records == []


def test_interception_updates_registry(interceptor):
    label = UILabel()
    label.text = "Saved"
    key = interceptor.registry.identity_of(label)
    assert interceptor.registry.get(key) == "Saved"


def test_install_is_idempotent(interceptor, recorder):
    assert interceptor.install()
    assert interceptor.install()

    label = UILabel()
    label.text = "Once"

    assert len(recorder.records) == 1


def test_uninstall_restores_original_property(recorder):
    original = UILabel.__dict__["text"]
    interceptor = TextMutationInterceptor(IdentityRegistry(), recorder, [TextControlTarget(UILabel, "text")])
    interceptor.install()
    assert UILabel.__dict__["text"] is not original

    interceptor.uninstall()

    assert UILabel.__dict__["text"] is original
    label = UILabel()
    label.text = "Unobserved"
    assert recorder.records == []
    assert label.text == "Unobserved"


def test_two_interceptors_share_one_wrapper(recorder):
    other = Recorder()
    first = TextMutationInterceptor(IdentityRegistry(), recorder, [TextControlTarget(UILabel, "text")])
    second = TextMutationInterceptor(IdentityRegistry(), other, [TextControlTarget(UILabel, "text")])
    first.install()
    second.install()
    try:
        label = UILabel()
        label.text = "Both"
        assert len(recorder.records) == 1
        assert len(other.records) == 1

        first.uninstall()
        label.text = "Second only"
        assert len(recorder.records) == 1
        assert len(other.records) == 2
    finally:
        first.uninstall()
        second.uninstall()


def test_method_setter_is_intercepted(recorder):
    target = TextControlTarget(MethodControl, "set_string_value", getter="string_value")
    original = MethodControl.__dict__["set_string_value"]
    interceptor = TextMutationInterceptor(IdentityRegistry(), recorder, [target])
    assert interceptor.install()
    try:
        control = MethodControl()
        control.set_string_value("One")
        control.set_string_value("Two")

        assert control.string_value() == "Two"
        assert [(r.previous_label, r.new_label) for r in recorder.records] == [(None, "One"), ("One", "Two")]
        assert recorder.records[0].control_type == "MethodControl"
    finally:
        interceptor.uninstall()
    assert MethodControl.__dict__["set_string_value"] is original


def test_missing_entry_point_is_not_fatal(recorder, caplog):
    caplog.set_level(logging.INFO)
    targets = [TextControlTarget(MethodControl, "set_text", getter="text"),
               TextControlTarget(ReadOnlyControl, "text")]
    interceptor = TextMutationInterceptor(IdentityRegistry(), recorder, targets)

    assert interceptor.install() is False
    assert not interceptor.installed
    assert "Text interception failed for MethodControl.set_text" in caplog.text
    assert "Text interception failed for ReadOnlyControl.text" in caplog.text


def test_failing_observer_does_not_block_mutation(caplog):
    def explode(record):
        raise RuntimeError("sink down")

    interceptor = TextMutationInterceptor(IdentityRegistry(), explode, [TextControlTarget(UILabel, "text")])
    interceptor.install()
    try:
        label = UILabel()
        label.text = "Still set"
        assert label.text == "Still set"
        assert "sink down" in caplog.text
    finally:
        interceptor.uninstall()
