"""
Text mutation interception for InspectorGadget.
This module wraps the text-set entry point of text control types so that every
assignment is observed before it is forwarded to the real setter.
"""

import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from inspectorgadget.core.records import ChangeRecord, ChangeSource
from inspectorgadget.core.registry import IdentityRegistry

logger = logging.getLogger(__name__)

SetterCallback = Callable[[Any, Optional[str], Optional[str]], None]


@dataclass(frozen=True)
class TextControlTarget:
    """A text control type and the attribute through which its text is set.

    ``setter`` is either a property with a setter or a method taking the new
    text. For methods, ``getter`` names the attribute (or zero-argument
    method) that returns the current text.
    """
    control_type: type
    setter: str = "text"
    getter: Optional[str] = None

    def __str__(self):
        return f"{self.control_type.__name__}.{self.setter}"


class _SetterHook:
    """Process-wide wrapper around one (type, attribute) entry point."""

    def __init__(self, target: TextControlTarget, owner: type, original: Any):
        self.target = target
        self.owner = owner  # Class in the MRO that defined the original
        self.original = original
        self.callbacks: List[SetterCallback] = []
        self.replacement = self._build_replacement()

    def _build_replacement(self):
        original = self.original
        hook = self

        if isinstance(original, property):
            read = original.fget

            def fset(control, value):
                hook.notify(control, read, value)
                original.fset(control, value)

            return property(original.fget, fset, original.fdel, original.__doc__)

        getter = self.target.getter

        def read(control):
            current = getattr(control, getter)
            return current() if callable(current) else current

        @functools.wraps(original)
        def setter(control, value, *args, **kwargs):
            hook.notify(control, read, value)
            return original(control, value, *args, **kwargs)

        return setter

    def notify(self, control, read, value):
        try:
            previous = read(control)
        except Exception as e:
            logger.debug(f"Could not read current text of {type(control).__name__}: {e}")
            return
        for callback in list(self.callbacks):
            try:
                callback(control, previous, value)
            except Exception as e:
                logger.error(f"Error in text interception callback for {self.target}: {e}")

    def restore(self):
        cls = self.target.control_type
        if cls is self.owner:
            setattr(cls, self.target.setter, self.original)
        else:
            delattr(cls, self.target.setter)


_hooks: Dict[Tuple[type, str], _SetterHook] = {}


def _find_original(target: TextControlTarget) -> Tuple[Optional[type], Any]:
    for klass in target.control_type.__mro__:
        if target.setter in klass.__dict__:
            return klass, klass.__dict__[target.setter]
    return None, None


def _hook_for(target: TextControlTarget) -> Optional[_SetterHook]:
    key = (target.control_type, target.setter)
    hook = _hooks.get(key)
    if hook is not None:
        return hook

    owner, original = _find_original(target)
    if original is None:
        return None
    if isinstance(original, property):
        if original.fset is None or original.fget is None:
            return None
    elif not callable(original) or target.getter is None:
        return None

    hook = _SetterHook(target, owner, original)
    setattr(target.control_type, target.setter, hook.replacement)
    _hooks[key] = hook
    return hook


class TextMutationInterceptor:
    """Reports text assignments on the configured control types."""

    def __init__(self, registry: IdentityRegistry, on_change: Callable[[ChangeRecord], None],
                 targets: List[TextControlTarget]):
        self.registry = registry
        self.on_change = on_change
        self.targets = list(targets)
        self._active: List[_SetterHook] = []

    @property
    def installed(self) -> bool:
        return bool(self._active)

    def install(self) -> bool:
        """Hook every target. Returns True if at least one hook is active.

        Safe to call repeatedly; a target already hooked by this interceptor
        is left untouched.
        """
        for target in self.targets:
            hook = _hook_for(target)
            if hook is None:
                logger.warning(f"[InspectorGadget] Text interception failed for {target}.")
                continue
            if hook in self._active:
                continue
            if self._observe not in hook.callbacks:
                hook.callbacks.append(self._observe)
            self._active.append(hook)
            logger.info(f"[InspectorGadget] {target} interception complete.")
        return self.installed

    def uninstall(self):
        """Stop observing; restore originals that nobody else observes."""
        for hook in self._active:
            if self._observe in hook.callbacks:
                hook.callbacks.remove(self._observe)
            if not hook.callbacks:
                hook.restore()
                _hooks.pop((hook.target.control_type, hook.target.setter), None)
                logger.debug(f"Restored original {hook.target}")
        self._active = []

    def _observe(self, control, previous, new):
        if new is None or previous == new:
            return
        identity = self.registry.identity_of(control)
        self.registry.set(identity, new)
        self.on_change(ChangeRecord(
            element_identity=identity,
            previous_label=previous,
            new_label=new,
            source=ChangeSource.INTERCEPTION,
            control_type=type(control).__name__,
        ))
