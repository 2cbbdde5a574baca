"""
Identity registry for InspectorGadget.
This module maps UI objects to stable identity keys and remembers the last label seen for each.
"""

import itertools
import logging
import weakref
from functools import partial
from typing import Any, Callable, Dict, Hashable, Optional

logger = logging.getLogger(__name__)


class IdentityRegistry:
    """Weak, non-owning index from element identity to last known label.

    By default identities are integer handles handed out on first sight of an
    object. The registry keeps a weak reference per object only to learn when
    the object dies, so that a recycled ``id()`` never inherits a dead
    object's handle. Label entries themselves are never evicted on collection;
    hosts that know when an element is removed can call ``forget``.

    Hosts whose element proxies are recreated on every query (AX references,
    for example) pass ``key_func`` to derive identity from the underlying UI
    object instead.
    """

    def __init__(self, key_func: Optional[Callable[[Any], Hashable]] = None):
        self._key_func = key_func
        self._handles: Dict[int, int] = {}  # id(obj) -> handle
        self._refs: Dict[int, weakref.ref] = {}
        self._labels: Dict[Hashable, str] = {}
        self._counter = itertools.count(1)

    def identity_of(self, element: Any) -> Hashable:
        """Return the identity key for ``element``, assigning one if needed."""
        if self._key_func is not None:
            return self._key_func(element)

        oid = id(element)
        handle = self._handles.get(oid)
        if handle is not None:
            return handle

        handle = next(self._counter)
        try:
            self._refs[oid] = weakref.ref(element, partial(self._released, oid))
        except TypeError:
            # Not weak-referenceable; the handle lives as long as the registry.
            logger.debug(f"{type(element).__name__} does not support weak references")
        self._handles[oid] = handle
        return handle

    def _released(self, oid: int, ref: weakref.ref):
        if self._refs.get(oid) is ref:
            del self._refs[oid]
            self._handles.pop(oid, None)

    def get(self, key: Hashable) -> Optional[str]:
        return self._labels.get(key)

    def set(self, key: Hashable, label: str):
        self._labels[key] = label

    def forget(self, element: Any):
        """Drop everything known about ``element``."""
        key = self.identity_of(element)
        self._labels.pop(key, None)
        if self._key_func is None:
            oid = id(element)
            self._handles.pop(oid, None)
            self._refs.pop(oid, None)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._labels

    def __len__(self) -> int:
        return len(self._labels)
