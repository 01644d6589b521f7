# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""DecorationRegistry — one-shot "decorate the next operation" hooks.

A pending decoration is recorded against an *owner*: either the namespace of
a class whose body is still executing, or a finished class. The next time
that owner defines an operation, every decoration pending for it fires once
with ``(owner, operation_name)`` and is then discarded.

Owners are held by weak reference. A class body that raises before the
class is created takes its pending decorations with it.

Usage::

    registry.register_pending(owner, lambda owner, name: ...)
    registry.notify_defined(owner, "save")   # fires and forgets
"""

from __future__ import annotations

import logging
import threading
import weakref
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

PendingDecoration = Callable[[Any, str], None]


@dataclass(eq=False)
class _PendingEntry:
    """Decorations waiting on one owner.

    ``expiry`` drops the entry when the owner is collected. Owners that do
    not support weak references are pinned in ``anchor`` instead, so their
    ``id()`` cannot be reused while the entry exists.
    """

    expiry: weakref.finalize | None = None
    anchor: Any = None
    callbacks: list[PendingDecoration] = field(default_factory=list)

    def release(self) -> None:
        if self.expiry is not None:
            self.expiry.detach()


class DecorationRegistry:
    """Explicit registry of pending decorations.

    Created empty; entries are removed the moment they fire, or once their
    owner is garbage collected. All bookkeeping and every callback run under
    one re-entrant lock, so installing a decoration on a live class is
    serialized against other registrations.
    """

    def __init__(self) -> None:
        self._pending: dict[int, _PendingEntry] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        """Number of owners with decorations still pending."""
        with self._lock:
            return len(self._pending)

    @property
    def lock(self) -> threading.RLock:
        """Re-entrant lock serializing registration, firing and installation."""
        return self._lock

    def register_pending(self, owner: Any, callback: PendingDecoration) -> None:
        """Fire *callback* the next time *owner* defines an operation."""
        with self._lock:
            entry = self._pending.get(id(owner))
            if entry is None:
                entry = self._pending[id(owner)] = self._new_entry(owner)
            entry.callbacks.append(callback)
            logger.debug("Decoration pending on %s (%d waiting)", _describe(owner), len(entry.callbacks))

    def notify_defined(self, owner: Any, name: str, target: Any = None) -> int:
        """Fire and discard every decoration pending for *owner*.

        Callbacks run last-registered-first, so the decoration declared
        closest to the definition is applied innermost. They receive
        *target* in place of *owner* when one is given. Returns the number
        of callbacks fired.
        """
        with self._lock:
            entry = self._take(owner)
            if entry is None:
                return 0
            logger.debug("Firing %d decoration(s) for %s.%s", len(entry.callbacks), _describe(owner), name)
            receiver = owner if target is None else target
            for callback in reversed(entry.callbacks):
                callback(receiver, name)
            return len(entry.callbacks)

    def transfer_pending(self, source: Any, target: Any) -> int:
        """Move decorations pending on *source* over to *target*."""
        with self._lock:
            entry = self._take(source)
            if entry is None:
                return 0
            for callback in entry.callbacks:
                self.register_pending(target, callback)
            return len(entry.callbacks)

    def pending_count(self, owner: Any) -> int:
        """Return how many decorations are waiting on *owner*."""
        with self._lock:
            entry = self._pending.get(id(owner))
            return len(entry.callbacks) if entry is not None else 0

    def discard(self, owner: Any) -> None:
        """Drop decorations pending on *owner* without firing them."""
        with self._lock:
            entry = self._take(owner)
            if entry is not None:
                logger.debug("Discarded %d pending decoration(s) on %s", len(entry.callbacks), _describe(owner))

    def clear(self) -> None:
        """Drop every pending decoration."""
        with self._lock:
            for entry in self._pending.values():
                entry.release()
            self._pending.clear()

    def _new_entry(self, owner: Any) -> _PendingEntry:
        entry = _PendingEntry()
        try:
            entry.expiry = weakref.finalize(owner, self._expire, id(owner), entry)
            entry.expiry.atexit = False
        except TypeError:
            entry.anchor = owner
        return entry

    def _take(self, owner: Any) -> _PendingEntry | None:
        entry = self._pending.pop(id(owner), None)
        if entry is not None:
            entry.release()
        return entry

    def _expire(self, key: int, entry: _PendingEntry) -> None:
        with self._lock:
            if self._pending.get(key) is entry:
                del self._pending[key]
                logger.debug("Dropped %d pending decoration(s) on a collected owner", len(entry.callbacks))


def _describe(owner: Any) -> str:
    owner_name = getattr(owner, "owner_name", None)
    if isinstance(owner_name, str):
        return owner_name
    return getattr(owner, "__qualname__", type(owner).__name__)


default_registry = DecorationRegistry()
