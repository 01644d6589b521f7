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
"""Operation tables — uniform access to the methods of a decoration owner.

An owner is either a class body still being executed (its
:class:`~decorate.meta.DecorationNamespace`) or a finished class. Both are
read and written through :class:`OperationTable` so aliasing and trampoline
installation work the same way during and after class creation. An
assignment on a finished class is staged in a :class:`StagedClassTable` so
the new value only becomes visible once its decorations are installed.
"""

from __future__ import annotations

import inspect
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class OperationTable(Protocol):
    """Name -> implementation mapping of one owner."""

    @property
    def owner_name(self) -> str: ...

    def has_operation(self, name: str) -> bool:
        """True when *name* is in use on the owner, inherited names included."""
        ...

    def lookup_operation(self, name: str) -> Any:
        """Return the raw implementation stored under *name*.

        Raises:
            KeyError: If *name* is not defined on the owner.
        """
        ...

    def put_operation(self, name: str, implementation: Any) -> None:
        """Store *implementation* under *name* without notifying any registry."""
        ...


class ClassOperationTable:
    """:class:`OperationTable` over a finished class."""

    def __init__(self, cls: type) -> None:
        self._cls = cls

    @property
    def cls(self) -> type:
        return self._cls

    @property
    def owner_name(self) -> str:
        return self._cls.__qualname__

    def has_operation(self, name: str) -> bool:
        try:
            inspect.getattr_static(self._cls, name)
        except AttributeError:
            return False
        return True

    def lookup_operation(self, name: str) -> Any:
        try:
            return inspect.getattr_static(self._cls, name)
        except AttributeError:
            raise KeyError(name) from None

    def put_operation(self, name: str, implementation: Any) -> None:
        # type.__setattr__ skips DecoratableMeta.__setattr__ and its hooks
        type.__setattr__(self._cls, name, implementation)


class StagedClassTable(ClassOperationTable):
    """Finished class with one assignment held back until it is published.

    Lookups and stores of the staged *name* see the pending value instead of
    the class; every other name reads and writes the class itself. Nothing
    is visible under *name* until :meth:`publish` runs.
    """

    def __init__(self, cls: type, name: str, value: Any) -> None:
        super().__init__(cls)
        self.name = name
        self.value = value

    def has_operation(self, name: str) -> bool:
        return name == self.name or super().has_operation(name)

    def lookup_operation(self, name: str) -> Any:
        if name == self.name:
            return self.value
        return super().lookup_operation(name)

    def put_operation(self, name: str, implementation: Any) -> None:
        if name == self.name:
            self.value = implementation
        else:
            super().put_operation(name, implementation)

    def publish(self) -> None:
        """Store the staged value on the class."""
        type.__setattr__(self._cls, self.name, self.value)


def operation_table(owner: Any) -> OperationTable:
    """Return the :class:`OperationTable` for a class, class namespace or staged table."""
    if isinstance(owner, type):
        return ClassOperationTable(owner)
    if isinstance(owner, OperationTable):
        return owner
    raise TypeError(f"{owner!r} is neither a class nor a decoration namespace")
