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
"""Decoratable classes — notice method definitions and apply decorations.

:class:`DecoratableMeta` gives every class body a :class:`DecorationNamespace`
that reports each method definition to the class's
:class:`~decorate.registry.DecorationRegistry`, and keeps reporting
assignments made on the finished class. ``around_decorator`` is available in
the class body and as a class-level method afterwards::

    class Repo(Decoratable):
        around_decorator("logged", call="audit")
        ...

    Repo.around_decorator("timed", call="measure")
    Repo.timed()
    Repo.flush = flush
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

from decorate.around.binding import WrapperBinding
from decorate.around.decorator import declare_around, ensure_wrapper_defined, make_declarator
from decorate.operations import StagedClassTable
from decorate.registry import DecorationRegistry, default_registry

logger = logging.getLogger(__name__)

_BINDINGS_ATTR = "__around_bindings__"
_REGISTRY_ATTR = "__decoration_registry__"


def is_operation(value: Any) -> bool:
    """True for values that count as defining an operation."""
    return inspect.isfunction(value) or isinstance(value, (staticmethod, classmethod))


def find_binding(cls: type, decorator_name: str) -> WrapperBinding | None:
    """Look up *decorator_name* along the MRO of *cls*."""
    for klass in cls.__mro__:
        binding = klass.__dict__.get(_BINDINGS_ATTR, {}).get(decorator_name)
        if binding is not None:
            return binding
    return None


def _inherited_bindings(bases: tuple[type, ...]) -> dict[str, WrapperBinding]:
    bindings: dict[str, WrapperBinding] = {}
    for base in reversed(bases):
        for klass in reversed(base.__mro__):
            bindings.update(klass.__dict__.get(_BINDINGS_ATTR, {}))
    return bindings


def _inherited_registry(bases: tuple[type, ...]) -> DecorationRegistry | None:
    for base in bases:
        registry = getattr(base, _REGISTRY_ATTR, None)
        if isinstance(registry, DecorationRegistry):
            return registry
    return None


class DecorationNamespace(dict):
    """Namespace of a class body that is still executing.

    Storing a function reports the definition to the registry, which fires
    any decoration pending for this namespace. Declarators and
    ``around_decorator`` are seeded as helpers and stripped again before the
    class is created.
    """

    def __init__(self, name: str, bases: tuple[type, ...], registry: DecorationRegistry) -> None:
        super().__init__()
        self._owner_name = name
        self.bases = bases
        self.registry = registry
        self.bindings: dict[str, WrapperBinding] = {}
        self.installed: list[WrapperBinding] = []
        self._helpers: dict[str, Any] = {}
        self._add_helper("around_decorator", self.around_decorator)
        for binding in _inherited_bindings(bases).values():
            self._add_helper(binding.decorator_name, make_declarator(self, binding, registry))

    def __setitem__(self, key: str, value: Any) -> None:
        super().__setitem__(key, value)
        if is_operation(value):
            self.registry.notify_defined(self, key)

    def around_decorator(self, decorator_name: str, **options: Any) -> WrapperBinding:
        """Declare *decorator_name* as an around declarator in this class body."""
        binding = declare_around(self, decorator_name, options)
        self.bindings[decorator_name] = binding
        self._add_helper(decorator_name, make_declarator(self, binding, self.registry))
        return binding

    def record_installation(self, binding: WrapperBinding) -> None:
        self.installed.append(binding)

    def class_body(self) -> dict[str, Any]:
        """Namespace contents without the seeded helpers."""
        return {k: v for k, v in self.items() if k not in self._helpers or self._helpers[k] is not v}

    def _add_helper(self, name: str, helper: Any) -> None:
        self._helpers[name] = helper
        super().__setitem__(name, helper)

    # OperationTable

    @property
    def owner_name(self) -> str:
        return self._owner_name

    def has_operation(self, name: str) -> bool:
        try:
            self.lookup_operation(name)
        except KeyError:
            return False
        return True

    def lookup_operation(self, name: str) -> Any:
        if name in self and not self._is_helper(name):
            return self[name]
        for base in self.bases:
            try:
                return inspect.getattr_static(base, name)
            except AttributeError:
                continue
        raise KeyError(name)

    def put_operation(self, name: str, implementation: Any) -> None:
        super().__setitem__(name, implementation)
        self._helpers.pop(name, None)

    def _is_helper(self, name: str) -> bool:
        return name in self._helpers and self._helpers[name] is dict.__getitem__(self, name)


class DecoratableMeta(type):
    """Metaclass reporting method definitions to a decoration registry.

    Pass ``registry=`` as a class keyword to use a registry other than
    :data:`~decorate.registry.default_registry`; subclasses inherit it.
    """

    @classmethod
    def __prepare__(  # type: ignore[override]
        mcs,
        name: str,
        bases: tuple[type, ...],
        registry: DecorationRegistry | None = None,
        **kwargs: Any,
    ) -> DecorationNamespace:
        if registry is None:
            registry = _inherited_registry(bases) or default_registry
        return DecorationNamespace(name, bases, registry)

    def __new__(
        mcs,
        name: str,
        bases: tuple[type, ...],
        namespace: DecorationNamespace,
        registry: DecorationRegistry | None = None,
        **kwargs: Any,
    ) -> DecoratableMeta:
        try:
            cls = super().__new__(mcs, name, bases, namespace.class_body(), **kwargs)
            type.__setattr__(cls, _BINDINGS_ATTR, dict(namespace.bindings))
            type.__setattr__(cls, _REGISTRY_ATTR, namespace.registry)

            for binding in namespace.installed:
                ensure_wrapper_defined(cls, binding)
        except BaseException:
            namespace.registry.discard(namespace)
            raise

        carried = namespace.registry.transfer_pending(namespace, cls)
        if carried:
            logger.debug("Carried %d pending decoration(s) over to %s", carried, cls.__qualname__)
        return cls

    def __init__(
        cls,
        name: str,
        bases: tuple[type, ...],
        namespace: DecorationNamespace,
        registry: DecorationRegistry | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, bases, namespace, **kwargs)

    def __setattr__(cls, name: str, value: Any) -> None:
        registry: DecorationRegistry = getattr(cls, _REGISTRY_ATTR)
        with registry.lock:
            if not (is_operation(value) and registry.pending_count(cls)):
                super().__setattr__(name, value)
                return
            # Install against the staged value, then publish the outermost trampoline.
            staged = StagedClassTable(cls, name, value)
            registry.notify_defined(cls, name, target=staged)
            staged.publish()

    def __getattr__(cls, name: str) -> Any:
        # Only reached when normal lookup fails: resolve declarators.
        if not name.startswith("__"):
            binding = find_binding(cls, name)
            if binding is not None:
                return make_declarator(cls, binding, getattr(cls, _REGISTRY_ATTR))
        raise AttributeError(f"type object {cls.__qualname__!r} has no attribute {name!r}")

    def around_decorator(cls, decorator_name: str, **options: Any) -> WrapperBinding:
        """Declare *decorator_name* as an around declarator on a finished class."""
        binding = declare_around(cls, decorator_name, options)
        cls.__dict__[_BINDINGS_ATTR][decorator_name] = binding
        return binding


class Decoratable(metaclass=DecoratableMeta):
    """Base class for classes that declare around wrapping."""

    __slots__ = ()
