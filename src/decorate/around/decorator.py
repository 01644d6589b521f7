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
"""around_decorator — declare, register and install around wrapping.

Example::

    class Ad(Decoratable):
        around_decorator("logged", call="audit")

        def audit(self, call):
            call.transfer()
            return call.result + 1

        logged()
        def save(self, x):
            return x * 2

    Ad().save(5)  # 11
"""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

from decorate.alias import create_alias
from decorate.around.binding import WrapperBinding
from decorate.around.options import validate_options
from decorate.around.trampoline import build_trampoline
from decorate.kernel.exceptions import ConfigurationError
from decorate.operations import ClassOperationTable, operation_table
from decorate.registry import DecorationRegistry

logger = logging.getLogger(__name__)


def declare_around(owner: Any, decorator_name: str, options: Mapping[str, Any]) -> WrapperBinding:
    """Validate an around declaration on *owner* and return its binding.

    Nothing on *owner* is touched; storing the binding and exposing the
    declarator is left to the caller.

    Raises:
        ConfigurationError: On a missing or malformed ``call`` option, an
            unknown option, or a *decorator_name* that is not an identifier.
    """
    parsed = validate_options(options)
    if not isinstance(decorator_name, str) or not decorator_name.isidentifier():
        raise ConfigurationError(
            f"Decorator name {decorator_name!r} is not an identifier",
            code="AROUND_INVALID_NAME",
            context={"decorator": decorator_name},
        )

    table = operation_table(owner)
    binding = WrapperBinding(decorator_name=decorator_name, wrapper_name=parsed.call, owner=table.owner_name)
    logger.debug("Declared around decorator %s.%s -> %s", binding.owner, decorator_name, binding.wrapper_name)
    return binding


def make_declarator(owner: Any, binding: WrapperBinding, registry: DecorationRegistry) -> Callable[..., Any]:
    """Build the declarator function exposed on *owner* for *binding*.

    Calling it registers a one-shot decoration that around-wraps the next
    method *owner* defines. It may also be used as ``@decorator`` directly
    above a ``def``: the function is returned unchanged and gets wrapped as
    soon as it is stored on the class.
    """

    def declarator(func: Any = None) -> Any:
        registry.register_pending(owner, functools.partial(install_around, binding=binding))
        return func

    declarator.__name__ = binding.decorator_name
    declarator.__qualname__ = f"{binding.owner}.{binding.decorator_name}"
    declarator.__doc__ = f"Around-wrap the next method with '{binding.wrapper_name}'."
    declarator.__around_declarator__ = binding  # type: ignore[attr-defined]
    return declarator


def install_around(owner: Any, operation_name: str, binding: WrapperBinding) -> str:
    """Alias the current *operation_name* and install a trampoline in its place.

    Registry callback: runs once *owner* has defined *operation_name*. *owner*
    is a class namespace, a finished class or a staged assignment on one.
    Returns the alias the original implementation now lives under.

    Raises:
        ConfigurationError: If the operation is a static or class method, or
            if *owner* is a finished class without the wrapper method.
        AliasError: If *operation_name* is not defined on *owner*.
    """
    table = operation_table(owner)
    try:
        original = table.lookup_operation(operation_name)
    except KeyError:
        original = None
    if isinstance(original, (staticmethod, classmethod)):
        raise ConfigurationError(
            f"Cannot around-wrap '{table.owner_name}.{operation_name}': "
            f"{type(original).__name__} has no receiver",
            code="AROUND_UNSUPPORTED_OPERATION",
            context={"owner": table.owner_name, "operation": operation_name},
        )
    if isinstance(table, ClassOperationTable):
        ensure_wrapper_defined(table.cls, binding)

    original_name = create_alias(owner, operation_name, binding.decorator_name)
    trampoline = build_trampoline(binding, operation_name, original_name, original)
    table.put_operation(operation_name, trampoline)

    if not isinstance(table, ClassOperationTable):
        owner.record_installation(binding)
    logger.debug(
        "Installed around %s.%s -> %s (original: %s, coroutine: %s)",
        table.owner_name,
        operation_name,
        binding.wrapper_name,
        original_name,
        inspect.iscoroutinefunction(original),
    )
    return original_name


def ensure_wrapper_defined(cls: type, binding: WrapperBinding) -> None:
    """Raise unless *cls* defines the wrapper method named by *binding*."""
    if not any(binding.wrapper_name in klass.__dict__ for klass in cls.__mro__):
        raise ConfigurationError(
            f"Wrapper operation '{binding.wrapper_name}' for '{binding.decorator_name}' "
            f"is not defined on '{cls.__qualname__}'",
            code="AROUND_WRAPPER_MISSING",
            context={"owner": cls.__qualname__, "wrapper": binding.wrapper_name},
        )
