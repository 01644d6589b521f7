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
"""Alias naming — keep an implementation reachable under a fresh name."""

from __future__ import annotations

import logging
from typing import Any

from decorate.kernel.exceptions import AliasError
from decorate.operations import operation_table

logger = logging.getLogger(__name__)


def alias_name(name: str, scope: str, attempt: int = 0) -> str:
    """Build the candidate alias for *name* within *scope*.

    ``save`` wrapped by ``logged`` becomes ``save_without_logged``, then
    ``save_without_logged_1``, ``save_without_logged_2``... on collisions.
    """
    base = f"{name}_without_{scope}"
    return base if attempt == 0 else f"{base}_{attempt}"


def create_alias(owner: Any, name: str, scope: str) -> str:
    """Copy the implementation of *name* on *owner* to an unused name.

    The implementation itself is stored unchanged, so calling it through the
    alias behaves exactly like calling the original did. Every call picks a
    name not yet in use on *owner*, inherited attributes included.

    Returns:
        The alias the implementation is now reachable under.

    Raises:
        AliasError: If *name* is not defined on *owner*.
    """
    table = operation_table(owner)
    try:
        implementation = table.lookup_operation(name)
    except KeyError:
        raise AliasError(
            f"Cannot alias undefined operation '{table.owner_name}.{name}'",
            code="ALIAS_UNDEFINED_OPERATION",
            context={"owner": table.owner_name, "operation": name},
        ) from None

    attempt = 0
    alias = alias_name(name, scope)
    while table.has_operation(alias):
        attempt += 1
        alias = alias_name(name, scope, attempt)

    table.put_operation(alias, implementation)
    logger.debug("Aliased %s.%s as %s", table.owner_name, name, alias)
    return alias
