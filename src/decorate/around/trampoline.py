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
"""Trampolines — the implementations installed in place of wrapped methods."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any

from decorate.around.binding import WrapperBinding
from decorate.around.call import AroundCall


def build_trampoline(
    binding: WrapperBinding,
    operation_name: str,
    original_name: str,
    original: Callable[..., Any],
) -> Callable[..., Any]:
    """Build the method that replaces *original* under *operation_name*.

    Each call builds an :class:`AroundCall` and returns whatever the wrapper
    method named by *binding* returns. Coroutine functions get a coroutine
    trampoline that awaits the wrapper when it hands back an awaitable.
    """
    wrapper_name = binding.wrapper_name

    if inspect.iscoroutinefunction(original):

        @functools.wraps(original)
        async def async_trampoline(self: Any, *args: Any, **kwargs: Any) -> Any:
            call = AroundCall(self, operation_name, original_name, args, kwargs)
            result = getattr(self, wrapper_name)(call)
            if inspect.isawaitable(result):
                result = await result
            return result

        trampoline: Callable[..., Any] = async_trampoline
    else:

        @functools.wraps(original)
        def sync_trampoline(self: Any, *args: Any, **kwargs: Any) -> Any:
            call = AroundCall(self, operation_name, original_name, args, kwargs)
            return getattr(self, wrapper_name)(call)

        trampoline = sync_trampoline

    # functools.wraps copied the markers of an inner trampoline; overwrite them
    trampoline.__around_binding__ = binding  # type: ignore[attr-defined]
    trampoline.__around_original__ = original_name  # type: ignore[attr-defined]
    return trampoline


def is_trampoline(func: Any) -> bool:
    """True if *func* was installed by an around decorator."""
    return getattr(func, "__around_binding__", None) is not None
