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
"""AroundCall — the context handed to an around wrapper."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from decorate.kernel.exceptions import ConfigurationError, ResultUnavailableError

_ABSENT: Any = object()


@dataclass(frozen=True, eq=False)
class AroundCall:
    """One in-flight call of a wrapped method.

    Attributes:
        receiver: The object the wrapped method was called on.
        operation_name: Name the caller used, e.g. ``"save"``.
        original_name: Name the unwrapped implementation is reachable under,
            e.g. ``"save_without_logged"``.
        args: Positional arguments passed by the caller.
        kwargs: Keyword arguments passed by the caller.

    ``result`` is filled in by :meth:`transfer`. Until then it is absent and
    reading it raises :class:`ResultUnavailableError`.

    Example::

        def audit(self, call):
            call.transfer()
            return call.result + 1
    """

    receiver: Any
    operation_name: str
    original_name: str
    args: tuple = ()
    kwargs: dict[str, Any] = field(default_factory=dict)
    _result: Any = field(default=_ABSENT, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.original_name == self.operation_name:
            raise ConfigurationError(
                f"Original implementation of '{self.operation_name}' must live under a different name",
                code="AROUND_ALIAS_SELF",
                context={"operation": self.operation_name},
            )
        object.__setattr__(self, "args", tuple(self.args))

    @property
    def has_result(self) -> bool:
        """True once :meth:`transfer` has returned at least once."""
        return self._result is not _ABSENT

    @property
    def result(self) -> Any:
        """Return value of the latest :meth:`transfer`."""
        if self._result is _ABSENT:
            raise ResultUnavailableError(
                f"No result for '{self.operation_name}': transfer() has not been called",
                code="AROUND_RESULT_UNAVAILABLE",
                context={"operation": self.operation_name},
            )
        return self._result

    def transfer(self, args: tuple | list | None = None, kwargs: dict[str, Any] | None = None) -> Any:
        """Call the original implementation and record its return value.

        *args* and *kwargs* default to the ones the caller passed. Whatever
        the original raises propagates unchanged and leaves ``result`` as it
        was.
        """
        original = getattr(self.receiver, self.original_name)
        value = original(*self._args_for(args), **self._kwargs_for(kwargs))
        object.__setattr__(self, "_result", value)
        return value

    async def transfer_async(self, args: tuple | list | None = None, kwargs: dict[str, Any] | None = None) -> Any:
        """Await the original coroutine method and record its return value."""
        original = getattr(self.receiver, self.original_name)
        value = await original(*self._args_for(args), **self._kwargs_for(kwargs))
        object.__setattr__(self, "_result", value)
        return value

    def _args_for(self, args: tuple | list | None) -> tuple:
        return self.args if args is None else tuple(args)

    def _kwargs_for(self, kwargs: dict[str, Any] | None) -> dict[str, Any]:
        return self.kwargs if kwargs is None else kwargs

    def __repr__(self) -> str:
        result = repr(self._result) if self.has_result else "<absent>"
        return (
            f"AroundCall(receiver={self.receiver!r}, operation_name={self.operation_name!r}, "
            f"original_name={self.original_name!r}, args={self.args!r}, kwargs={self.kwargs!r}, "
            f"result={result})"
        )
