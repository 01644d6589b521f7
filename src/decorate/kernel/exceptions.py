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
"""Exception hierarchy for decorate.

Errors raised by the original implementation of a wrapped method, or by the
wrapper method itself, are never converted into these types: they reach the
caller exactly as raised.
"""

from __future__ import annotations

# =============================================================================
# Base Exception
# =============================================================================


class DecorateError(Exception):
    """Base exception for all decorate errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "AROUND_CALL_REQUIRED").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Declaration Errors
# =============================================================================


class ConfigurationError(DecorateError):
    """A wrapping declaration is malformed.

    Raised while a class is being declared, never when a wrapped method is
    called.
    """


class AliasError(DecorateError):
    """The original implementation of an operation could not be preserved."""


# =============================================================================
# Call-time Errors
# =============================================================================


class ResultUnavailableError(DecorateError):
    """``AroundCall.result`` was read before any transfer to the original."""
