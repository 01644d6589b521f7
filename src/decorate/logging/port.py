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
"""LoggingPort — what :func:`decorate.logging.configure_logging` drives.

Any object with these three methods can stand in for
:class:`~decorate.logging.structlog_adapter.StructlogAdapter`.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from decorate.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    """Sets up output for the ``decorate`` logger hierarchy."""

    def configure(self, config: Config) -> None:
        """Apply the ``decorate.logging.*`` keys of *config*."""
        ...

    def get_logger(self, name: str) -> Any:
        """Return a logger whose events share the configured output."""
        ...

    def set_level(self, name: str, level: str) -> None:
        """Change the level of one logger after configuration."""
        ...
