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
"""decorate logging — logging port and structlog adapter."""

from __future__ import annotations

from decorate.core.config import Config
from decorate.logging.port import LoggingPort
from decorate.logging.structlog_adapter import StructlogAdapter


def configure_logging(config: Config | None = None, adapter: LoggingPort | None = None) -> LoggingPort:
    """Configure decorate's log output and return the adapter used.

    Uses a fresh :class:`StructlogAdapter` unless *adapter* is given.
    """
    if adapter is None:
        adapter = StructlogAdapter()
    adapter.configure(config if config is not None else Config())
    return adapter


__all__ = ["LoggingPort", "StructlogAdapter", "configure_logging"]
