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
"""StructlogAdapter — renders decorate's log records through structlog.

decorate's modules log with plain ``logging.getLogger(__name__)``. Configuring
the adapter attaches one handler to the ``decorate`` logger whose
:class:`structlog.stdlib.ProcessorFormatter` runs those records through the
same processor chain as structlog's own loggers, so declaration, registration
and installation events come out as console lines or JSON objects.

Config keys:

- ``decorate.logging.level.root``: level of the ``decorate`` logger
- ``decorate.logging.level.<logger>``: level of any other logger
- ``decorate.logging.format``: ``console`` or ``json``
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

from decorate.core.config import Config

LOGGER_NAME = "decorate"
HANDLER_NAME = "decorate.structlog"


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors shared by structlog events and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


class StructlogAdapter:
    """Logging adapter backed by structlog.

    Args:
        stream: Where rendered records go. Defaults to ``sys.stdout`` as it
            is when :meth:`configure` runs.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._root_level = "WARNING"
        self._format = "console"
        self._module_levels: dict[str, str] = {}
        self._handler: logging.Handler | None = None

    @property
    def handler(self) -> logging.Handler | None:
        """Handler attached to the ``decorate`` logger, once configured."""
        return self._handler

    def configure(self, config: Config) -> None:
        levels = dict(config.get_section("decorate.logging.level"))
        levels.pop("root", None)
        self._root_level = str(config.get("decorate.logging.level.root", "WARNING")).upper()
        self._module_levels = {name: str(level).upper() for name, level in levels.items()}
        self._format = str(config.get("decorate.logging.format", "console")).lower()

        pre_chain = _pre_chain()
        structlog.configure(
            processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        self._attach_handler(pre_chain)

        self.set_level(LOGGER_NAME, self._root_level)
        for name, level in self._module_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        """Get a structlog BoundLogger by name."""
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        """Set the level of the stdlib logger *name*; unknown levels mean INFO."""
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))

    def shutdown(self) -> None:
        """Detach the handler and let ``decorate`` records propagate again."""
        logger = logging.getLogger(LOGGER_NAME)
        if self._handler is not None:
            logger.removeHandler(self._handler)
            self._handler = None
        logger.propagate = True

    def _renderer(self) -> structlog.types.Processor:
        if self._format == "json":
            return structlog.processors.JSONRenderer()
        return structlog.dev.ConsoleRenderer()

    def _attach_handler(self, pre_chain: list[structlog.types.Processor]) -> None:
        logger = logging.getLogger(LOGGER_NAME)
        # one rendering handler per process, whichever adapter configured it last
        for existing in list(logger.handlers):
            if existing.get_name() == HANDLER_NAME:
                logger.removeHandler(existing)

        handler = logging.StreamHandler(self._stream if self._stream is not None else sys.stdout)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=pre_chain,
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    self._renderer(),
                ],
            )
        )
        logger.addHandler(handler)
        logger.propagate = False
        self._handler = handler
