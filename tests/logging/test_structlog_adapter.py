"""Tests for StructlogAdapter — default LoggingPort implementation."""

import io
import json
import logging
import os
from typing import Any

import pytest
import structlog

from decorate.around.call import AroundCall
from decorate.core.config import Config
from decorate.logging import configure_logging
from decorate.logging.structlog_adapter import HANDLER_NAME, LOGGER_NAME, StructlogAdapter
from decorate.meta import Decoratable
from decorate.registry import DecorationRegistry


@pytest.fixture(autouse=True)
def restore_decorate_loggers():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            logger.removeHandler(handler)
    logger.propagate = True
    for name in (LOGGER_NAME, "decorate.around", "decorate.registry"):
        logging.getLogger(name).setLevel(logging.NOTSET)
    structlog.reset_defaults()


def _debug_config(fmt: str) -> Config:
    return Config({"decorate": {"logging": {"format": fmt, "level": {"root": "DEBUG", "decorate.around": "DEBUG"}}}})


def _declare_and_wrap() -> type:
    class Service(Decoratable, registry=DecorationRegistry()):
        around_decorator("logged", call="audit")  # noqa: F821

        def audit(self, call: AroundCall) -> Any:
            return call.transfer()

        logged()  # noqa: F821

        def save(self) -> int:
            return 1

    return Service


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "WARNING"
        assert adapter._format == "console"
        assert logging.getLogger(LOGGER_NAME).level == logging.WARNING

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"decorate": {"logging": {"level": {"root": "debug"}}}}))
        assert adapter._root_level == "DEBUG"
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"decorate": {"logging": {"format": "JSON"}}}))
        assert adapter._format == "json"

    def test_configure_reads_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"decorate": {"logging": {"level": {"root": "INFO", "decorate.around": "DEBUG"}}}})
        adapter.configure(config)
        assert adapter._module_levels == {"decorate.around": "DEBUG"}
        assert logging.getLogger("decorate.around").level == logging.DEBUG

    def test_env_var_overrides_format(self):
        os.environ["DECORATE_LOGGING_FORMAT"] = "json"
        try:
            adapter = StructlogAdapter()
            adapter.configure(Config({"decorate": {"logging": {"format": "console"}}}))
            assert adapter._format == "json"
        finally:
            del os.environ["DECORATE_LOGGING_FORMAT"]


class TestStructlogAdapterHandler:
    def test_attaches_processor_formatter_to_decorate_logger(self):
        adapter = StructlogAdapter(stream=io.StringIO())
        adapter.configure(Config({}))
        logger = logging.getLogger(LOGGER_NAME)
        assert adapter.handler in logger.handlers
        assert isinstance(adapter.handler.formatter, structlog.stdlib.ProcessorFormatter)
        assert logger.propagate is False

    def test_reconfiguring_replaces_the_handler(self):
        first, second = StructlogAdapter(stream=io.StringIO()), StructlogAdapter(stream=io.StringIO())
        first.configure(Config({}))
        second.configure(Config({}))
        ours = [h for h in logging.getLogger(LOGGER_NAME).handlers if h.get_name() == HANDLER_NAME]
        assert ours == [second.handler]

    def test_shutdown_detaches_handler(self):
        adapter = StructlogAdapter(stream=io.StringIO())
        adapter.configure(Config({}))
        handler = adapter.handler
        adapter.shutdown()
        logger = logging.getLogger(LOGGER_NAME)
        assert handler not in logger.handlers
        assert adapter.handler is None
        assert logger.propagate is True


class TestDecorateRecordsRendering:
    def test_install_events_render_as_json(self):
        stream = io.StringIO()
        StructlogAdapter(stream=stream).configure(_debug_config("json"))

        _declare_and_wrap()

        events = [json.loads(line) for line in stream.getvalue().splitlines()]
        installed = [
            e for e in events if e["logger"] == "decorate.around.decorator" and e["event"].startswith("Installed around")
        ]
        assert len(installed) == 1
        assert installed[0]["level"] == "debug"
        assert "Service.save -> audit" in installed[0]["event"]
        assert "timestamp" in installed[0]
        assert any(e["logger"] == "decorate.registry" for e in events)

    def test_install_events_render_on_console(self):
        stream = io.StringIO()
        StructlogAdapter(stream=stream).configure(_debug_config("console"))

        _declare_and_wrap()

        assert "Installed around" in stream.getvalue()
        assert "decorate.around.decorator" in stream.getvalue()

    def test_debug_events_hidden_at_default_level(self):
        stream = io.StringIO()
        StructlogAdapter(stream=stream).configure(Config({}))

        _declare_and_wrap()

        assert stream.getvalue() == ""

    def test_structlog_logger_shares_the_output(self):
        stream = io.StringIO()
        adapter = StructlogAdapter(stream=stream)
        adapter.configure(_debug_config("json"))

        adapter.get_logger("decorate.app").info("ready", items=3)

        event = json.loads(stream.getvalue().splitlines()[-1])
        assert event["event"] == "ready"
        assert event["items"] == 3
        assert event["logger"] == "decorate.app"


class TestStructlogAdapterLoggers:
    def test_get_logger_returns_bound_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("decorate.test")
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "debug", None))

    def test_set_level_updates_stdlib_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        adapter.set_level("decorate.registry", "ERROR")
        assert logging.getLogger("decorate.registry").level == logging.ERROR


class TestConfigureLogging:
    def test_returns_configured_adapter(self):
        adapter = configure_logging(Config({"decorate": {"logging": {"format": "json"}}}))
        assert isinstance(adapter, StructlogAdapter)
        assert adapter._format == "json"

    def test_without_config_uses_defaults(self):
        adapter = configure_logging()
        assert adapter._root_level == "WARNING"

    def test_uses_given_adapter(self):
        stream = io.StringIO()
        adapter = StructlogAdapter(stream=stream)
        assert configure_logging(_debug_config("json"), adapter=adapter) is adapter
        assert adapter.handler.stream is stream
