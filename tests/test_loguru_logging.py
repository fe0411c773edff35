import logging

import pytest

from atelier.settings import settings
from atelier.toolkit.loguru_logging import InterceptHandler, intercept_loggers, logger


@pytest.fixture
def loguru_messages():
    """The messages that reach `loguru`, with the name of the `logging` logger they came from."""
    messages = []
    sink_id = logger.add(
        lambda message: messages.append((message.record["extra"].get("logger_name"), message.record["message"])),
        level="DEBUG",
    )
    yield messages
    logger.remove(sink_id)


def test_tortoise_logs_reach_loguru(loguru_messages):
    logging.getLogger("tortoise").warning("Tortoise says hi")

    assert ("tortoise", "Tortoise says hi") in loguru_messages


def test_database_client_logs_reach_loguru_once(loguru_messages):
    logging.getLogger("tortoise.db_client").error("Query failed")

    assert loguru_messages.count(("tortoise.db_client", "Query failed")) == 1


def test_database_debug_logs_are_filtered_by_the_log_level(loguru_messages):
    assert settings.LOG_LEVEL == "INFO"

    logging.getLogger("tortoise.db_client").debug("SELECT 1")

    assert ("tortoise.db_client", "SELECT 1") not in loguru_messages


def test_only_the_database_loggers_are_intercepted():
    for name in settings.INTERCEPTED_LOGGERS:
        intercepted_logger = logging.getLogger(name)
        assert [type(handler) for handler in intercepted_logger.handlers] == [InterceptHandler]
        assert intercepted_logger.propagate is False

    assert not any(isinstance(handler, InterceptHandler) for handler in logging.getLogger().handlers)


def test_intercept_more_loggers(loguru_messages):
    intercept_loggers(["atelier.tests.custom"], level="DEBUG")

    logging.getLogger("atelier.tests.custom").debug("Custom debug")

    assert ("atelier.tests.custom", "Custom debug") in loguru_messages


def test_loguru_only_levels_let_everything_through():
    intercept_loggers(["atelier.tests.trace"], level="TRACE")

    assert logging.getLogger("atelier.tests.trace").level == logging.NOTSET
