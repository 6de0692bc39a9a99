import io
import logging

import pytest

from beanlint.logging_setup import LOG_LEVEL_ENV, configure_logging, get_logger, parse_level


@pytest.fixture
def package_logger():
    logger = logging.getLogger("beanlint")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    logger.handlers, logger.level, logger.propagate = saved


@pytest.mark.parametrize(
    "level, expected",
    [
        ("debug", logging.DEBUG),
        (" Info ", logging.INFO),
        ("15", 15),
        (logging.ERROR, logging.ERROR),
        ("off", logging.CRITICAL + 10),
        ("chatty", logging.WARNING),
    ],
)
def test_parse_level(level, expected):
    assert parse_level(level) == expected


def test_unset_level_reads_environment(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert parse_level(None) == logging.DEBUG
    monkeypatch.delenv(LOG_LEVEL_ENV)
    assert parse_level(None) == logging.WARNING


def test_configure_routes_package_logs_to_stream(package_logger):
    stream = io.StringIO()
    configure_logging("info", fmt="%(name)s %(message)s", stream=stream)
    get_logger("beanlint.ledger.source").info("resolved %d directives", 3)
    get_logger("beanlint.ledger.source").debug("hidden")
    assert stream.getvalue() == "beanlint.ledger.source resolved 3 directives\n"


def test_reconfiguring_replaces_the_handler(package_logger):
    first, second = io.StringIO(), io.StringIO()
    configure_logging("warning", stream=first)
    handler = configure_logging("warning", stream=second)
    assert package_logger.handlers == [handler]
    get_logger("beanlint").warning("once")
    assert first.getvalue() == ""
    assert second.getvalue().endswith("once\n")
