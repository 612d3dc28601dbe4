import pytest
from loguru import logger

from check_report import PerformanceMetric, RecordingSink


@pytest.fixture
def response_time():
    return PerformanceMetric(value=1.23, warn=1.00, crit=2.00, min=0.00, max=10.00, unit="ms")


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def log_messages():
    """Collect check_report log messages emitted during a test."""
    messages = []
    logger.enable("check_report")
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    yield messages
    logger.remove(handler_id)
    logger.disable("check_report")
