"""
Shared fixtures for highlight_param tests
"""

import pytest
from loguru import logger


@pytest.fixture
def warnings_log():
    """Collect messages logged at WARNING level or above"""
    messages = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]), level="WARNING"
    )
    yield messages
    logger.remove(handler_id)
