import os
from pathlib import Path

import pytest

# base64 of a fixed 32-byte key, test use only
TEST_ENCRYPTION_KEY = "MDEyMzQ1Njc4OWFiY2RlZjAxMjM0NTY3ODlhYmNkZWY="

_PROVIDER_ENV = (
    "MSG91_AUTH_KEY",
    "MSG91_WHATSAPP_INTEGRATED_NUMBER",
    "RESEND_API_KEY",
    "COURIER_ADAPTER",
)


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pin the environment before any domain is imported.

    Provider credentials are cleared so nothing reaches a real API, and the
    notification channels resolve to in-memory fakes.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ["CREDENTIALS_ENCRYPTION_KEY"] = TEST_ENCRYPTION_KEY
    os.environ["NOTIFICATION_ADAPTER"] = "fake"
    for name in _PROVIDER_ENV:
        os.environ.pop(name, None)


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(autouse=True)
def reset_adapters():
    """Drop adapter and dispatcher singletons after every test."""
    yield

    from notifications.channel import reset_channels
    from notifications.messaging.notifier import reset_dispatcher
    from shipping.courier import reset_courier

    reset_channels()
    reset_dispatcher()
    reset_courier()
