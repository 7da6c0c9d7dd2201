import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Sets the config overlay and initializes all three domains once, through
    the same entry point the application uses.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("SHOP_SEED_CATALOGUE", "false")

    from app import init_domains

    init_domains()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering
    from shared.db import drop_db, setup_db

    domains = (identity, catalogue, ordering)
    for domain in domains:
        setup_db(domain)

    yield

    for domain in domains:
        drop_db(domain)


def _reset(domain):
    with domain.domain_context():
        for _, provider in domain.providers.items():
            provider._data_reset()

        for _, broker in domain.brokers.items():
            broker._data_reset()

        domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    for domain in (identity, catalogue, ordering):
        _reset(domain)
