import pytest


@pytest.fixture(autouse=True)
def _ctx():
    """Push the catalogue domain context for every test in this package."""
    from catalogue.domain import catalogue

    with catalogue.domain_context():
        yield
