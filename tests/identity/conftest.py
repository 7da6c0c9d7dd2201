import pytest


@pytest.fixture(autouse=True)
def _ctx():
    """Push the identity domain context for every test in this package."""
    from identity.domain import identity

    with identity.domain_context():
        yield
