import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def recovery_bed():
    from recovery.domain import recovery

    bed = DomainFixture(recovery)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(recovery_bed):
    with recovery_bed.domain_context():
        yield
