import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def engagement_bed():
    from engagement.domain import engagement

    bed = DomainFixture(engagement)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(engagement_bed):
    from engagement.channel import reset_mail_transport
    from engagement.directory.port import reset_directory
    from engagement.domain import engagement
    from engagement.realtime.registry import reset_registry
    from engagement.utils.db import reset_data

    with engagement_bed.domain_context():
        yield

    reset_data(engagement)
    reset_registry()
    reset_mail_transport()
    reset_directory()


@pytest.fixture()
def fake_mail():
    from engagement.channel import get_mail_transport

    return get_mail_transport()


@pytest.fixture()
def registry():
    from engagement.realtime.registry import get_registry

    return get_registry()


@pytest.fixture()
def make_recipient():
    """Factory that stores a recipient in the local directory."""
    from protean import current_domain

    from engagement.directory.recipient import Recipient

    def _make(user_id, email="", first_name="Test", last_name="User", roles=None, client=False, employee=False):
        recipient = Recipient.register(
            user_id=user_id,
            email=email if email != "" else f"{user_id}@example.com",
            first_name=first_name,
            last_name=last_name,
            roles=roles or [],
            client_profile_id=f"client-{user_id}" if client else None,
            employee_profile_id=f"employee-{user_id}" if employee else None,
        )
        current_domain.repository_for(Recipient).add(recipient)
        return recipient

    return _make
