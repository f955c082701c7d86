"""Domain events for the Recipient aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from engagement.domain import engagement


@engagement.event(part_of="Recipient")
class RecipientSynced:
    """The local copy of a platform user was created or refreshed."""

    __version__ = "v1"

    user_id: Identifier(required=True)
    email: String()
    has_client_profile: Boolean(default=False)
    has_employee_profile: Boolean(default=False)
    synced_at: DateTime(required=True)
