"""Recipient sync: command and handler.

The platform's user store pushes every create or profile change here. The
handler upserts, so the same payload can be delivered more than once.
"""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from engagement.directory.recipient import Recipient
from engagement.domain import engagement


@engagement.command(part_of="Recipient")
class SyncRecipient:
    """Create or refresh the local copy of a platform user."""

    user_id: Identifier(required=True)
    email: String(max_length=254)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    roles: Text()  # JSON list of role names
    client_profile_id: Identifier()
    employee_profile_id: Identifier()


@engagement.command_handler(part_of=Recipient)
class SyncRecipientHandler:
    @handle(SyncRecipient)
    def sync_recipient(self, command):
        roles = json.loads(command.roles) if command.roles else []
        details = dict(
            email=command.email,
            first_name=command.first_name,
            last_name=command.last_name,
            roles=roles,
            client_profile_id=command.client_profile_id,
            employee_profile_id=command.employee_profile_id,
        )

        repo = current_domain.repository_for(Recipient)
        try:
            recipient = repo.get(str(command.user_id))
            recipient.sync(**details)
        except ObjectNotFoundError:
            recipient = Recipient.register(user_id=str(command.user_id), **details)

        repo.add(recipient)
        return str(recipient.user_id)
