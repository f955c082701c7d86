"""Recipient aggregate: local read model of the platform's user store.

Holds just enough of each user to target and address them: contact email,
display name, roles, and which profiles (client, employee) they own. The
user store pushes changes through the ``SyncRecipient`` command.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from engagement.directory.events import RecipientSynced
from engagement.domain import engagement


class Role(Enum):
    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"
    CLIENT_MARKETING = "CLIENT_MARKETING"
    CLIENT_AI = "CLIENT_AI"


# Client-facing roles never receive internal project assignment notices
CLIENT_ROLES = frozenset({Role.CLIENT_MARKETING.value, Role.CLIENT_AI.value})


@engagement.aggregate
class Recipient:
    """A platform user that can own notifications and receive campaign messages."""

    user_id: Identifier(identifier=True, required=True)
    email: String(max_length=254)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    roles: Text()  # JSON list of Role values
    client_profile_id: Identifier()
    employee_profile_id: Identifier()
    registered_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def roles_must_be_a_json_list(self):
        if self.roles is None:
            return
        try:
            decoded = json.loads(self.roles)
        except ValueError:
            raise ValidationError({"roles": ["Roles must be a JSON list"]})
        if not isinstance(decoded, list):
            raise ValidationError({"roles": ["Roles must be a JSON list"]})

    @classmethod
    def register(
        cls,
        user_id,
        email=None,
        first_name=None,
        last_name=None,
        roles=None,
        client_profile_id=None,
        employee_profile_id=None,
    ):
        now = datetime.now(UTC)
        recipient = cls(
            user_id=user_id,
            email=email or None,
            first_name=first_name,
            last_name=last_name,
            roles=json.dumps(list(roles or [])),
            client_profile_id=client_profile_id,
            employee_profile_id=employee_profile_id,
            registered_at=now,
            updated_at=now,
        )
        recipient._raise_synced(now)
        return recipient

    def sync(
        self,
        email=None,
        first_name=None,
        last_name=None,
        roles=None,
        client_profile_id=None,
        employee_profile_id=None,
    ):
        """Replace the mirrored user data with the store's latest view."""
        now = datetime.now(UTC)
        self.email = email or None
        self.first_name = first_name
        self.last_name = last_name
        self.roles = json.dumps(list(roles or []))
        self.client_profile_id = client_profile_id
        self.employee_profile_id = employee_profile_id
        self.updated_at = now
        self._raise_synced(now)

    def _raise_synced(self, synced_at):
        self.raise_(
            RecipientSynced(
                user_id=str(self.user_id),
                email=self.email,
                has_client_profile=self.has_client_profile(),
                has_employee_profile=self.has_employee_profile(),
                synced_at=synced_at,
            )
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def role_names(self) -> list[str]:
        return json.loads(self.roles) if self.roles else []

    def has_client_profile(self) -> bool:
        return self.client_profile_id is not None

    def has_employee_profile(self) -> bool:
        return self.employee_profile_id is not None

    def is_client(self) -> bool:
        """True when any of the user's roles is client-facing."""
        return bool(CLIENT_ROLES.intersection(self.role_names()))

    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
