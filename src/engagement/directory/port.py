"""Recipient directory: the engine's only view of the platform's users.

``RecipientDirectory`` is the port the audience resolver and the notification
dispatcher depend on. The default adapter reads the local ``Recipient``
aggregate, walking the repository page by page so that audiences larger than
one query page are returned in full.
"""

from abc import ABC, abstractmethod

from protean.utils.globals import current_domain

from engagement.config import get_setting
from engagement.directory.recipient import Recipient
from engagement.utils.query import fetch_all


class RecipientDirectory(ABC):
    """Abstract interface for looking up message recipients."""

    @abstractmethod
    def find_all(self) -> list[Recipient]: ...

    @abstractmethod
    def find_with_client_profile(self) -> list[Recipient]: ...

    @abstractmethod
    def find_with_employee_profile(self) -> list[Recipient]: ...

    @abstractmethod
    def find_by_id(self, user_id: str) -> Recipient:
        """Return the recipient or raise ``ObjectNotFoundError``."""
        ...

    @abstractmethod
    def count(self) -> int: ...


class RepositoryRecipientDirectory(RecipientDirectory):
    """Directory backed by the domain's ``Recipient`` repository."""

    def __init__(self, page_size: int | None = None):
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        return self._page_size or get_setting("directory_page_size")

    def _all(self) -> list[Recipient]:
        repo = current_domain.repository_for(Recipient)
        return fetch_all(repo._dao.query, page_size=self.page_size, order_by="user_id")

    def find_all(self) -> list[Recipient]:
        return self._all()

    def find_with_client_profile(self) -> list[Recipient]:
        return [r for r in self._all() if r.has_client_profile()]

    def find_with_employee_profile(self) -> list[Recipient]:
        return [r for r in self._all() if r.has_employee_profile()]

    def find_by_id(self, user_id: str) -> Recipient:
        return current_domain.repository_for(Recipient).get(str(user_id))

    def count(self) -> int:
        return len(self._all())


_directory: RecipientDirectory | None = None


def get_directory() -> RecipientDirectory:
    """Return the configured directory (repository-backed by default)."""
    global _directory
    if _directory is None:
        _directory = RepositoryRecipientDirectory()
    return _directory


def configure_directory(directory: RecipientDirectory) -> None:
    """Swap in another directory implementation, e.g. a remote user store."""
    global _directory
    _directory = directory


def reset_directory() -> None:
    global _directory
    _directory = None
