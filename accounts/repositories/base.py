"""Base store interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from accounts.models.domain import Address, Card, EntityKind, User


class AccountStore(ABC):
    """
    Persistence interface for users, addresses and cards.

    Abstracts data access - could be in-memory, MongoDB, SQL, etc.
    Every read returns copies, so callers never share mutable state with
    the store. Backend failures surface as ``StoreError``.
    """

    @abstractmethod
    def create_user(self, user: User) -> str:
        """Store a new user. Returns the new id."""
        pass

    @abstractmethod
    def get_user_by_name(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    def get_user(self, id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_users(self) -> List[User]:
        """List all users."""
        pass

    @abstractmethod
    def create_address(self, address: Address, user_id: str) -> str:
        """Store a new address for a user. Returns the new id."""
        pass

    @abstractmethod
    def get_address(self, id: str) -> Optional[Address]:
        """Get address by ID."""
        pass

    @abstractmethod
    def get_addresses(self) -> List[Address]:
        """List all addresses."""
        pass

    @abstractmethod
    def create_card(self, card: Card, user_id: str) -> str:
        """Store a new card for a user. Returns the new id."""
        pass

    @abstractmethod
    def get_card(self, id: str) -> Optional[Card]:
        """Get card by ID."""
        pass

    @abstractmethod
    def get_cards(self) -> List[Card]:
        """List all cards."""
        pass

    @abstractmethod
    def delete(self, entity: EntityKind, id: str) -> None:
        """Delete an entity. Raises NotFoundError if it does not exist."""
        pass

    @abstractmethod
    def get_user_attributes(self, user: User) -> User:
        """Return a copy of ``user`` with its addresses and cards loaded."""
        pass

    @abstractmethod
    def ping(self) -> None:
        """Raise StoreError if the backend is unreachable."""
        pass
