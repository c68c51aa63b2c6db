"""Account store - in-memory implementation."""

import copy
import threading
import uuid
from typing import Dict, List, Optional

from accounts.errors import NotFoundError, ValidationError
from accounts.models.domain import Address, Card, EntityKind, User
from accounts.repositories.base import AccountStore


class MemoryStore(AccountStore):
    """
    Store for users, addresses and cards.

    Current implementation: In-memory (dicts, insertion ordered)
    Rationale: reference backend for local runs and tests
    Future: MongoDB or SQL behind the same interface
    """

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._addresses: Dict[str, Address] = {}
        self._cards: Dict[str, Card] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex

    def create_user(self, user: User) -> str:
        """Save user to memory. Usernames are unique."""
        with self._lock:
            if any(u.username == user.username for u in self._users.values()):
                raise ValidationError(f"Username '{user.username}' already exists")
            stored = copy.deepcopy(user)
            stored.id = self._new_id()
            stored.addresses = []
            stored.cards = []
            self._users[stored.id] = stored
            return stored.id

    def get_user_by_name(self, username: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return copy.deepcopy(user)
        return None

    def get_user(self, id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(id)
            return copy.deepcopy(user) if user else None

    def get_users(self) -> List[User]:
        with self._lock:
            return copy.deepcopy(list(self._users.values()))

    def create_address(self, address: Address, user_id: str) -> str:
        with self._lock:
            self._require_user(user_id)
            stored = copy.deepcopy(address)
            stored.id = self._new_id()
            stored.user_id = user_id
            self._addresses[stored.id] = stored
            return stored.id

    def get_address(self, id: str) -> Optional[Address]:
        with self._lock:
            address = self._addresses.get(id)
            return copy.deepcopy(address) if address else None

    def get_addresses(self) -> List[Address]:
        with self._lock:
            return copy.deepcopy(list(self._addresses.values()))

    def create_card(self, card: Card, user_id: str) -> str:
        with self._lock:
            self._require_user(user_id)
            stored = copy.deepcopy(card)
            stored.id = self._new_id()
            stored.user_id = user_id
            self._cards[stored.id] = stored
            return stored.id

    def get_card(self, id: str) -> Optional[Card]:
        with self._lock:
            card = self._cards.get(id)
            return copy.deepcopy(card) if card else None

    def get_cards(self) -> List[Card]:
        with self._lock:
            return copy.deepcopy(list(self._cards.values()))

    def delete(self, entity: EntityKind, id: str) -> None:
        """Delete an entity; deleting a user also deletes its addresses and cards."""
        try:
            entity = EntityKind(entity)
        except ValueError:
            raise ValidationError(f"Unknown entity kind: {entity}")

        with self._lock:
            if entity == EntityKind.CUSTOMERS:
                self._pop(self._users, entity, id)
                self._addresses = {k: a for k, a in self._addresses.items() if a.user_id != id}
                self._cards = {k: c for k, c in self._cards.items() if c.user_id != id}
            elif entity == EntityKind.ADDRESSES:
                self._pop(self._addresses, entity, id)
            else:
                self._pop(self._cards, entity, id)

    def get_user_attributes(self, user: User) -> User:
        """Hydrate a copy of the user with only its own addresses and cards."""
        with self._lock:
            hydrated = copy.deepcopy(user)
            hydrated.addresses = [
                copy.deepcopy(a) for a in self._addresses.values() if a.user_id == user.id
            ]
            hydrated.cards = [
                copy.deepcopy(c) for c in self._cards.values() if c.user_id == user.id
            ]
            return hydrated

    def ping(self) -> None:
        """Always reachable."""

    def _require_user(self, user_id: str) -> None:
        if user_id not in self._users:
            raise NotFoundError(f"User '{user_id}' not found")

    @staticmethod
    def _pop(table: dict, entity: EntityKind, id: str) -> None:
        if table.pop(id, None) is None:
            raise NotFoundError(f"No {entity.value} with id '{id}'")
