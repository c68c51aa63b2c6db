"""Account service - business logic for users, addresses and cards."""

import hashlib
import hmac
import logging
import secrets
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from typing import List

from accounts.errors import AccountError, AuthError, StoreError, ValidationError
from accounts.models.domain import Address, Card, EntityKind, Health, HealthStatus, User
from accounts.repositories.base import AccountStore

logger = logging.getLogger(__name__)


class Service(ABC):
    """
    Account operations, one method per operation.

    A "get" with an empty id lists everything; a non-empty id looks up a
    single entity and yields an empty list when nothing matches.
    """

    @abstractmethod
    def login(self, username: str, password: str) -> User:
        """Hydrated user for valid credentials. Raises AuthError otherwise."""

    @abstractmethod
    def register(self, username: str, password: str, email: str, first_name: str, last_name: str) -> str:
        """Create an account. Returns the new user id."""

    @abstractmethod
    def get_users(self, id: str) -> List[User]:
        pass

    @abstractmethod
    def post_user(self, user: User) -> str:
        pass

    @abstractmethod
    def get_addresses(self, id: str) -> List[Address]:
        pass

    @abstractmethod
    def post_address(self, address: Address, user_id: str) -> str:
        pass

    @abstractmethod
    def get_cards(self, id: str) -> List[Card]:
        pass

    @abstractmethod
    def post_card(self, card: Card, user_id: str) -> str:
        pass

    @abstractmethod
    def delete(self, entity: EntityKind, id: str) -> None:
        pass

    @abstractmethod
    def get_user_attributes(self, user: User) -> User:
        """Copy of ``user`` with its own addresses and cards loaded."""

    @abstractmethod
    def health(self) -> List[Health]:
        """Health of every subsystem. Never raises."""


def calculate_pass_hash(password: str, salt: str) -> str:
    """Salted SHA-1 digest stored in place of the password."""
    return hashlib.sha1((password + salt).encode("utf-8")).hexdigest()


def new_salt() -> str:
    return secrets.token_hex(20)


class AccountService(Service):
    """
    Service backed by an ``AccountStore``.

    Responsibilities:
    - Enforce business rules (required fields, credential checks)
    - Salt and hash passwords, mask card numbers
    - Report store failures as StoreError

    Does NOT:
    - Shape responses (that's the resolver)
    - Handle HTTP requests (that's API layer)
    """

    def __init__(self, store: AccountStore, service_name: str = "user"):
        self.store = store
        self.service_name = service_name

    @contextmanager
    def _backend(self, action: str):
        """Re-raise unexpected store failures as StoreError."""
        try:
            yield
        except AccountError:
            raise
        except Exception as e:
            logger.error("Store failure while %s: %s", action, e)
            raise StoreError(f"Store failure while {action}: {e}") from e

    def login(self, username: str, password: str) -> User:
        with self._backend("loading user"):
            user = self.store.get_user_by_name(username)
        if user is None or not hmac.compare_digest(
            user.password, calculate_pass_hash(password, user.salt)
        ):
            logger.info("Failed login for %s", username)
            raise AuthError("Unauthorized")
        return self.get_user_attributes(user)

    def register(self, username: str, password: str, email: str, first_name: str, last_name: str) -> str:
        return self.post_user(User(
            username=username,
            password=password,
            email=email,
            first_name=first_name,
            last_name=last_name,
        ))

    def get_users(self, id: str) -> List[User]:
        with self._backend("loading users"):
            if not id:
                return self.store.get_users()
            user = self.store.get_user(id)
        return [user] if user else []

    def post_user(self, user: User) -> str:
        """
        Create a user.

        Business rules:
        - Username and password are required
        - Usernames are unique (enforced by the store)
        - The password is stored salted and hashed
        """
        if not user.username:
            raise ValidationError("Username is required")
        if not user.password:
            raise ValidationError("Password is required")

        salt = new_salt()
        stored = replace(
            user,
            id="",
            salt=salt,
            password=calculate_pass_hash(user.password, salt),
            addresses=[],
            cards=[],
        )
        with self._backend("creating user"):
            user_id = self.store.create_user(stored)
        logger.info("Registered user %s (%s)", user.username, user_id)
        return user_id

    def get_addresses(self, id: str) -> List[Address]:
        with self._backend("loading addresses"):
            if not id:
                return self.store.get_addresses()
            address = self.store.get_address(id)
        return [address] if address else []

    def post_address(self, address: Address, user_id: str) -> str:
        if not user_id:
            raise ValidationError("userID is required")
        with self._backend("creating address"):
            return self.store.create_address(address, user_id)

    def get_cards(self, id: str) -> List[Card]:
        with self._backend("loading cards"):
            if not id:
                cards = self.store.get_cards()
            else:
                card = self.store.get_card(id)
                cards = [card] if card else []
        return [card.masked() for card in cards]

    def post_card(self, card: Card, user_id: str) -> str:
        if not user_id:
            raise ValidationError("userID is required")
        if not card.long_num:
            raise ValidationError("Card number is required")
        with self._backend("creating card"):
            return self.store.create_card(card, user_id)

    def delete(self, entity: EntityKind, id: str) -> None:
        if not id:
            raise ValidationError("id is required")
        kind = getattr(entity, "value", entity)
        with self._backend(f"deleting {kind}"):
            self.store.delete(entity, id)
        logger.info("Deleted %s %s", kind, id)

    def get_user_attributes(self, user: User) -> User:
        with self._backend("loading user attributes"):
            hydrated = self.store.get_user_attributes(user)
        return hydrated.masked()

    def health(self) -> List[Health]:
        now = datetime.now()
        db_status = HealthStatus.OK
        try:
            self.store.ping()
        except Exception as e:
            logger.warning("Store health check failed: %s", e)
            db_status = HealthStatus.ERROR

        return [
            Health(service=self.service_name, status=HealthStatus.OK, time=now),
            Health(service=f"{self.service_name}-db", status=db_status, time=now),
        ]
