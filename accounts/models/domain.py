"""Domain entities - internal representation (framework-agnostic)."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import List, Optional


class EntityKind(str, Enum):
    """Entity kind tags accepted by delete."""
    CUSTOMERS = "customers"
    ADDRESSES = "addresses"
    CARDS = "cards"


class HealthStatus(str, Enum):
    """Subsystem health status."""
    OK = "OK"
    ERROR = "err"


@dataclass
class Address:
    """Postal address owned by a user."""
    id: str = ""
    street: str = ""
    number: str = ""
    country: str = ""
    city: str = ""
    postcode: str = ""
    user_id: str = ""


@dataclass
class Card:
    """Payment card owned by a user."""
    id: str = ""
    long_num: str = ""
    expires: str = ""
    ccv: str = ""
    user_id: str = ""

    def masked(self) -> "Card":
        """Copy of the card with all but the last four digits hidden."""
        visible = self.long_num[-4:]
        return replace(self, long_num="*" * (len(self.long_num) - len(visible)) + visible)


@dataclass
class User:
    """
    User account.

    ``addresses`` and ``cards`` stay empty until the user is hydrated
    through the store; a freshly constructed ``User()`` is the zero value
    returned for lookups that match nothing.
    """
    id: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    username: str = ""
    password: str = ""
    salt: str = ""
    addresses: List[Address] = field(default_factory=list)
    cards: List[Card] = field(default_factory=list)

    def masked(self) -> "User":
        """Copy of the user with every card number masked."""
        return replace(self, cards=[card.masked() for card in self.cards])


@dataclass
class Health:
    """Health record for one subsystem, computed per request."""
    service: str
    status: HealthStatus
    time: Optional[datetime] = None
