"""
Resolver - binds request values to Service calls and shapes responses.

Every method returns an ``Outcome``: the response value plus the error the
Service reported, if any. Errors are never swallowed; when a call fails
the response is whatever placeholder the resolution rules produce for an
empty result, and the error travels alongside it for the transport to
translate.

Read paths follow the resource-view rules for an ``(id, attr)`` selector:

- empty ``id``: the whole collection, wrapped in an envelope
- unknown ``id``: an empty envelope when ``attr`` names a nested
  collection, otherwise the zero-value entity
- known ``id``: the first match, hydrated; either the nested collection
  named by ``attr`` or the entity itself
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from accounts.errors import AccountError
from accounts.models.domain import Address, Card, Health, User
from accounts.models.dto import (
    AddressDTO,
    AddressesResponse,
    AddressPostRequest,
    CardDTO,
    CardPostRequest,
    CardsResponse,
    DeleteRequest,
    EmbedResponse,
    GetRequest,
    HealthDTO,
    HealthResponse,
    LoginRequest,
    PostResponse,
    RegisterRequest,
    StatusResponse,
    UserDTO,
    UserPostRequest,
    UserResponse,
    UsersResponse,
)
from accounts.services.account_service import Service
from accounts.tracing import NullTracer, Tracer

logger = logging.getLogger(__name__)

ATTR_ADDRESSES = "addresses"
ATTR_CARDS = "cards"


@dataclass
class Outcome:
    """Response value and the error propagated from the Service, if any."""
    response: Any
    error: Optional[AccountError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ResourceView:
    """How one entity kind is fetched, hydrated and rendered."""
    fetch_span: str
    fetch: Callable[[str], List[Any]]
    zero: Callable[[], Any]
    render: Callable[[Any], Any]
    envelope: Callable[[List[Any]], EmbedResponse]
    hydrate: Optional[Callable[[Any], Any]] = None
    nested: Dict[str, Callable[[Any], EmbedResponse]] = field(default_factory=dict)


def address_to_dto(address: Address) -> AddressDTO:
    return AddressDTO(
        id=address.id,
        street=address.street,
        number=address.number,
        country=address.country,
        city=address.city,
        postcode=address.postcode,
    )


def card_to_dto(card: Card) -> CardDTO:
    return CardDTO(id=card.id, long_num=card.long_num, expires=card.expires, ccv=card.ccv)


def user_to_dto(user: User) -> UserDTO:
    return UserDTO(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        username=user.username,
        addresses=[address_to_dto(a) for a in user.addresses],
        cards=[card_to_dto(c) for c in user.cards],
    )


def health_to_dto(health: Health) -> HealthDTO:
    return HealthDTO(service=health.service, status=health.status, time=health.time)


def users_envelope(users: List[User]) -> EmbedResponse:
    return EmbedResponse(embedded=UsersResponse(users=[user_to_dto(u) for u in users]))


def addresses_envelope(addresses: List[Address]) -> EmbedResponse:
    return EmbedResponse(embedded=AddressesResponse(addresses=[address_to_dto(a) for a in addresses]))


def cards_envelope(cards: List[Card]) -> EmbedResponse:
    return EmbedResponse(embedded=CardsResponse(cards=[card_to_dto(c) for c in cards]))


class Resolver:
    """
    One method per Service operation.

    Holds no per-request state; each call makes at most two sequential
    Service calls (fetch, then hydrate).
    """

    def __init__(self, service: Service, tracer: Optional[Tracer] = None, service_name: str = "user"):
        self.service = service
        self.tracer = tracer or NullTracer()
        self.service_name = service_name

        self.user_view = ResourceView(
            fetch_span="users from db",
            fetch=service.get_users,
            zero=User,
            render=user_to_dto,
            envelope=users_envelope,
            hydrate=service.get_user_attributes,
            nested={
                ATTR_ADDRESSES: lambda user: addresses_envelope(user.addresses),
                ATTR_CARDS: lambda user: cards_envelope(user.cards),
            },
        )
        self.address_view = ResourceView(
            fetch_span="address from db",
            fetch=service.get_addresses,
            zero=Address,
            render=address_to_dto,
            envelope=addresses_envelope,
        )
        self.card_view = ResourceView(
            fetch_span="card from db",
            fetch=service.get_cards,
            zero=Card,
            render=card_to_dto,
            envelope=cards_envelope,
        )

    def _call(self, operation: str, fn: Callable, *args, default: Any = None) -> Tuple[Any, Optional[AccountError]]:
        """Run a Service call, capturing its error instead of raising it."""
        try:
            return fn(*args), None
        except AccountError as e:
            logger.warning("%s failed: %s", operation, e)
            return default, e

    def _operation(self, name: str):
        return self.tracer.span(name, service=self.service_name)

    def resolve(self, view: ResourceView, request: GetRequest) -> Outcome:
        """Apply the resource-view rules for ``request`` to ``view``."""
        with self.tracer.span(view.fetch_span, id=request.id):
            items, error = self._call(view.fetch_span, view.fetch, request.id, default=[])

        if not request.id:
            return Outcome(view.envelope(items), error)

        nested = view.nested.get(request.attr)
        if not items:
            entity = view.zero()
            if nested:
                return Outcome(nested(entity), error)
            return Outcome(view.render(entity), error)

        entity = items[0]
        if view.hydrate is not None:
            with self.tracer.span("attributes from db", id=request.id):
                entity, hydrate_error = self._call(
                    "attributes from db", view.hydrate, entity, default=entity
                )
            error = error or hydrate_error

        if nested:
            return Outcome(nested(entity), error)
        return Outcome(view.render(entity), error)

    def login(self, request: LoginRequest) -> Outcome:
        with self._operation("Login"):
            user, error = self._call(
                "Login", self.service.login, request.username, request.password, default=User()
            )
            return Outcome(UserResponse(user=user_to_dto(user)), error)

    def register(self, request: RegisterRequest) -> Outcome:
        with self._operation("Register"):
            id, error = self._call(
                "Register",
                self.service.register,
                request.username,
                request.password,
                request.email,
                request.first_name,
                request.last_name,
                default="",
            )
            return Outcome(PostResponse(id=id), error)

    def get_users(self, request: GetRequest) -> Outcome:
        with self._operation("Get Users"):
            return self.resolve(self.user_view, request)

    def post_user(self, request: UserPostRequest) -> Outcome:
        user = User(
            username=request.username,
            password=request.password,
            email=request.email,
            first_name=request.first_name,
            last_name=request.last_name,
        )
        with self._operation("Post User"):
            id, error = self._call("Post User", self.service.post_user, user, default="")
            return Outcome(PostResponse(id=id), error)

    def get_addresses(self, request: GetRequest) -> Outcome:
        with self._operation("Get Addresses"):
            return self.resolve(self.address_view, request)

    def post_address(self, request: AddressPostRequest) -> Outcome:
        address = Address(
            street=request.street,
            number=request.number,
            country=request.country,
            city=request.city,
            postcode=request.postcode,
        )
        with self._operation("Post Address"):
            id, error = self._call(
                "Post Address", self.service.post_address, address, request.user_id, default=""
            )
            return Outcome(PostResponse(id=id), error)

    def get_cards(self, request: GetRequest) -> Outcome:
        with self._operation("Get Cards"):
            return self.resolve(self.card_view, request)

    def post_card(self, request: CardPostRequest) -> Outcome:
        card = Card(long_num=request.long_num, expires=request.expires, ccv=request.ccv)
        with self._operation("Post Card"):
            id, error = self._call(
                "Post Card", self.service.post_card, card, request.user_id, default=""
            )
            return Outcome(PostResponse(id=id), error)

    def delete(self, request: DeleteRequest) -> Outcome:
        with self._operation("Delete Entity") as span:
            span.set_attribute("entity", request.entity.value)
            _, error = self._call("Delete Entity", self.service.delete, request.entity, request.id)
            return Outcome(StatusResponse(status=error is None), error)

    def health(self) -> Outcome:
        with self._operation("Health Check"):
            records = self.service.health()
            return Outcome(HealthResponse(health=[health_to_dto(h) for h in records]))
