"""REST API endpoints for the account service."""

import logging
from http import HTTPStatus

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from accounts.config import get_settings
from accounts.models.domain import EntityKind
from accounts.models.dto import (
    AddressPostRequest,
    CardPostRequest,
    DeleteRequest,
    ErrorResponse,
    GetRequest,
    LoginRequest,
    RegisterRequest,
    UserPostRequest,
)
from accounts.repositories.base import AccountStore
from accounts.repositories.memory_store import MemoryStore
from accounts.services.account_service import AccountService, Service
from accounts.services.resolver import Outcome, Resolver
from accounts.tracing import LoggingTracer, NullTracer

logger = logging.getLogger(__name__)

router = APIRouter()
basic_auth = HTTPBasic()

_store = None
_service = None
_resolver = None


def get_store() -> AccountStore:
    """Get account store instance."""
    global _store
    if _store is None:
        _store = MemoryStore()
    return _store


def get_service(store: AccountStore = Depends(get_store)) -> Service:
    """Get account service instance."""
    global _service
    if _service is None:
        _service = AccountService(store, service_name=get_settings().service_name)
    return _service


def get_resolver(service: Service = Depends(get_service)) -> Resolver:
    """Get resolver instance."""
    global _resolver
    if _resolver is None:
        settings = get_settings()
        tracer = LoggingTracer() if settings.tracing_enabled else NullTracer()
        _resolver = Resolver(service, tracer=tracer, service_name=settings.service_name)
    return _resolver


def render(outcome: Outcome) -> JSONResponse:
    """Encode an outcome; a propagated error becomes an error body with its status."""
    if outcome.error is not None:
        status = HTTPStatus(outcome.error.status_code)
        logger.debug("Translating %s to HTTP %d", type(outcome.error).__name__, status.value)
        body = ErrorResponse(error=outcome.error.message, status_code=status.value, status_text=status.phrase)
        return JSONResponse(status_code=status.value, content=body.model_dump())
    return JSONResponse(content=jsonable_encoder(outcome.response, by_alias=True))


@router.get("/login")
def login(
    credentials: HTTPBasicCredentials = Depends(basic_auth),
    resolver: Resolver = Depends(get_resolver),
):
    """Authenticate with HTTP Basic credentials and return the user."""
    return render(resolver.login(LoginRequest(username=credentials.username, password=credentials.password)))


@router.post("/register")
def register(request: RegisterRequest, resolver: Resolver = Depends(get_resolver)):
    """Register a new account."""
    return render(resolver.register(request))


@router.get("/customers")
@router.get("/customers/{id}")
@router.get("/customers/{id}/{attr}")
def get_users(id: str = "", attr: str = "", resolver: Resolver = Depends(get_resolver)):
    """List users, get one user, or get one user's addresses or cards."""
    return render(resolver.get_users(GetRequest(id=id, attr=attr)))


@router.post("/customers")
def post_user(request: UserPostRequest, resolver: Resolver = Depends(get_resolver)):
    """Create a user."""
    return render(resolver.post_user(request))


@router.delete("/customers/{id}")
def delete_user(id: str, resolver: Resolver = Depends(get_resolver)):
    """Delete a user together with its addresses and cards."""
    return render(resolver.delete(DeleteRequest(entity=EntityKind.CUSTOMERS, id=id)))


@router.get("/addresses")
@router.get("/addresses/{id}")
def get_addresses(id: str = "", resolver: Resolver = Depends(get_resolver)):
    """List addresses or get one address."""
    return render(resolver.get_addresses(GetRequest(id=id)))


@router.post("/addresses")
def post_address(request: AddressPostRequest, resolver: Resolver = Depends(get_resolver)):
    """Create an address for a user."""
    return render(resolver.post_address(request))


@router.delete("/addresses/{id}")
def delete_address(id: str, resolver: Resolver = Depends(get_resolver)):
    """Delete an address."""
    return render(resolver.delete(DeleteRequest(entity=EntityKind.ADDRESSES, id=id)))


@router.get("/cards")
@router.get("/cards/{id}")
def get_cards(id: str = "", resolver: Resolver = Depends(get_resolver)):
    """List cards or get one card. Card numbers are masked."""
    return render(resolver.get_cards(GetRequest(id=id)))


@router.post("/cards")
def post_card(request: CardPostRequest, resolver: Resolver = Depends(get_resolver)):
    """Create a card for a user."""
    return render(resolver.post_card(request))


@router.delete("/cards/{id}")
def delete_card(id: str, resolver: Resolver = Depends(get_resolver)):
    """Delete a card."""
    return render(resolver.delete(DeleteRequest(entity=EntityKind.CARDS, id=id)))


@router.get("/health")
def health(resolver: Resolver = Depends(get_resolver)):
    """Health of the service and its store."""
    return render(resolver.health())
