"""Data Transfer Objects - API contracts."""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from accounts.models.domain import EntityKind, HealthStatus


class _CamelModel(BaseModel):
    """Accepts both field names and their JSON aliases."""
    model_config = ConfigDict(populate_by_name=True)


class AddressDTO(_CamelModel):
    """Address data for API responses."""
    id: str = ""
    street: str = ""
    number: str = ""
    country: str = ""
    city: str = ""
    postcode: str = ""


class CardDTO(_CamelModel):
    """Card data for API responses. ``long_num`` is always masked."""
    id: str = ""
    long_num: str = Field("", alias="longNum")
    expires: str = ""
    ccv: str = ""


class UserDTO(_CamelModel):
    """User data for API responses; credentials are never included."""
    id: str = ""
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email: str = ""
    username: str = ""
    addresses: List[AddressDTO] = Field(default_factory=list)
    cards: List[CardDTO] = Field(default_factory=list)


class GetRequest(BaseModel):
    """Resource-view selector shared by the user, address and card reads."""
    id: str = ""
    attr: str = ""


class LoginRequest(BaseModel):
    """Credentials pair."""
    username: str
    password: str


class RegisterRequest(_CamelModel):
    """Request to register a new account."""
    username: str
    password: str
    email: str = ""
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")


class UserPostRequest(_CamelModel):
    """Request to create a user from a full user value."""
    username: str = ""
    password: str = ""
    email: str = ""
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")


class AddressPostRequest(_CamelModel):
    """Address value plus the id of the owning user."""
    street: str = ""
    number: str = ""
    country: str = ""
    city: str = ""
    postcode: str = ""
    user_id: str = Field("", alias="userID")


class CardPostRequest(_CamelModel):
    """Card value plus the id of the owning user."""
    long_num: str = Field("", alias="longNum")
    expires: str = ""
    ccv: str = ""
    user_id: str = Field("", alias="userID")


class DeleteRequest(BaseModel):
    """Entity kind tag and identifier to delete."""
    entity: EntityKind
    id: str


class HealthRequest(BaseModel):
    """Health check carries no parameters."""


class UserResponse(BaseModel):
    """Response for a successful login."""
    user: UserDTO


class UsersResponse(_CamelModel):
    """Collection of users."""
    users: List[UserDTO] = Field(default_factory=list, alias="customer")


class AddressesResponse(_CamelModel):
    """Collection of addresses."""
    addresses: List[AddressDTO] = Field(default_factory=list, alias="address")


class CardsResponse(_CamelModel):
    """Collection of cards."""
    cards: List[CardDTO] = Field(default_factory=list, alias="card")


class EmbedResponse(_CamelModel):
    """Collection envelope: any collection tagged under ``_embedded``."""
    embedded: Union[UsersResponse, AddressesResponse, CardsResponse] = Field(alias="_embedded")


class PostResponse(BaseModel):
    """Identifier of a created entity."""
    id: str = ""


class StatusResponse(BaseModel):
    """Boolean outcome of a delete."""
    status: bool


class HealthDTO(BaseModel):
    """Health record for API responses."""
    service: str
    status: HealthStatus
    time: Optional[datetime] = None


class HealthResponse(BaseModel):
    """Response with every subsystem health record."""
    health: List[HealthDTO]


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    status_code: int
    status_text: str
