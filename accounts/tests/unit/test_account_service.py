"""Unit tests for AccountService."""

from unittest.mock import Mock

import pytest

from accounts.errors import AuthError, NotFoundError, StoreError, ValidationError
from accounts.models.domain import Address, Card, EntityKind, HealthStatus, User
from accounts.services.account_service import AccountService, calculate_pass_hash


class TestRegistrationAndLogin:
    """Test credential handling."""

    def test_register_stores_salted_hash(self, store, service):
        """The stored password is the salted digest, never the plain text."""
        user_id = service.register("eve", "secret", "eve@example.com", "Eve", "Berger")

        stored = store.get_user(user_id)
        assert stored.username == "eve"
        assert stored.salt
        assert stored.password != "secret"
        assert stored.password == calculate_pass_hash("secret", stored.salt)

    def test_register_duplicate_username(self, service):
        service.register("eve", "secret", "", "", "")

        with pytest.raises(ValidationError, match="already exists"):
            service.register("eve", "other", "", "", "")

    @pytest.mark.parametrize("username,password", [("", "secret"), ("eve", "")])
    def test_register_requires_credentials(self, service, username, password):
        with pytest.raises(ValidationError):
            service.register(username, password, "", "", "")

    def test_login_returns_hydrated_user_with_masked_cards(self, store, service):
        user_id = service.register("eve", "secret", "eve@example.com", "Eve", "Berger")
        store.create_address(Address(street="Main St"), user_id)
        store.create_card(Card(long_num="4111111111111111"), user_id)

        user = service.login("eve", "secret")

        assert user.id == user_id
        assert [a.street for a in user.addresses] == ["Main St"]
        assert user.cards[0].long_num == "************1111"

    def test_login_wrong_password(self, service):
        service.register("eve", "secret", "", "", "")

        with pytest.raises(AuthError):
            service.login("eve", "wrong")

    def test_login_unknown_user(self, service):
        with pytest.raises(AuthError):
            service.login("nobody", "secret")


class TestReads:
    """Test get operations."""

    def test_get_users_empty_id_lists_all(self, service, seeded):
        users = service.get_users("")

        assert [u.id for u in users] == seeded["user_ids"]

    def test_get_users_by_id(self, service, seeded):
        users = service.get_users(seeded["user_ids"][1])

        assert len(users) == 1
        assert users[0].username == "user1"

    def test_get_users_unknown_id_is_empty(self, service, seeded):
        assert service.get_users("ghost") == []

    def test_get_addresses(self, service, seeded):
        assert len(service.get_addresses("")) == 1
        assert service.get_addresses(seeded["address_id"])[0].city == "London"
        assert service.get_addresses("ghost") == []

    def test_get_cards_masks_numbers(self, service, seeded):
        cards = service.get_cards(seeded["card_id"])

        assert cards[0].long_num == "************1111"
        assert service.get_cards("")[0].long_num == "************1111"
        assert service.get_cards("ghost") == []

    def test_get_user_attributes_only_loads_own_entities(self, service, seeded):
        owner_id, other_id = seeded["user_ids"][0], seeded["user_ids"][1]

        owner = service.get_user_attributes(service.get_users(owner_id)[0])
        other = service.get_user_attributes(service.get_users(other_id)[0])

        assert [a.id for a in owner.addresses] == [seeded["address_id"]]
        assert [c.id for c in owner.cards] == [seeded["card_id"]]
        assert other.addresses == []
        assert other.cards == []

    def test_hydration_does_not_mutate_store(self, store, service, seeded):
        owner_id = seeded["user_ids"][0]

        service.get_user_attributes(service.get_users(owner_id)[0])

        assert store.get_card(seeded["card_id"]).long_num == "4111111111111111"
        assert store.get_user(owner_id).addresses == []


class TestWrites:
    """Test post and delete operations."""

    def test_post_address_requires_owner(self, service):
        with pytest.raises(ValidationError, match="userID"):
            service.post_address(Address(street="Main St"), "")

    def test_post_address_unknown_owner(self, service):
        with pytest.raises(NotFoundError):
            service.post_address(Address(street="Main St"), "ghost")

    def test_post_card_requires_number(self, service, seeded):
        with pytest.raises(ValidationError):
            service.post_card(Card(), seeded["user_ids"][0])

    def test_post_user_ignores_supplied_id(self, store, service):
        user_id = service.post_user(User(id="forced", username="bob", password="pw"))

        assert user_id != "forced"
        assert store.get_user(user_id).username == "bob"

    def test_delete_user_cascades(self, store, service, seeded):
        owner_id = seeded["user_ids"][0]

        service.delete(EntityKind.CUSTOMERS, owner_id)

        assert store.get_user(owner_id) is None
        assert store.get_address(seeded["address_id"]) is None
        assert store.get_card(seeded["card_id"]) is None

    def test_delete_missing_entity(self, service):
        with pytest.raises(NotFoundError):
            service.delete(EntityKind.CARDS, "ghost")

    def test_delete_requires_id(self, service):
        with pytest.raises(ValidationError):
            service.delete(EntityKind.CARDS, "")


class TestStoreFailures:
    """Backend failures surface as StoreError."""

    def test_unexpected_store_exception_becomes_store_error(self):
        store = Mock()
        store.get_users.side_effect = ConnectionError("connection refused")
        service = AccountService(store)

        with pytest.raises(StoreError, match="connection refused"):
            service.get_users("")

    def test_account_errors_pass_through(self):
        store = Mock()
        store.delete.side_effect = NotFoundError("missing")
        service = AccountService(store)

        with pytest.raises(NotFoundError):
            service.delete(EntityKind.ADDRESSES, "a1")


class TestHealth:
    """Test health reporting."""

    def test_health_ok(self, store):
        service = AccountService(store, service_name="user")

        records = service.health()

        assert [(h.service, h.status) for h in records] == [
            ("user", HealthStatus.OK),
            ("user-db", HealthStatus.OK),
        ]
        assert all(h.time is not None for h in records)

    def test_health_reports_unreachable_store(self):
        store = Mock()
        store.ping.side_effect = ConnectionError("down")
        service = AccountService(store, service_name="accounts")

        records = service.health()

        assert records[0].status == HealthStatus.OK
        assert records[1].service == "accounts-db"
        assert records[1].status == HealthStatus.ERROR
