"""Unit tests for customer models and the in-memory directory."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from minicrm.customers.models import Customer, NewCustomer
from minicrm.customers.stores.inmemory import InMemoryCustomerDirectory
from minicrm.errors import ConflictError, ValidationError
from tests.factories.crm import CustomerFactory


class TestNewCustomer:
    """Tests for NewCustomer form coercion."""

    def test_parses_numeric_strings(self) -> None:
        data = NewCustomer.model_validate({"name": "Asha", "spend": "12000.5", "visits": "4"})
        assert data.spend == 12000.5
        assert data.visits == 4

    def test_blank_numbers_default_to_zero(self) -> None:
        data = NewCustomer.model_validate({"name": "Asha", "spend": "", "visits": " "})
        assert data.spend == 0.0
        assert data.visits == 0

    def test_unparsable_numbers_default_to_zero(self) -> None:
        data = NewCustomer.model_validate({"name": "Asha", "spend": "lots", "visits": "many"})
        assert data.spend == 0.0
        assert data.visits == 0

    def test_fractional_visits_truncate(self) -> None:
        data = NewCustomer.model_validate({"name": "Asha", "visits": "3.7"})
        assert data.visits == 3

    def test_name_is_stripped(self) -> None:
        assert NewCustomer(name="  Asha  ").name == "Asha"

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValueError):
            NewCustomer(name="   ")

    def test_camel_case_input(self) -> None:
        data = NewCustomer.model_validate(
            {"name": "Asha", "lastActive": "2024-05-01T10:00:00+00:00"}
        )
        assert data.last_active == datetime(2024, 5, 1, 10, tzinfo=UTC)

    def test_build_defaults_last_active_to_now(self) -> None:
        before = datetime.now(UTC)
        customer = NewCustomer(name="Asha", last_active="").build()
        assert customer.last_active >= before


class TestCustomer:
    """Tests for the Customer record."""

    def test_is_frozen(self) -> None:
        customer = CustomerFactory.create()
        with pytest.raises(ValueError):
            customer.spend = 10  # type: ignore[misc]

    def test_negative_spend_rejected(self) -> None:
        with pytest.raises(ValueError):
            Customer(name="Asha", spend=-1)

    def test_to_record_uses_camel_case(self) -> None:
        record = CustomerFactory.create(name="Asha").to_record()
        assert "lastActive" in record
        assert "createdAt" in record
        assert record["name"] == "Asha"


class TestInMemoryCustomerDirectory:
    """Tests for InMemoryCustomerDirectory."""

    @pytest.mark.asyncio
    async def test_add_and_get(self) -> None:
        directory = InMemoryCustomerDirectory()

        customer = await directory.add_customer({"name": "Asha", "spend": "500"})

        assert await directory.get_customer(customer.id) == customer
        assert customer.spend == 500.0

    @pytest.mark.asyncio
    async def test_add_accepts_model(self) -> None:
        directory = InMemoryCustomerDirectory()
        customer = await directory.add_customer(NewCustomer(name="Ravi", visits=3))
        assert customer.visits == 3

    @pytest.mark.asyncio
    async def test_list_in_insertion_order(self) -> None:
        directory = InMemoryCustomerDirectory()
        for name in ["one", "two", "three"]:
            await directory.add_customer({"name": name})

        customers = await directory.list_customers()

        assert [c.name for c in customers] == ["one", "two", "three"]

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self) -> None:
        assert await InMemoryCustomerDirectory().get_customer(uuid4()) is None

    @pytest.mark.asyncio
    async def test_invalid_data_raises_validation_error(self) -> None:
        directory = InMemoryCustomerDirectory()

        with pytest.raises(ValidationError):
            await directory.add_customer({"name": ""})

        assert await directory.list_customers() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("visits", [float("inf"), float("-inf"), float("nan")])
    async def test_non_finite_visits_raise_validation_error(self, visits: float) -> None:
        directory = InMemoryCustomerDirectory()

        with pytest.raises(ValidationError):
            await directory.add_customer({"name": "Asha", "visits": visits})

        assert await directory.list_customers() == []

    def test_duplicate_seed_raises_conflict(self) -> None:
        customer = CustomerFactory.create()
        with pytest.raises(ConflictError):
            InMemoryCustomerDirectory([customer, customer])
