"""In-memory implementation of CustomerDirectory."""

from typing import Any
from uuid import UUID

import pydantic

from minicrm.customers.models import Customer, NewCustomer
from minicrm.customers.store import CustomerDirectory
from minicrm.errors import ConflictError, ValidationError
from minicrm.observability.logging import get_logger

logger = get_logger(__name__)


class InMemoryCustomerDirectory(CustomerDirectory):
    """In-memory implementation of CustomerDirectory for testing and development."""

    def __init__(self, customers: list[Customer] | None = None) -> None:
        """Initialize storage, optionally seeded with existing customers."""
        self._customers: dict[UUID, Customer] = {}
        for customer in customers or []:
            self._insert(customer)

    async def list_customers(self) -> list[Customer]:
        """List every customer in insertion order."""
        return list(self._customers.values())

    async def add_customer(self, data: NewCustomer | dict[str, Any]) -> Customer:
        """Add a customer, returning the stored record."""
        try:
            new_customer = (
                data if isinstance(data, NewCustomer) else NewCustomer.model_validate(data)
            )
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid customer data: {e}", cause=e) from e

        customer = new_customer.build()
        self._insert(customer)
        logger.info("customer_added", customer_id=str(customer.id), email=customer.email)
        return customer

    async def get_customer(self, customer_id: UUID) -> Customer | None:
        """Get a customer by ID."""
        return self._customers.get(customer_id)

    def _insert(self, customer: Customer) -> None:
        if customer.id in self._customers:
            raise ConflictError(f"Customer already exists: {customer.id}")
        self._customers[customer.id] = customer
