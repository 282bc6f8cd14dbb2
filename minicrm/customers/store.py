"""CustomerDirectory abstract interface."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from minicrm.customers.models import Customer, NewCustomer


class CustomerDirectory(ABC):
    """Abstract interface for the customer directory.

    Customers are listed in insertion order so that segment resolution
    over the full set is deterministic.
    """

    @abstractmethod
    async def list_customers(self) -> list[Customer]:
        """List every customer in insertion order."""
        pass

    @abstractmethod
    async def add_customer(self, data: NewCustomer | dict[str, Any]) -> Customer:
        """Add a customer, returning the stored record.

        Raises:
            ValidationError: If the data cannot form a valid customer
        """
        pass

    @abstractmethod
    async def get_customer(self, customer_id: UUID) -> Customer | None:
        """Get a customer by ID."""
        pass
