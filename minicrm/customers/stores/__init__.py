"""Customer directory implementations."""

from minicrm.customers.store import CustomerDirectory
from minicrm.customers.stores.inmemory import InMemoryCustomerDirectory

__all__ = [
    "CustomerDirectory",
    "InMemoryCustomerDirectory",
]
