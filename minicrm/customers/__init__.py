"""Customers: the records segments are resolved against."""

from minicrm.customers.models import Customer, NewCustomer
from minicrm.customers.store import CustomerDirectory
from minicrm.customers.stores import InMemoryCustomerDirectory

__all__ = [
    "Customer",
    "NewCustomer",
    "CustomerDirectory",
    "InMemoryCustomerDirectory",
]
