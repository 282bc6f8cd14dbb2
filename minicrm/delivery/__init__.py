"""Delivery simulation for campaign communication logs."""

from minicrm.delivery.simulator import DeliverySimulator, SimulationResult

__all__ = ["DeliverySimulator", "SimulationResult"]
