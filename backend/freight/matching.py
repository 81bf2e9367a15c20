"""
Shipment-to-truck matching.

A truck is a candidate when it can hold the shipment's weight and volume.
Candidates are ranked cheapest first over a fixed route distance, since real
distance lookup is not wired in. Ties keep the pool's order.
"""
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from django.conf import settings

DEFAULT_ROUTE_DISTANCE_KM = 500.0


def route_distance_km() -> float:
    return float(getattr(settings, "FIXED_ROUTE_DISTANCE_KM", DEFAULT_ROUTE_DISTANCE_KM))


@dataclass
class ShipmentSize:
    total_weight: float
    total_volume: float


@dataclass
class RankedCandidate:
    truck: Any
    utilization: float     # % of truck volume used; informational
    estimated_cost: float
    score: float           # lower is better


def is_feasible(shipment, truck) -> bool:
    return (
        truck.capacity_weight >= shipment.total_weight
        and truck.capacity_volume >= shipment.total_volume
    )


def utilization(shipment, truck) -> float:
    # Only called for feasible trucks, where capacity_volume > 0 whenever total_volume > 0.
    if shipment.total_volume <= 0:
        return 0.0
    return shipment.total_volume / truck.capacity_volume * 100


def rank_trucks(shipment, candidate_pool: Iterable, route_distance: Optional[float] = None) -> List[RankedCandidate]:
    """
    Drop the trucks that cannot carry ``shipment`` and rank the rest by
    estimated cost, cheapest first.

    ``shipment`` needs ``total_weight`` and ``total_volume``; each truck needs
    ``capacity_weight``, ``capacity_volume`` and ``cost_per_km``.
    """
    distance = route_distance_km() if route_distance is None else route_distance

    ranked = []
    for truck in candidate_pool:
        if not is_feasible(shipment, truck):
            continue
        cost = distance * truck.cost_per_km
        ranked.append(RankedCandidate(
            truck=truck,
            utilization=utilization(shipment, truck),
            estimated_cost=cost,
            score=cost,
        ))

    # sorted() is stable, so equal scores keep pool order
    return sorted(ranked, key=lambda c: c.score)
