from dataclasses import dataclass

from django.conf import settings

from fleet.exceptions import ValidationFailed

from .matching import route_distance_km

# Constants for delivery cost and emissions estimates
MARKET_RATE_PREMIUM = 1.3   # market cost is 30% above the matched cost
CO2_KG_PER_LITRE = 2.68     # diesel
CO2_SAVING_RATIO = 0.20     # saved vs. empty running


@dataclass
class DeliveryMetrics:
    actual_cost: float
    market_cost: float
    savings: float
    fuel_used: float
    co2_emitted: float
    co2_saved: float


def delivery_metrics(truck, distance=None):
    """Cost and CO2 figures for ``truck`` covering ``distance`` km."""
    distance = route_distance_km() if distance is None else distance
    premium = getattr(settings, "MARKET_RATE_PREMIUM", MARKET_RATE_PREMIUM)
    co2_per_litre = getattr(settings, "CO2_KG_PER_LITRE", CO2_KG_PER_LITRE)
    saving_ratio = getattr(settings, "CO2_SAVING_RATIO", CO2_SAVING_RATIO)

    if truck.fuel_efficiency <= 0:
        raise ValidationFailed(
            f"Truck {truck} has no fuel efficiency on record; cannot compute emissions.",
            rule="fuel_efficiency",
        )

    actual_cost = distance * truck.cost_per_km
    market_cost = actual_cost * premium
    fuel_used = distance / truck.fuel_efficiency
    co2_emitted = fuel_used * co2_per_litre

    return DeliveryMetrics(
        actual_cost=actual_cost,
        market_cost=market_cost,
        savings=market_cost - actual_cost,
        fuel_used=fuel_used,
        co2_emitted=co2_emitted,
        co2_saved=round(co2_emitted * saving_ratio, 2),
    )
