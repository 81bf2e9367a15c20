"""
Shipment lifecycle: PENDING -> ASSIGNED (book) -> DELIVERED (deliver).

Booking locks the truck, delivery frees it and records cost/CO2 figures.
Both run as one transaction with status-guarded writes.
"""
import logging

from django.db import transaction
from django.utils import timezone

from fleet.exceptions import BadInput, NotAssigned, NotFound, StateConflict, TruckUnavailable
from fleet.utils import guarded_update, locked_or_none, parse_number

from .matching import rank_trucks
from .metrics import delivery_metrics
from .models import Shipment, Truck
from .validators import validate_shipment_booking

logger = logging.getLogger(__name__)


def available_trucks():
    return Truck.objects.filter(is_available=True).select_related("dealer").order_by("id")


def create_shipment(warehouse, origin, destination, weight, volume):
    """Save a PENDING shipment and rank the currently available trucks for it."""
    if warehouse is None:
        raise NotFound("Warehouse user not found.")
    if not origin or not destination:
        raise BadInput("origin and destination are required.")
    total_weight = parse_number(weight, "weight")
    total_volume = parse_number(volume, "volume")

    shipment = Shipment.objects.create(
        warehouse=warehouse,
        origin=origin,
        destination=destination,
        total_weight=total_weight,
        total_volume=total_volume,
        status=Shipment.Status.PENDING,
    )
    matches = rank_trucks(shipment, available_trucks())

    logger.info("Shipment %s created: %s candidate truck(s)", shipment.pk, len(matches))
    return shipment, matches


def book_shipment(shipment_id, truck_id):
    with transaction.atomic():
        shipment = locked_or_none(Shipment, shipment_id)
        truck = locked_or_none(Truck, truck_id)
        validate_shipment_booking(shipment, truck)

        if not guarded_update(Truck, truck.pk, {"is_available": True}, is_available=False):
            raise TruckUnavailable(f"Truck {truck} was booked by another request.")

        if not guarded_update(
            Shipment,
            shipment.pk,
            {"status": Shipment.Status.PENDING},
            status=Shipment.Status.ASSIGNED,
            assigned_truck=truck,
        ):
            raise StateConflict(f"Shipment {shipment.pk} was booked by another request.")

    shipment.refresh_from_db()
    logger.info("Shipment %s booked on truck %s", shipment.pk, truck.pk)
    return shipment


def deliver_shipment(shipment_id, now=None):
    now = now or timezone.now()

    with transaction.atomic():
        shipment = locked_or_none(Shipment, shipment_id)
        if shipment is None:
            raise NotFound(f"Shipment {shipment_id} not found.")
        if shipment.status == Shipment.Status.DELIVERED:
            raise StateConflict(f"Shipment {shipment.pk} is already delivered.")
        if shipment.status != Shipment.Status.ASSIGNED or shipment.assigned_truck_id is None:
            raise NotAssigned(f"Shipment {shipment.pk} has no assigned truck.")

        truck = Truck.objects.select_for_update().get(pk=shipment.assigned_truck_id)
        metrics = delivery_metrics(truck)

        if not guarded_update(
            Shipment,
            shipment.pk,
            {"status": Shipment.Status.ASSIGNED},
            status=Shipment.Status.DELIVERED,
            estimated_cost=metrics.actual_cost,
            market_cost=metrics.market_cost,
            savings=metrics.savings,
            co2_saved=metrics.co2_saved,
            delivered_at=now,
        ):
            raise StateConflict(f"Shipment {shipment.pk} was delivered by another request.")

        Truck.objects.filter(pk=truck.pk).update(is_available=True)

    shipment.refresh_from_db()
    logger.info(
        "Shipment %s delivered by truck %s: cost=%s co2_saved=%skg",
        shipment.pk, truck.pk, metrics.actual_cost, metrics.co2_saved,
    )
    return shipment
