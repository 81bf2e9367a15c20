"""
Guarded state transitions for vehicles, drivers, trips and maintenance tickets.

Each transition re-reads its rows inside one transaction, validates, and writes
with status-guarded updates so that two requests racing for the same vehicle
cannot both win. Any failure rolls the whole transition back.
"""
import logging

from django.db import transaction
from django.db.models import ProtectedError
from django.utils import timezone

from .exceptions import BadInput, NotFound, OdometerRegression, StateConflict
from .models import Driver, FuelLog, Maintenance, Trip, Vehicle
from .utils import guarded_update, locked_or_none, parse_number
from .validators import validate_trip_assignment

logger = logging.getLogger(__name__)


def _status_label(obj):
    return obj.get_status_display().lower()


# -----------------------------
# Trips
# -----------------------------
def dispatch_trip(vehicle_id, driver_id, cargo_weight, actor=None, now=None, revenue=0):
    """DISPATCH: create a trip and put its vehicle and driver on the road."""
    weight = parse_number(cargo_weight, "cargo_weight")
    expected_revenue = parse_number(revenue or 0, "revenue")

    with transaction.atomic():
        vehicle = locked_or_none(Vehicle, vehicle_id)
        driver = locked_or_none(Driver, driver_id)
        validate_trip_assignment(vehicle, driver, weight, now=now)

        if not guarded_update(
            Vehicle, vehicle.pk, {"status": Vehicle.Status.AVAILABLE}, status=Vehicle.Status.ON_TRIP
        ):
            raise StateConflict(f"Vehicle {vehicle} is {_status_label(vehicle)}, not available.")

        if not guarded_update(
            Driver, driver.pk, {"status": Driver.Status.ON_DUTY}, status=Driver.Status.ON_TRIP
        ):
            raise StateConflict(f"Driver {driver} is {_status_label(driver)}, not on duty.")

        vehicle.status = Vehicle.Status.ON_TRIP
        driver.status = Driver.Status.ON_TRIP

        trip = Trip.objects.create(
            vehicle=vehicle,
            driver=driver,
            cargo_weight=weight,
            revenue=expected_revenue,
            status=Trip.Status.DISPATCHED,
            start_odometer=vehicle.odometer,
            dispatched_by=actor,
        )

    logger.info("Trip %s dispatched: vehicle=%s driver=%s cargo=%skg", trip.pk, vehicle.pk, driver.pk, weight)
    return trip


def complete_trip(trip_id, final_odometer, vehicle_id=None, fuel_liters=0, fuel_cost=0, now=None):
    """
    COMPLETE: close a dispatched trip, free its vehicle and driver, and record
    fuel when any was reported.
    """
    odometer = parse_number(final_odometer, "final_odometer")
    liters = parse_number(fuel_liters or 0, "fuel_liters")
    cost = parse_number(fuel_cost or 0, "fuel_cost")
    now = now or timezone.now()

    with transaction.atomic():
        trip = locked_or_none(Trip, trip_id)
        if trip is None:
            raise NotFound(f"Trip {trip_id} not found.")
        if vehicle_id not in (None, "") and str(vehicle_id) != str(trip.vehicle_id):
            raise BadInput(f"Vehicle {vehicle_id} is not the vehicle of trip {trip.pk}.")
        if trip.status != Trip.Status.DISPATCHED:
            raise StateConflict(f"Trip {trip.pk} is already {_status_label(trip)}.")

        vehicle = Vehicle.objects.select_for_update().get(pk=trip.vehicle_id)
        if odometer < vehicle.odometer:
            raise OdometerRegression(
                f"Final odometer ({odometer:g}km) is below the recorded odometer ({vehicle.odometer:g}km)"
            )

        if not guarded_update(
            Trip,
            trip.pk,
            {"status": Trip.Status.DISPATCHED},
            status=Trip.Status.COMPLETED,
            completed_at=now,
            end_odometer=odometer,
        ):
            raise StateConflict(f"Trip {trip.pk} was completed by another request.")

        if not guarded_update(
            Vehicle,
            vehicle.pk,
            {"status": Vehicle.Status.ON_TRIP},
            status=Vehicle.Status.AVAILABLE,
            odometer=odometer,
        ):
            raise StateConflict(f"Vehicle {vehicle} is {_status_label(vehicle)}, not on a trip.")

        # A driver suspended mid-trip stays suspended.
        Driver.objects.filter(pk=trip.driver_id, status=Driver.Status.ON_TRIP).update(
            status=Driver.Status.ON_DUTY
        )

        if liters > 0 or cost > 0:
            FuelLog.objects.create(vehicle=vehicle, trip=trip, liters=liters, cost=cost)

    trip.refresh_from_db()
    logger.info("Trip %s completed: vehicle=%s odometer=%s", trip.pk, vehicle.pk, odometer)
    return trip


# -----------------------------
# Maintenance
# -----------------------------
def open_maintenance(vehicle_id, description, cost=0, actor=None):
    """Open a maintenance ticket and move the vehicle into the shop."""
    if not description or not str(description).strip():
        raise BadInput("description is required.")
    service_cost = parse_number(cost or 0, "cost")

    with transaction.atomic():
        vehicle = locked_or_none(Vehicle, vehicle_id)
        if vehicle is None:
            raise NotFound(f"Vehicle {vehicle_id} not found.")

        if not guarded_update(
            Vehicle, vehicle.pk, {"status": Vehicle.Status.AVAILABLE}, status=Vehicle.Status.IN_SHOP
        ):
            raise StateConflict(
                f"Vehicle {vehicle} is {_status_label(vehicle)}; only available vehicles can go to the shop."
            )

        vehicle.status = Vehicle.Status.IN_SHOP

        ticket = Maintenance.objects.create(
            vehicle=vehicle,
            description=str(description).strip(),
            cost=service_cost,
            created_by=actor,
        )

    logger.info("Maintenance %s opened for vehicle %s", ticket.pk, vehicle.pk)
    return ticket


def release_maintenance(vehicle_id, maintenance_id=None, now=None):
    """Resolve the vehicle's open ticket (or the one named) and make it available again."""
    now = now or timezone.now()

    with transaction.atomic():
        vehicle = locked_or_none(Vehicle, vehicle_id)
        if vehicle is None:
            raise NotFound(f"Vehicle {vehicle_id} not found.")

        tickets = Maintenance.objects.filter(vehicle=vehicle, status=Maintenance.Status.OPEN)
        if maintenance_id not in (None, ""):
            ticket = locked_or_none(Maintenance, maintenance_id)
            if ticket is None:
                raise NotFound(f"Maintenance ticket {maintenance_id} not found.")
            if ticket.vehicle_id != vehicle.pk:
                raise StateConflict(
                    f"Maintenance ticket {ticket.pk} belongs to vehicle {ticket.vehicle_id}, not {vehicle.pk}."
                )
            if ticket.status != Maintenance.Status.OPEN:
                raise StateConflict(f"Maintenance ticket {ticket.pk} is already resolved.")
            tickets = tickets.filter(pk=ticket.pk)

        if vehicle.status != Vehicle.Status.IN_SHOP:
            raise StateConflict(f"Vehicle {vehicle} is {_status_label(vehicle)}, not in the shop.")

        resolved = tickets.update(status=Maintenance.Status.RESOLVED, resolved_at=now)

        if not guarded_update(
            Vehicle, vehicle.pk, {"status": Vehicle.Status.IN_SHOP}, status=Vehicle.Status.AVAILABLE
        ):
            raise StateConflict(f"Vehicle {vehicle} left the shop in another request.")

    vehicle.refresh_from_db()
    logger.info("Vehicle %s released from maintenance (%s ticket(s) resolved)", vehicle.pk, resolved)
    return vehicle


# -----------------------------
# Registry
# -----------------------------
DUTY_STATUSES = (Driver.Status.ON_DUTY, Driver.Status.OFF_DUTY, Driver.Status.SUSPENDED)


def set_driver_status(driver_id, new_status):
    """Move a driver between ON_DUTY, OFF_DUTY and SUSPENDED. ON_TRIP belongs to trips."""
    if new_status not in DUTY_STATUSES:
        raise BadInput(f"Driver status must be one of {', '.join(DUTY_STATUSES)}.")

    with transaction.atomic():
        driver = locked_or_none(Driver, driver_id)
        if driver is None:
            raise NotFound(f"Driver {driver_id} not found.")
        if driver.status == new_status:
            return driver

        if not guarded_update(Driver, driver.pk, {"status__in": DUTY_STATUSES}, status=new_status):
            raise StateConflict(f"Driver {driver} is {_status_label(driver)}; complete the trip first.")

    driver.refresh_from_db()
    logger.info("Driver %s set %s", driver.pk, new_status)
    return driver


def delete_vehicle(vehicle_id):
    with transaction.atomic():
        vehicle = locked_or_none(Vehicle, vehicle_id)
        if vehicle is None:
            raise NotFound(f"Vehicle {vehicle_id} not found.")
        if vehicle.status != Vehicle.Status.AVAILABLE:
            raise StateConflict(
                f"Vehicle {vehicle} is {_status_label(vehicle)}; only available vehicles can be removed."
            )
        try:
            vehicle.delete()
        except ProtectedError:
            raise StateConflict(f"Vehicle {vehicle} has trip history and cannot be removed.") from None

    logger.info("Vehicle %s removed", vehicle_id)


def delete_driver(driver_id):
    with transaction.atomic():
        driver = locked_or_none(Driver, driver_id)
        if driver is None:
            raise NotFound(f"Driver {driver_id} not found.")
        if driver.status == Driver.Status.ON_TRIP:
            raise StateConflict(f"Driver {driver} is on a trip and cannot be removed.")
        try:
            driver.delete()
        except ProtectedError:
            raise StateConflict(f"Driver {driver} has trip history and cannot be removed.") from None

    logger.info("Driver %s removed", driver_id)


def delete_maintenance(maintenance_id):
    """Remove a resolved ticket. An open ticket is closed by releasing its vehicle."""
    with transaction.atomic():
        ticket = locked_or_none(Maintenance, maintenance_id)
        if ticket is None:
            raise NotFound(f"Maintenance ticket {maintenance_id} not found.")
        if ticket.status == Maintenance.Status.OPEN:
            raise StateConflict(
                f"Maintenance ticket {ticket.pk} is open; release vehicle {ticket.vehicle_id} first."
            )
        ticket.delete()

    logger.info("Maintenance %s removed", maintenance_id)
