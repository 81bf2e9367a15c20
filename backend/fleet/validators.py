"""
Business rules checked before a trip is dispatched.

Rules run in a fixed order and the first failure wins, so a caller always
gets the most basic problem with its request first.
"""
import logging

from django.utils import timezone

from .exceptions import CapacityExceeded, ComplianceBlocked, NotFound

logger = logging.getLogger(__name__)


def _fmt(value):
    # 650.0 -> "650", 12.5 -> "12.5"
    return f"{value:g}"


def validate_trip_assignment(vehicle, driver, cargo_weight, now=None):
    """
    Raise if ``driver`` may not carry ``cargo_weight`` kg in ``vehicle``.

    Availability (vehicle AVAILABLE, driver ON_DUTY) is not checked here; the
    dispatch transition enforces it with status-guarded updates.
    """
    if vehicle is None or driver is None:
        raise NotFound("Vehicle or Driver not found.")

    if cargo_weight > vehicle.max_load_capacity:
        raise CapacityExceeded(
            f"Cargo ({_fmt(cargo_weight)}kg) exceeds vehicle capacity ({_fmt(vehicle.max_load_capacity)}kg)"
        )

    now = now or timezone.now()
    if driver.license_expiry < now:
        raise ComplianceBlocked("Driver's license is expired. Assignment blocked.")

    if driver.status == driver.Status.SUSPENDED:
        raise ComplianceBlocked(
            f"Driver {driver.name} is suspended. Assignment blocked.", rule="driver_suspended"
        )

    logger.debug(
        "Trip assignment ok: vehicle=%s driver=%s cargo=%s", vehicle.pk, driver.pk, cargo_weight
    )
