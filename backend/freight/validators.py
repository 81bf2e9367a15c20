from fleet.exceptions import CapacityExceeded, NotFound, StateConflict, TruckUnavailable

from .matching import is_feasible
from .models import Shipment


def validate_shipment_booking(shipment, truck):
    """Raise unless ``truck`` may be booked for ``shipment`` right now."""
    if shipment is None or truck is None:
        raise NotFound("Shipment or Truck not found.")

    if shipment.status != Shipment.Status.PENDING:
        raise StateConflict(
            f"Shipment {shipment.pk} is already {shipment.get_status_display().lower()}."
        )

    if not truck.is_available:
        raise TruckUnavailable(f"Truck {truck} is already booked.")

    # The ranked list only offers feasible trucks; a direct booking is re-checked here.
    if not is_feasible(shipment, truck):
        raise CapacityExceeded(
            f"Shipment ({shipment.total_weight:g}kg, {shipment.total_volume:g}m3) exceeds "
            f"truck capacity ({truck.capacity_weight:g}kg, {truck.capacity_volume:g}m3)"
        )
