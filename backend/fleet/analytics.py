from django.db.models import Sum
from django.utils import timezone

from .models import Driver, Expense, FuelLog, Maintenance, Trip, Vehicle


def _cost_by_vehicle(model):
    rows = model.objects.order_by().values("vehicle_id").annotate(total=Sum("cost"))
    return {row["vehicle_id"]: row["total"] for row in rows}


def _completed_trips():
    return Trip.objects.filter(status=Trip.Status.COMPLETED)


def vehicle_cost_report():
    """Per-vehicle fuel and maintenance totals, ordered by vehicle name."""
    vehicles = Vehicle.objects.annotate(
        fuel_liters=Sum("fuel_logs__liters"),
    ).order_by("name", "id")
    fuel_cost = _cost_by_vehicle(FuelLog)
    maintenance_cost = _cost_by_vehicle(Maintenance)
    revenue = {
        row["vehicle_id"]: row["total"]
        for row in _completed_trips().order_by().values("vehicle_id").annotate(total=Sum("revenue"))
    }

    report = []
    for v in vehicles:
        total_liters = v.fuel_liters or 0.0
        total_fuel_cost = fuel_cost.get(v.pk) or 0.0
        total_maintenance_cost = maintenance_cost.get(v.pk) or 0.0
        operational = total_fuel_cost + total_maintenance_cost
        total_revenue = revenue.get(v.pk) or 0.0

        # Guard the divisions for vehicles with no fuel or no distance yet.
        efficiency = v.odometer / total_liters if total_liters > 0 else 0.0
        cost_per_km = operational / v.odometer if v.odometer > 0 else 0.0

        report.append({
            "id": v.pk,
            "name": v.name,
            "licensePlate": v.license_plate,
            "odometer": v.odometer,
            "totalFuelLiters": total_liters,
            "totalFuelCost": total_fuel_cost,
            "totalMaintenanceCost": total_maintenance_cost,
            "totalOperationalCost": operational,
            "totalRevenue": total_revenue,
            "fuelEfficiency": round(efficiency, 2),  # km/L
            "costPerKm": round(cost_per_km, 2),
        })
    return report


def dashboard_kpis(now=None):
    now = now or timezone.now()
    vehicles = Vehicle.objects.all()
    total = vehicles.count()
    on_trip = vehicles.filter(status=Vehicle.Status.ON_TRIP).count()

    fuel = FuelLog.objects.aggregate(total=Sum("cost"))["total"] or 0.0
    other = Expense.objects.aggregate(total=Sum("amount"))["total"] or 0.0
    maintenance = Maintenance.objects.aggregate(total=Sum("cost"))["total"] or 0.0
    revenue = _completed_trips().aggregate(total=Sum("revenue"))["total"] or 0.0
    expenses = fuel + other + maintenance

    return {
        "activeFleetCount": vehicles.filter(
            status__in=[Vehicle.Status.AVAILABLE, Vehicle.Status.ON_TRIP]
        ).count(),
        "maintenanceAlerts": Maintenance.objects.filter(status=Maintenance.Status.OPEN).count(),
        "utilizationRate": round(on_trip / total * 100) if total else 0,
        "pendingCargo": Trip.objects.filter(status=Trip.Status.DISPATCHED).count(),
        "totalRevenue": revenue,
        "totalExpenses": expenses,
        "profit": revenue - expenses,
        "availableDrivers": Driver.objects.filter(
            status=Driver.Status.ON_DUTY, license_expiry__gte=now
        ).count(),
    }
