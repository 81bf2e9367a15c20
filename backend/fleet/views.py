import logging

from django.db import transaction
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from . import analytics, lifecycle
from .exceptions import BadInput, FleetError, NotFound
from .models import Driver, Expense, FuelLog, Maintenance, Trip, Vehicle
from .serializers import (
    DriverSerializer,
    ExpenseSerializer,
    FuelLogSerializer,
    MaintenanceSerializer,
    TripSerializer,
    VehicleSerializer,
)
from .utils import locked_or_none

logger = logging.getLogger(__name__)


def error_response(exc):
    """Turn a rejected request into a JSON error carrying the rule that failed."""
    logger.warning("Rejected (%s): %s", exc.code, exc.message)
    return Response(exc.as_payload(), status=exc.status_code)


def current_actor(request):
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return user
    return None


def _camel(name):
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def param(data, name):
    """Request value for snake_case ``name``; the camelCase spelling is accepted too."""
    value = data.get(name)
    if value in (None, ""):
        value = data.get(_camel(name))
    return value


def require(data, *names):
    missing = [name for name in names if param(data, name) in (None, "")]
    if missing:
        raise BadInput(f"Missing required fields: {', '.join(missing)}")


def create_record(serializer_class, data):
    serializer = serializer_class(data=data)
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


def update_record(model, serializer_class, pk, data, before_save=None):
    """Partially update row ``pk`` under a row lock; ``before_save`` runs once the data is valid."""
    with transaction.atomic():
        instance = locked_or_none(model, pk)
        if instance is None:
            raise NotFound(f"{model.__name__} {pk} not found.")
        serializer = serializer_class(instance, data=data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        if before_save is not None:
            before_save(instance)
        serializer.save()
    return Response(serializer.data)


def get_record(model, serializer_class, pk):
    try:
        instance = model.objects.get(pk=pk)
    except model.DoesNotExist:
        return Response({"error": f"{model.__name__} {pk} not found."}, status=status.HTTP_404_NOT_FOUND)
    return Response(serializer_class(instance).data)


# -----------------------------
# Registry
# -----------------------------
class VehicleListView(APIView):
    def get(self, request):
        serializer = VehicleSerializer(Vehicle.objects.all(), many=True)
        return Response(serializer.data)

    def post(self, request):
        return create_record(VehicleSerializer, request.data)


class VehicleDetailView(APIView):
    def get(self, request, pk):
        return get_record(Vehicle, VehicleSerializer, pk)

    def patch(self, request, pk):
        try:
            return update_record(Vehicle, VehicleSerializer, pk, request.data)
        except FleetError as exc:
            return error_response(exc)

    def delete(self, request, pk):
        try:
            lifecycle.delete_vehicle(pk)
        except FleetError as exc:
            return error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)


class DriverListView(APIView):
    def get(self, request):
        serializer = DriverSerializer(Driver.objects.all(), many=True)
        return Response(serializer.data)

    def post(self, request):
        return create_record(DriverSerializer, request.data)


class DriverDetailView(APIView):
    def get(self, request, pk):
        return get_record(Driver, DriverSerializer, pk)

    def patch(self, request, pk):
        data = request.data.copy()
        new_status = data.get("status")
        data.pop("status", None)

        def apply_status(driver):
            if new_status not in (None, ""):
                driver.status = lifecycle.set_driver_status(driver.pk, new_status).status

        try:
            return update_record(Driver, DriverSerializer, pk, data, before_save=apply_status)
        except FleetError as exc:
            return error_response(exc)

    def delete(self, request, pk):
        try:
            lifecycle.delete_driver(pk)
        except FleetError as exc:
            return error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)


# -----------------------------
# Trips
# -----------------------------
class TripView(APIView):
    def get(self, request):
        trips = Trip.objects.select_related("vehicle", "driver")
        return Response(TripSerializer(trips, many=True).data)

    def post(self, request):
        data = request.data
        try:
            require(data, "vehicle_id", "driver_id", "cargo_weight")
            trip = lifecycle.dispatch_trip(
                param(data, "vehicle_id"),
                param(data, "driver_id"),
                param(data, "cargo_weight"),
                actor=current_actor(request),
                revenue=param(data, "revenue"),
            )
        except FleetError as exc:
            return error_response(exc)
        return Response(TripSerializer(trip).data, status=status.HTTP_201_CREATED)


class CompleteTripView(APIView):
    def post(self, request):
        data = request.data
        try:
            require(data, "trip_id", "final_odometer")
            trip = lifecycle.complete_trip(
                param(data, "trip_id"),
                param(data, "final_odometer"),
                vehicle_id=param(data, "vehicle_id"),
                fuel_liters=param(data, "fuel_liters"),
                fuel_cost=param(data, "fuel_cost"),
            )
        except FleetError as exc:
            return error_response(exc)
        return Response(TripSerializer(trip).data)


# -----------------------------
# Maintenance, fuel, expenses
# -----------------------------
class MaintenanceView(APIView):
    def get(self, request):
        logs = Maintenance.objects.select_related("vehicle")
        return Response(MaintenanceSerializer(logs, many=True).data)

    def post(self, request):
        data = request.data
        try:
            require(data, "vehicle_id", "description")
            ticket = lifecycle.open_maintenance(
                param(data, "vehicle_id"),
                data.get("description"),
                cost=data.get("cost"),
                actor=current_actor(request),
            )
        except FleetError as exc:
            return error_response(exc)
        return Response(MaintenanceSerializer(ticket).data, status=status.HTTP_201_CREATED)

    def patch(self, request):
        data = request.data
        try:
            require(data, "vehicle_id")
            vehicle = lifecycle.release_maintenance(
                param(data, "vehicle_id"), maintenance_id=param(data, "maintenance_id")
            )
        except FleetError as exc:
            return error_response(exc)
        return Response(VehicleSerializer(vehicle).data)


class MaintenanceDetailView(APIView):
    def get(self, request, pk):
        return get_record(Maintenance, MaintenanceSerializer, pk)

    def delete(self, request, pk):
        try:
            lifecycle.delete_maintenance(pk)
        except FleetError as exc:
            return error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)


class FuelLogListView(APIView):
    def get(self, request):
        return Response(FuelLogSerializer(FuelLog.objects.all(), many=True).data)

    def post(self, request):
        return create_record(FuelLogSerializer, request.data)


class ExpenseListView(APIView):
    def get(self, request):
        return Response(ExpenseSerializer(Expense.objects.all(), many=True).data)

    def post(self, request):
        return create_record(ExpenseSerializer, request.data)


class LedgerDetailView(APIView):
    """Fuel logs and expenses: plain records with no lifecycle of their own."""

    model = None
    serializer_class = None

    def get(self, request, pk):
        return get_record(self.model, self.serializer_class, pk)

    def patch(self, request, pk):
        try:
            return update_record(self.model, self.serializer_class, pk, request.data)
        except FleetError as exc:
            return error_response(exc)

    def delete(self, request, pk):
        deleted, _ = self.model.objects.filter(pk=pk).delete()
        if not deleted:
            return Response(
                {"error": f"{self.model.__name__} {pk} not found."}, status=status.HTTP_404_NOT_FOUND
            )
        logger.info("%s %s removed", self.model.__name__, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class FuelLogDetailView(LedgerDetailView):
    model = FuelLog
    serializer_class = FuelLogSerializer


class ExpenseDetailView(LedgerDetailView):
    model = Expense
    serializer_class = ExpenseSerializer


# -----------------------------
# Reporting
# -----------------------------
class AnalyticsView(APIView):
    def get(self, request):
        return Response(analytics.vehicle_cost_report())


class DashboardView(APIView):
    def get(self, request):
        return Response(analytics.dashboard_kpis())
