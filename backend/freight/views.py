from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from fleet.exceptions import BadInput, FleetError, NotFound
from fleet.utils import parse_number
from fleet.views import current_actor, error_response, param, require

from . import lifecycle
from .matching import ShipmentSize, rank_trucks
from .models import Shipment, Truck
from .serializers import ShipmentSerializer, TruckSerializer, candidate_payload


def resolve_user(request, user_id):
    """
    The user named by ``user_id``, falling back to the logged-in user.

    No id and no session is a missing field; an id that matches nobody is NotFound.
    """
    if user_id in (None, ""):
        actor = current_actor(request)
        if actor is None:
            raise BadInput("Missing required fields: user_id")
        return actor
    User = get_user_model()
    try:
        return User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValueError, TypeError):
        raise NotFound(f"User {user_id} not found.") from None


# -----------------------------
# Trucks
# -----------------------------
class TruckListView(APIView):
    def get(self, request):
        return Response(TruckSerializer(Truck.objects.all(), many=True).data)

    def post(self, request):
        data = request.data.copy()
        if not data.get("dealer"):
            try:
                data["dealer"] = resolve_user(request, param(data, "user_id")).pk
            except FleetError as exc:
                return error_response(exc)
        serializer = TruckSerializer(data=data)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class DealerJobsView(APIView):
    def get(self, request):
        user_id = param(request.query_params, "user_id")
        if not user_id:
            return Response({"error": "Missing User ID"}, status=status.HTTP_400_BAD_REQUEST)
        jobs = Shipment.objects.filter(
            assigned_truck__dealer_id=user_id,
            status=Shipment.Status.ASSIGNED,
        ).select_related("assigned_truck")
        return Response(ShipmentSerializer(jobs, many=True).data)


# -----------------------------
# Shipments
# -----------------------------
class RankTrucksView(APIView):
    def post(self, request):
        data = request.data
        try:
            require(data, "weight", "volume")
            size = ShipmentSize(
                total_weight=parse_number(data.get("weight"), "weight"),
                total_volume=parse_number(data.get("volume"), "volume"),
            )
        except FleetError as exc:
            return error_response(exc)
        matches = rank_trucks(size, lifecycle.available_trucks())
        return Response([candidate_payload(c) for c in matches])


def update_shipment(shipment_id, data):
    """PATCH semantics: a truck books the shipment, status DELIVERED closes it."""
    new_status = data.get("status")
    truck_id = param(data, "truck_id")
    if new_status:
        if new_status != Shipment.Status.DELIVERED:
            raise BadInput(f"Unsupported status {new_status!r}; only DELIVERED can be set directly.")
        return lifecycle.deliver_shipment(shipment_id)
    if truck_id not in (None, ""):
        return lifecycle.book_shipment(shipment_id, truck_id)
    raise BadInput("Invalid Request: provide truck_id to book or status to deliver.")


class ShipmentView(APIView):
    def post(self, request):
        data = request.data
        try:
            require(data, "origin", "destination", "weight", "volume")
            shipment, matches = lifecycle.create_shipment(
                resolve_user(request, param(data, "user_id")),
                data.get("origin"),
                data.get("destination"),
                data.get("weight"),
                data.get("volume"),
            )
        except FleetError as exc:
            return error_response(exc)
        return Response(
            {
                "shipmentId": shipment.pk,
                "matches": [candidate_payload(c) for c in matches],
            },
            status=status.HTTP_201_CREATED,
        )

    def patch(self, request):
        data = request.data
        try:
            require(data, "shipment_id")
            shipment = update_shipment(param(data, "shipment_id"), data)
        except FleetError as exc:
            return error_response(exc)
        return Response(ShipmentSerializer(shipment).data)


class ShipmentDetailView(APIView):
    def get(self, request, pk):
        shipment = Shipment.objects.select_related("assigned_truck").filter(pk=pk).first()
        if shipment is None:
            return Response({"error": "Shipment not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(ShipmentSerializer(shipment).data)

    def patch(self, request, pk):
        try:
            shipment = update_shipment(pk, request.data)
        except FleetError as exc:
            return error_response(exc)
        return Response(ShipmentSerializer(shipment).data)


class UserShipmentsView(APIView):
    def get(self, request):
        user_id = param(request.query_params, "user_id")
        if not user_id:
            return Response({"error": "Missing User ID"}, status=status.HTTP_400_BAD_REQUEST)
        shipments = Shipment.objects.filter(warehouse_id=user_id).select_related("assigned_truck")
        return Response(ShipmentSerializer(shipments, many=True).data)
