from rest_framework import serializers

from .models import Shipment, Truck


class TruckSerializer(serializers.ModelSerializer):
    class Meta:
        model = Truck
        fields = [
            'id',
            'dealer',
            'license_plate',
            'truck_type',
            'capacity_weight',
            'capacity_volume',
            'cost_per_km',
            'fuel_efficiency',
            'is_available',
            'created_at',
        ]
        # Availability is owned by booking/delivery.
        read_only_fields = ['is_available', 'created_at']


class ShipmentSerializer(serializers.ModelSerializer):
    assigned_truck = TruckSerializer(read_only=True)

    class Meta:
        model = Shipment
        fields = [
            'id',
            'warehouse',
            'origin',
            'destination',
            'total_weight',
            'total_volume',
            'status',
            'assigned_truck',
            'estimated_cost',
            'market_cost',
            'savings',
            'co2_saved',
            'delivered_at',
            'created_at',
        ]
        read_only_fields = fields


def candidate_payload(candidate):
    """A ranked truck: its own attributes plus the match figures."""
    data = TruckSerializer(candidate.truck).data
    data['matchDetails'] = {
        'utilization': round(candidate.utilization, 1),
        'estimatedCost': candidate.estimated_cost,
        'score': candidate.score,
    }
    return data
