from rest_framework import serializers

from .models import Driver, Expense, FuelLog, Maintenance, Trip, Vehicle


class ChangedFieldsMixin:
    """Save only the fields a request changed, leaving lifecycle-owned columns alone."""

    def update(self, instance, validated_data):
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if validated_data:
            instance.save(update_fields=list(validated_data))
        return instance


class VehicleSerializer(ChangedFieldsMixin, serializers.ModelSerializer):
    class Meta:
        model = Vehicle
        fields = [
            'id',
            'name',
            'license_plate',
            'max_load_capacity',
            'odometer',
            'status',
            'created_at',
        ]
        # Status only changes through dispatch/completion/maintenance.
        read_only_fields = ['status', 'created_at']

    def validate_odometer(self, value):
        if self.instance is not None and value < self.instance.odometer:
            raise serializers.ValidationError(
                f"Odometer cannot go back from {self.instance.odometer:g}km to {value:g}km."
            )
        return value


class DriverSerializer(ChangedFieldsMixin, serializers.ModelSerializer):
    class Meta:
        model = Driver
        fields = [
            'id',
            'name',
            'license_number',
            'license_expiry',
            'safety_score',
            'status',
            'created_at',
        ]
        read_only_fields = ['created_at']

    def validate_status(self, value):
        # ON_TRIP is owned by the trip lifecycle.
        if value == Driver.Status.ON_TRIP:
            raise serializers.ValidationError("Drivers are put on a trip by dispatching one.")
        return value


class TripSerializer(serializers.ModelSerializer):
    vehicle = VehicleSerializer(read_only=True)
    driver = DriverSerializer(read_only=True)
    distance_km = serializers.ReadOnlyField()

    class Meta:
        model = Trip
        fields = [
            'id',
            'vehicle',
            'driver',
            'cargo_weight',
            'revenue',
            'status',
            'start_odometer',
            'end_odometer',
            'distance_km',
            'dispatched_by',
            'created_at',
            'completed_at',
        ]
        read_only_fields = fields


class MaintenanceSerializer(serializers.ModelSerializer):
    vehicle = VehicleSerializer(read_only=True)

    class Meta:
        model = Maintenance
        fields = [
            'id',
            'vehicle',
            'description',
            'cost',
            'date',
            'status',
            'resolved_at',
            'created_by',
        ]
        read_only_fields = fields


class FuelLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = FuelLog
        fields = ['id', 'vehicle', 'trip', 'liters', 'cost', 'date']
        read_only_fields = ['date']

    def validate(self, attrs):
        vehicle = attrs.get('vehicle', getattr(self.instance, 'vehicle', None))
        trip = attrs.get('trip', getattr(self.instance, 'trip', None))
        if trip is not None and vehicle is not None and trip.vehicle_id != vehicle.pk:
            raise serializers.ValidationError({'trip': f"Trip {trip.pk} was not driven by vehicle {vehicle.pk}."})
        return attrs


class ExpenseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Expense
        fields = ['id', 'vehicle', 'trip', 'category', 'amount', 'description', 'date']
        read_only_fields = ['date']
