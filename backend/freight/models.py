from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Truck(models.Model):
    # Owned by a dealer; distinct from the company's own fleet.Vehicle.
    dealer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="trucks")
    license_plate = models.CharField(max_length=32)
    truck_type = models.CharField(max_length=64, blank=True)
    capacity_weight = models.FloatField(validators=[MinValueValidator(0)])
    capacity_volume = models.FloatField(validators=[MinValueValidator(0)])
    cost_per_km = models.FloatField(validators=[MinValueValidator(0)])
    # km per litre
    fuel_efficiency = models.FloatField(default=4.0, validators=[MinValueValidator(0)])
    # False exactly while assigned to an ASSIGNED shipment.
    is_available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.license_plate} ({self.truck_type or 'truck'})"


class Shipment(models.Model):
    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        ASSIGNED = "ASSIGNED", "Assigned"
        DELIVERED = "DELIVERED", "Delivered"

    warehouse = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="shipments")
    origin = models.CharField(max_length=255)
    destination = models.CharField(max_length=255)
    total_weight = models.FloatField(validators=[MinValueValidator(0)])
    total_volume = models.FloatField(validators=[MinValueValidator(0)])
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    assigned_truck = models.ForeignKey(
        Truck, on_delete=models.SET_NULL, blank=True, null=True, related_name="shipments"
    )
    # Filled in on delivery.
    estimated_cost = models.FloatField(blank=True, null=True)
    market_cost = models.FloatField(blank=True, null=True)
    savings = models.FloatField(blank=True, null=True)
    co2_saved = models.FloatField(blank=True, null=True)
    delivered_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Shipment {self.id}: {self.origin} to {self.destination}"
