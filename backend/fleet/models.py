from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Vehicle(models.Model):
    class Status(models.TextChoices):
        AVAILABLE = "AVAILABLE", "Available"
        ON_TRIP = "ON_TRIP", "On trip"
        IN_SHOP = "IN_SHOP", "In shop"

    name = models.CharField(max_length=255)
    license_plate = models.CharField(max_length=32, unique=True)
    # Maximum cargo in kg.
    max_load_capacity = models.FloatField(validators=[MinValueValidator(0)])
    # Kilometres; only ever moves forward (see lifecycle.complete_trip).
    odometer = models.FloatField(default=0.0, validators=[MinValueValidator(0)])
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.AVAILABLE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.name} ({self.license_plate})"


class Driver(models.Model):
    class Status(models.TextChoices):
        ON_DUTY = "ON_DUTY", "On duty"
        ON_TRIP = "ON_TRIP", "On trip"
        OFF_DUTY = "OFF_DUTY", "Off duty"
        SUSPENDED = "SUSPENDED", "Suspended"

    name = models.CharField(max_length=255)
    license_number = models.CharField(max_length=64, blank=True)
    # Compared against the current instant, not the calendar day.
    license_expiry = models.DateTimeField()
    safety_score = models.FloatField(
        default=100.0, validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.ON_DUTY)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.name


class Trip(models.Model):
    class Status(models.TextChoices):
        DISPATCHED = "DISPATCHED", "Dispatched"
        COMPLETED = "COMPLETED", "Completed"

    vehicle = models.ForeignKey(Vehicle, on_delete=models.PROTECT, related_name="trips")
    driver = models.ForeignKey(Driver, on_delete=models.PROTECT, related_name="trips")
    cargo_weight = models.FloatField(validators=[MinValueValidator(0)])
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.DISPATCHED)
    # Expected revenue, agreed at dispatch.
    revenue = models.FloatField(default=0.0, validators=[MinValueValidator(0)])
    # Odometer readings captured at dispatch and completion.
    start_odometer = models.FloatField(default=0.0)
    end_odometer = models.FloatField(blank=True, null=True)
    dispatched_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name="dispatched_trips",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    @property
    def distance_km(self):
        if self.end_odometer is None:
            return None
        return self.end_odometer - self.start_odometer

    def __str__(self):
        return f"Trip {self.id}: {self.vehicle_id} / {self.driver_id} ({self.status})"


class Maintenance(models.Model):
    class Status(models.TextChoices):
        OPEN = "OPEN", "Open"
        RESOLVED = "RESOLVED", "Resolved"

    vehicle = models.ForeignKey(Vehicle, on_delete=models.CASCADE, related_name="maintenance_logs")
    description = models.TextField()
    cost = models.FloatField(default=0.0, validators=[MinValueValidator(0)])
    date = models.DateTimeField(auto_now_add=True)
    # Identifies which ticket a release closes.
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.OPEN)
    resolved_at = models.DateTimeField(blank=True, null=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name="maintenance_tickets",
    )

    class Meta:
        ordering = ["-date", "-id"]

    def __str__(self):
        return f"Maintenance {self.id}: {self.vehicle_id} ({self.status})"


class FuelLog(models.Model):
    vehicle = models.ForeignKey(Vehicle, on_delete=models.CASCADE, related_name="fuel_logs")
    trip = models.ForeignKey(Trip, on_delete=models.SET_NULL, blank=True, null=True, related_name="fuel_logs")
    liters = models.FloatField(default=0.0, validators=[MinValueValidator(0)])
    cost = models.FloatField(default=0.0, validators=[MinValueValidator(0)])
    date = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date", "-id"]

    def __str__(self):
        return f"Fuel {self.id}: {self.liters}L for vehicle {self.vehicle_id}"


class Expense(models.Model):
    class Category(models.TextChoices):
        TOLL = "TOLL", "Toll"
        PARKING = "PARKING", "Parking"
        REPAIR = "REPAIR", "Repair"
        INSURANCE = "INSURANCE", "Insurance"
        OTHER = "OTHER", "Other"

    vehicle = models.ForeignKey(Vehicle, on_delete=models.SET_NULL, blank=True, null=True, related_name="expenses")
    trip = models.ForeignKey(Trip, on_delete=models.SET_NULL, blank=True, null=True, related_name="expenses")
    category = models.CharField(max_length=16, choices=Category.choices, default=Category.OTHER)
    amount = models.FloatField(validators=[MinValueValidator(0)])
    description = models.CharField(max_length=255, blank=True)
    date = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date", "-id"]

    def __str__(self):
        return f"{self.get_category_display()}: {self.amount}"
