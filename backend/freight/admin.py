from django.contrib import admin

from .models import Shipment, Truck


@admin.register(Truck)
class TruckAdmin(admin.ModelAdmin):
    list_display = ("license_plate", "dealer", "capacity_weight", "capacity_volume", "cost_per_km", "is_available")
    list_filter = ("is_available",)


@admin.register(Shipment)
class ShipmentAdmin(admin.ModelAdmin):
    list_display = ("id", "warehouse", "origin", "destination", "status", "assigned_truck", "co2_saved")
    list_filter = ("status",)
