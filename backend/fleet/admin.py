from django.contrib import admin

from .models import Driver, Expense, FuelLog, Maintenance, Trip, Vehicle


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ("name", "license_plate", "max_load_capacity", "odometer", "status")
    list_filter = ("status",)


@admin.register(Driver)
class DriverAdmin(admin.ModelAdmin):
    list_display = ("name", "license_expiry", "safety_score", "status")
    list_filter = ("status",)


@admin.register(Trip)
class TripAdmin(admin.ModelAdmin):
    list_display = ("id", "vehicle", "driver", "cargo_weight", "revenue", "status", "created_at", "completed_at")
    list_filter = ("status",)
    # Trips change state only through the dispatch/complete endpoints.
    readonly_fields = ("vehicle", "driver", "cargo_weight", "status", "start_odometer", "end_odometer")


@admin.register(Maintenance)
class MaintenanceAdmin(admin.ModelAdmin):
    list_display = ("id", "vehicle", "description", "cost", "status", "date")
    list_filter = ("status",)


admin.site.register(FuelLog)
admin.site.register(Expense)
