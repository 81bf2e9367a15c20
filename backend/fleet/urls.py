from django.urls import path

from .views import (
    AnalyticsView,
    CompleteTripView,
    DashboardView,
    DriverDetailView,
    DriverListView,
    ExpenseDetailView,
    ExpenseListView,
    FuelLogDetailView,
    FuelLogListView,
    MaintenanceDetailView,
    MaintenanceView,
    TripView,
    VehicleDetailView,
    VehicleListView,
)

urlpatterns = [
    path('vehicles/', VehicleListView.as_view(), name='vehicle-list'),
    path('vehicles/<int:pk>/', VehicleDetailView.as_view(), name='vehicle-detail'),
    path('drivers/', DriverListView.as_view(), name='driver-list'),
    path('drivers/<int:pk>/', DriverDetailView.as_view(), name='driver-detail'),
    path('trips/', TripView.as_view(), name='trip-dispatch'),
    path('trips/complete/', CompleteTripView.as_view(), name='trip-complete'),
    path('maintenance/', MaintenanceView.as_view(), name='maintenance'),
    path('maintenance/<int:pk>/', MaintenanceDetailView.as_view(), name='maintenance-detail'),
    path('fuel-logs/', FuelLogListView.as_view(), name='fuel-log-list'),
    path('fuel-logs/<int:pk>/', FuelLogDetailView.as_view(), name='fuel-log-detail'),
    path('expenses/', ExpenseListView.as_view(), name='expense-list'),
    path('expenses/<int:pk>/', ExpenseDetailView.as_view(), name='expense-detail'),
    path('analytics/', AnalyticsView.as_view(), name='analytics'),
    path('dashboard/', DashboardView.as_view(), name='dashboard'),
]
