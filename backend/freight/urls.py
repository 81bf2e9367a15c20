from django.urls import path

from .views import (
    DealerJobsView,
    RankTrucksView,
    ShipmentDetailView,
    ShipmentView,
    TruckListView,
    UserShipmentsView,
)

urlpatterns = [
    path('trucks/', TruckListView.as_view(), name='truck-list'),
    path('trucks/jobs/', DealerJobsView.as_view(), name='dealer-jobs'),
    path('shipments/', ShipmentView.as_view(), name='shipment'),
    path('shipments/rank/', RankTrucksView.as_view(), name='shipment-rank'),
    path('shipments/user/', UserShipmentsView.as_view(), name='user-shipments'),
    path('shipments/<int:pk>/', ShipmentDetailView.as_view(), name='shipment-detail'),
]
