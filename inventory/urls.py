"""
URL patterns for seat inventory
"""
from django.urls import path
from inventory.views import AutoAssignView, SeatMapView

urlpatterns = [
    path('events/<uuid:event_id>/seats/', SeatMapView.as_view(), name='seat-map'),
    path('events/<uuid:event_id>/auto-assign/', AutoAssignView.as_view(), name='auto-assign'),
]
