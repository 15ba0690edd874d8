from django.urls import path
from events.views import EventView, EventDetailView

urlpatterns = [
    path('', EventView.as_view(), name='event-list'),
    path('<uuid:event_id>/', EventDetailView.as_view(), name='event-detail'),
]
