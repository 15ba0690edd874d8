from django.urls import include, path
from SeatDesk.views import HealthView

urlpatterns = [
    path('health/', HealthView.as_view(), name='health'),
    path('accounts/', include('accounts.urls')),
    path('api/admin/events/', include('events.urls')),
    path('api/admin/', include('inventory.urls')),
    path('api/admin/tickets/', include('tickets.urls')),
    path('api/admin/emails/', include('mailer.urls')),
    path('api/admin/analytics/', include('analytics.urls')),
    path('api/scanner/', include('scanner.urls')),
]
