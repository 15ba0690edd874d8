from django.urls import path
from analytics.views import AnalyticsOverviewView, AnalyticsStreamView

urlpatterns = [
    path('overview/', AnalyticsOverviewView.as_view(), name='analytics-overview'),
    path('stream/', AnalyticsStreamView.as_view(), name='analytics-stream'),
]
