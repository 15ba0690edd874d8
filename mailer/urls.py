from django.urls import path
from mailer.views import BulkEmailView

urlpatterns = [
    path('bulk/', BulkEmailView.as_view(), name='emails-bulk'),
]
