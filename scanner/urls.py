from django.urls import path
from scanner.views import VerifyQrView

urlpatterns = [
    path('verify-qr/', VerifyQrView.as_view(), name='scanner-verify-qr'),
]
