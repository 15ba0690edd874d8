from decimal import Decimal
from rest_framework import serializers


class CreateTicketSerializer(serializers.Serializer):
    event_id = serializers.UUIDField()
    seat_id = serializers.UUIDField()
    user_email = serializers.EmailField()
    user_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0"), required=False, allow_null=True, default=None
    )
    reserved_token = serializers.CharField(max_length=64, required=False, allow_blank=True, allow_null=True)
