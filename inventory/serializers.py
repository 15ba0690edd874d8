"""
Serializers for the seat map and auto-assign
"""
from rest_framework import serializers
from SeatDesk.utils import enum_label
from inventory.models import Seat


class SeatSerializer(serializers.ModelSerializer):
    """Seat map entry; a lapsed hold is reported as available"""
    id = serializers.UUIDField(source='seat_id', read_only=True)
    status = serializers.SerializerMethodField()

    class Meta:
        model = Seat
        fields = ['id', 'section', 'row_label', 'seat_number', 'row_idx', 'col_idx', 'status', 'reserved_until']

    def get_status(self, obj):
        return enum_label(Seat.SEAT_STATUS, obj.effective_status(self.context.get('now')))


class AutoAssignSerializer(serializers.Serializer):
    qty = serializers.IntegerField(min_value=1, error_messages={
        'required': "Quantity must be greater than zero",
        'min_value': "Quantity must be greater than zero",
        'invalid': "Quantity must be an integer",
    })
