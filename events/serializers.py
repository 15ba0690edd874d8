from rest_framework import serializers
from events.models import Events, DEFAULT_CAPACITY


class EventSerializer(serializers.ModelSerializer):
    id = serializers.UUIDField(source='events_id', read_only=True)
    name = serializers.CharField(source='event_name', read_only=True)

    class Meta:
        model = Events
        fields = ['id', 'name', 'description', 'poster_url', 'starts_at', 'ends_at', 'capacity', 'created_at']


class EventBaseSerializer(serializers.Serializer):
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    poster_url = serializers.URLField(max_length=500, required=False, allow_blank=True, allow_null=True)
    starts_at = serializers.DateTimeField(required=False, allow_null=True)
    ends_at = serializers.DateTimeField(required=False, allow_null=True)
    capacity = serializers.IntegerField(min_value=0, required=False, allow_null=True)

    def validate(self, value):
        starts_at = value.get('starts_at')
        ends_at = value.get('ends_at')
        if starts_at and ends_at and starts_at >= ends_at:
            raise serializers.ValidationError("Start time must be before end time")
        return value


class PostEventSerializer(EventBaseSerializer):
    name = serializers.CharField(max_length=255, trim_whitespace=True, error_messages={
        'required': "Event name is required",
        'blank': "Event name is required",
    })

    def validate(self, value):
        value = super().validate(value)
        if value.get('capacity') is None:
            value['capacity'] = DEFAULT_CAPACITY
        return value


class PutEventSerializer(EventBaseSerializer):
    name = serializers.CharField(max_length=255, required=False, trim_whitespace=True, error_messages={
        'blank': "Event name cannot be empty",
    })
