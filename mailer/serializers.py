from rest_framework import serializers
from mailer.models import SUBJECT_MAX_LENGTH, EmailQueue
from mailer.rendering import normalise_recipient


class BulkEmailSerializer(serializers.Serializer):
    event_id = serializers.UUIDField(error_messages={'required': "event_id is required"})
    list = serializers.ListField(
        child=serializers.JSONField(),
        allow_empty=False,
        error_messages={
            'required': "list must be a non-empty array",
            'empty': "list must be a non-empty array",
            'not_a_list': "list must be a non-empty array",
            'null': "list must be a non-empty array",
        },
    )
    subject = serializers.CharField(
        max_length=SUBJECT_MAX_LENGTH, required=False, allow_blank=True, allow_null=True, trim_whitespace=False,
    )
    bodyTemplate = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)

    def validate_list(self, value):
        recipients = [recipient for recipient in map(normalise_recipient, value) if recipient]
        if not recipients:
            raise serializers.ValidationError("No valid recipient emails were provided")
        email_field = serializers.EmailField(max_length=EmailQueue._meta.get_field('to_email').max_length)
        name_field = serializers.CharField(
            max_length=EmailQueue._meta.get_field('to_name').max_length, allow_blank=True,
        )
        for recipient in recipients:
            email_field.run_validation(recipient["email"])
            name_field.run_validation(recipient["name"])
        return recipients
