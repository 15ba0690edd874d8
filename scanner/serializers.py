from rest_framework import serializers


class VerifyQrSerializer(serializers.Serializer):
    qr = serializers.CharField(
        trim_whitespace=False,
        error_messages={
            'required': "QR payload missing",
            'blank': "QR payload missing",
            'null': "QR payload missing",
        },
    )
