from rest_framework import serializers

from apps.client.models import Client, ClientContact


class ClientContactSerializer(serializers.ModelSerializer):
    """Serializer for ClientContact model."""

    class Meta:
        model = ClientContact
        fields = [
            "id",
            "client",
            "name",
            "email",
            "phone",
            "position",
            "is_primary",
        ]
        read_only_fields = ["id"]


class ClientNameOnlySerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = ["id", "name"]
        read_only_fields = ["id", "name"]


class VendorSerializer(serializers.ModelSerializer):
    """Vendor as shown on an RFQ: name plus where documents go."""

    contactEmail = serializers.SerializerMethodField()

    class Meta:
        model = Client
        fields = ["id", "name", "email", "phone", "contactEmail"]
        read_only_fields = fields

    def get_contactEmail(self, obj):
        return obj.get_notification_email()
