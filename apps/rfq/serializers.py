from rest_framework import serializers

from apps.client.serializers import VendorSerializer
from apps.job.serializers import JobSummarySerializer
from apps.rfq.models import VendorQuote, VendorRFQ, VendorRFQVendor


class VendorQuoteSerializer(serializers.ModelSerializer):
    vendorId = serializers.UUIDField(source="vendor_id", read_only=True)
    vendorName = serializers.CharField(source="vendor.name", read_only=True)
    quoteAmount = serializers.DecimalField(
        source="quote_amount", max_digits=12, decimal_places=2, read_only=True
    )
    turnaroundDays = serializers.IntegerField(source="turnaround_days", read_only=True)
    isAwarded = serializers.BooleanField(source="is_awarded", read_only=True)
    respondedAt = serializers.DateTimeField(source="responded_at", read_only=True)

    class Meta:
        model = VendorQuote
        fields = [
            "id",
            "vendorId",
            "vendorName",
            "quoteAmount",
            "turnaroundDays",
            "notes",
            "status",
            "isAwarded",
            "respondedAt",
        ]
        read_only_fields = fields


class VendorRFQInviteeSerializer(serializers.ModelSerializer):
    vendor = VendorSerializer(read_only=True)
    sentAt = serializers.DateTimeField(source="sent_at", read_only=True)

    class Meta:
        model = VendorRFQVendor
        fields = ["vendor", "sentAt"]
        read_only_fields = fields


class VendorRFQSerializer(serializers.ModelSerializer):
    """
    RFQ with its invitees and quotes. Quotes are listed highest amount first.
    """

    rfqNumber = serializers.CharField(source="rfq_number", read_only=True)
    dueDate = serializers.DateField(source="due_date", read_only=True)
    sentAt = serializers.DateTimeField(source="sent_at", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    vendors = VendorRFQInviteeSerializer(source="invitees", many=True, read_only=True)
    quotes = serializers.SerializerMethodField()
    job = JobSummarySerializer(read_only=True)

    class Meta:
        model = VendorRFQ
        fields = [
            "id",
            "rfqNumber",
            "title",
            "specs",
            "dueDate",
            "notes",
            "status",
            "sentAt",
            "createdAt",
            "updatedAt",
            "vendors",
            "quotes",
            "job",
        ]
        read_only_fields = fields

    def get_quotes(self, obj: VendorRFQ):
        # Sorted here so a prefetched queryset is not re-queried
        quotes = sorted(obj.quotes.all(), key=lambda q: q.quote_amount, reverse=True)
        return VendorQuoteSerializer(quotes, many=True).data
