from rest_framework import serializers

from apps.job.models import Job


class JobSummarySerializer(serializers.ModelSerializer):
    jobNo = serializers.CharField(source="job_number", read_only=True)
    title = serializers.CharField(source="name", read_only=True)
    customerId = serializers.UUIDField(source="customer_id", read_only=True)
    customerName = serializers.CharField(
        source="customer.name", read_only=True, default=None
    )
    vendorId = serializers.UUIDField(source="vendor_id", read_only=True)
    vendorName = serializers.CharField(source="vendor.name", read_only=True, default=None)
    sellPrice = serializers.DecimalField(
        source="sell_price", max_digits=12, decimal_places=2, read_only=True
    )
    deliveryDate = serializers.DateField(source="delivery_date", read_only=True)

    class Meta:
        model = Job
        fields = [
            "id",
            "jobNo",
            "title",
            "status",
            "customerId",
            "customerName",
            "vendorId",
            "vendorName",
            "sellPrice",
            "quantity",
            "deliveryDate",
        ]
        read_only_fields = fields
